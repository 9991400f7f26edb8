"""Resource catalog: listing, upload, edit, move and delete."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app import config, storage
from app.catalog import ResourceFilters
from app.exceptions import BackendError, NotFoundError, PortalValidationError, StorageError
from app.models import models
from app.schemas import ResourceEdit, ResourceUpload
from app.services.common import commit

logger = logging.getLogger(__name__)


def get_resource(db: Session, resource_id: str) -> models.Resource:
    resource = db.query(models.Resource).filter(models.Resource.id == resource_id).first()
    if resource is None:
        raise NotFoundError("Resource", resource_id)
    return resource


def search_resources(db: Session, filters: ResourceFilters) -> List[models.Resource]:
    query = filters.apply(db.query(models.Resource))
    return query.order_by(models.Resource.created_at.desc()).all()


def list_resources(db: Session) -> List[models.Resource]:
    return db.query(models.Resource).order_by(models.Resource.created_at.desc()).all()


def recent_resources(db: Session, limit: int = config.RECENT_UPLOADS_LIMIT) -> List[models.Resource]:
    return db.query(models.Resource).order_by(models.Resource.created_at.desc()).limit(limit).all()


def count_resources(db: Session, uploaded_by: Optional[str] = None) -> int:
    query = db.query(models.Resource)
    if uploaded_by:
        query = query.filter(models.Resource.uploaded_by == uploaded_by)
    return query.count()


def uploads_by(db: Session, user_id: str) -> List[models.Resource]:
    return (
        db.query(models.Resource)
        .filter(models.Resource.uploaded_by == user_id)
        .order_by(models.Resource.created_at.desc())
        .all()
    )


def upload_resource(
    db: Session,
    client,
    data: ResourceUpload,
    filename: str,
    content: bytes,
    content_type: Optional[str],
    uploaded_by: str,
) -> models.Resource:
    """Store the file first; the row is only inserted once storage succeeded."""
    if not filename or not content:
        raise PortalValidationError("Please select a file", field="file")
    storage.check_extension(filename)
    if data.folder_id and db.get(models.Folder, data.folder_id) is None:
        raise NotFoundError("Folder", data.folder_id)

    path = storage.generate_storage_key(filename)
    public_url = storage.upload_file(client, path, content, content_type)

    resource = models.Resource(
        title=data.title,
        branch=data.branch,
        semester=data.semester,
        subject_code=data.subject_code,
        type=data.type,
        file_url=public_url,
        uploaded_by=uploaded_by,
        folder_id=data.folder_id,
    )
    db.add(resource)
    try:
        commit(db, "Insert resource")
    except BackendError:
        logger.warning("Stored file %s has no resource row", path)
        raise
    db.refresh(resource)
    logger.info("Resource %s uploaded by %s as %s", resource.id, uploaded_by, path)
    return resource


def update_resource(db: Session, resource_id: str, data: ResourceEdit) -> models.Resource:
    """Only title and subject code are editable."""
    resource = get_resource(db, resource_id)
    resource.title = data.title
    resource.subject_code = data.subject_code
    commit(db, "Update resource")
    db.refresh(resource)
    return resource


def move_resource(db: Session, resource_id: str, folder_id: Optional[str]) -> models.Resource:
    resource = get_resource(db, resource_id)
    folder_id = folder_id or None
    if folder_id == resource.folder_id:
        raise PortalValidationError("Resource is already in this folder", field="folder_id")
    if folder_id is not None and db.get(models.Folder, folder_id) is None:
        raise NotFoundError("Folder", folder_id)
    resource.folder_id = folder_id
    commit(db, "Move resource")
    db.refresh(resource)
    return resource


def delete_resource(db: Session, client, resource_id: str) -> models.Resource:
    """
    Remove the stored file (best effort), then the row.

    The two calls are independent: a failed row delete does not bring the
    file back, and a failed file removal does not stop the row delete.
    """
    resource = get_resource(db, resource_id)
    path = storage.storage_path_from_url(resource.file_url)
    if path:
        try:
            storage.remove_file(client, path)
        except StorageError:
            logger.warning("Continuing delete of %s without removing %s", resource.id, path)

    db.delete(resource)
    commit(db, "Delete resource")
    logger.info("Resource %s deleted", resource_id)
    return resource
