"""Folder CRUD; every write goes through the ancestry checks in FolderTree."""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.exceptions import FolderCycleError, NotFoundError, PortalValidationError
from app.folder_tree import FolderTree
from app.models import models
from app.schemas import FolderCreate
from app.services.common import commit

logger = logging.getLogger(__name__)


def list_folders(db: Session) -> List[models.Folder]:
    return db.query(models.Folder).order_by(models.Folder.name).all()


def load_tree(db: Session, expanded: Iterable[str] = ()) -> FolderTree:
    return FolderTree(list_folders(db), expanded=expanded)


def get_folder(db: Session, folder_id: str) -> models.Folder:
    folder = db.get(models.Folder, folder_id)
    if folder is None:
        raise NotFoundError("Folder", folder_id)
    return folder


def create_folder(db: Session, data: FolderCreate, created_by: str) -> models.Folder:
    if data.parent_id is not None:
        get_folder(db, data.parent_id)
    folder = models.Folder(
        name=data.name,
        parent_id=data.parent_id,
        color=data.color,
        created_by=created_by,
    )
    db.add(folder)
    commit(db, "Create folder")
    db.refresh(folder)
    logger.info("Folder %s created under %s", folder.id, folder.parent_id or "root")
    return folder


def rename_folder(db: Session, folder_id: str, name: str) -> models.Folder:
    name = (name or "").strip()
    if not name:
        raise PortalValidationError("Folder name cannot be empty", field="name")
    folder = get_folder(db, folder_id)
    folder.name = name
    commit(db, "Rename folder")
    db.refresh(folder)
    return folder


def move_folder(db: Session, folder_id: str, parent_id: Optional[str]) -> models.Folder:
    parent_id = parent_id or None
    tree = load_tree(db)
    if folder_id not in tree:
        raise NotFoundError("Folder", folder_id)
    if parent_id is not None and parent_id not in tree:
        raise NotFoundError("Folder", parent_id)
    if not tree.can_move(folder_id, parent_id):
        raise FolderCycleError(folder_id, parent_id)

    folder = get_folder(db, folder_id)
    folder.parent_id = parent_id
    commit(db, "Move folder")
    db.refresh(folder)
    return folder


def delete_folder(db: Session, folder_id: str, selected: Optional[str] = None) -> Optional[str]:
    """
    Delete one folder row and return the selection to show next.

    Subfolders and resources inside are left to the database's foreign
    key rules.
    """
    folder = get_folder(db, folder_id)
    db.delete(folder)
    commit(db, "Delete folder")
    logger.info("Folder %s deleted", folder_id)
    return None if selected == folder_id else selected
