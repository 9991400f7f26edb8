from typing import Optional

from fastapi import APIRouter, Depends, Form
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_admin
from app.exceptions import PortalError
from app.schemas import FolderCreate, first_error
from app.services import folders
from app.session import SessionContext
from app.templating import redirect_back

router = APIRouter(prefix="/admin/folders", dependencies=[Depends(require_admin)])

MANAGE_URL = "/admin/manage"


@router.post("")
def create_folder(
    name: str = Form(""),
    parent_id: str = Form(""),
    color: str = Form("#135bec"),
    return_query: str = Form(""),
    session: SessionContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        folder = folders.create_folder(db, FolderCreate(name=name, parent_id=parent_id, color=color), session.user.id)
    except ValidationError as e:
        return redirect_back(MANAGE_URL, return_query, error=first_error(e))
    except PortalError as e:
        return redirect_back(MANAGE_URL, return_query, error=e.message)
    # the new folder becomes the selection
    return redirect_back(MANAGE_URL, return_query, folder=folder.id, page=None, msg=f"Folder '{folder.name}' created")


@router.post("/{folder_id}/rename")
def rename_folder(folder_id: str, name: str = Form(""), return_query: str = Form(""), db: Session = Depends(get_db)):
    try:
        folders.rename_folder(db, folder_id, name)
    except PortalError as e:
        return redirect_back(MANAGE_URL, return_query, folder=folder_id, error=e.message)
    return redirect_back(MANAGE_URL, return_query, folder=folder_id)


@router.post("/{folder_id}/move")
def move_folder(folder_id: str, parent_id: str = Form(""), return_query: str = Form(""), db: Session = Depends(get_db)):
    try:
        folders.move_folder(db, folder_id, parent_id or None)
    except PortalError as e:
        return redirect_back(MANAGE_URL, return_query, folder=folder_id, error=e.message)
    return redirect_back(MANAGE_URL, return_query, folder=folder_id)


@router.post("/{folder_id}/delete")
def delete_folder(
    folder_id: str,
    selected: Optional[str] = Form(None),
    return_query: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        selected = folders.delete_folder(db, folder_id, selected)
    except PortalError as e:
        return redirect_back(MANAGE_URL, return_query, folder=selected, error="Failed to delete folder: " + e.message)
    return redirect_back(MANAGE_URL, return_query, folder=selected, page=None, msg="Folder deleted")
