from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app import config
from app.catalog import ResourceFilters, paginate
from app.database import get_db
from app.dependencies import require_admin
from app.exceptions import PortalError
from app.schemas import BranchCreate, NotificationCreate, ResourceEdit, ResourceUpload, first_error
from app.services import branches, folders, notifications, profiles, resources
from app.session import SessionContext
from app.supabase_client import get_supabase
from app.templating import join_ids, parse_ids, redirect, redirect_back, render

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])

MANAGE_URL = "/admin/manage"


# --- Admin dashboard ---
@router.get("/dashboard")
def admin_dashboard(request: Request, db: Session = Depends(get_db)):
    return render(
        request,
        "admin/dashboard.html",
        total_resources=resources.count_resources(db),
        total_users=profiles.count_profiles(db),
        recent_uploads=resources.recent_resources(db),
    )


# --- Manage resources ---
@router.get("/manage")
def manage_resources(
    request: Request,
    q: Optional[str] = None,
    branch: Optional[str] = None,
    semester: Optional[str] = None,
    resource_type: Optional[str] = Query(None, alias="type"),
    folder: Optional[str] = None,
    page: int = 1,
    open: Optional[str] = None,
    msg: Optional[str] = None,
    error: Optional[str] = None,
    db: Session = Depends(get_db),
):
    # everything is fetched once and filtered here, not in SQL
    filters = ResourceFilters.from_params(branch, semester, resource_type, q, folder)
    matching = filters.filter(resources.list_resources(db))
    tree = folders.load_tree(db, expanded=parse_ids(open))
    if filters.folder_id:
        tree.expanded.update(a.id for a in tree.ancestors(filters.folder_id))
    current = paginate(matching, page, config.ADMIN_PAGE_SIZE)

    # forms post this back so the redirect lands on the same view
    view_query = dict(filters.as_query(), folder=filters.folder_id or "", open=join_ids(sorted(tree.expanded)))
    return_query = urlencode({k: v for k, v in dict(view_query, page=str(current.number)).items() if v})

    return render(
        request,
        "admin/manage.html",
        filters=filters,
        page=current,
        view_query=view_query,
        return_query=return_query,
        branches=branches.branch_names(db),
        tree=tree,
        selected_folder=filters.folder_id,
        message=msg,
        error=error,
    )


@router.post("/manage/{resource_id}/edit")
def edit_resource(
    resource_id: str,
    title: str = Form(""),
    subject_code: str = Form(""),
    return_query: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        resources.update_resource(db, resource_id, ResourceEdit(title=title, subject_code=subject_code))
    except ValidationError as e:
        return redirect_back(MANAGE_URL, return_query, error=first_error(e))
    except PortalError as e:
        return redirect_back(MANAGE_URL, return_query, error=e.message)
    return redirect_back(MANAGE_URL, return_query, msg="Resource updated successfully")


@router.post("/manage/{resource_id}/delete")
def delete_resource(
    resource_id: str,
    return_query: str = Form(""),
    db: Session = Depends(get_db),
    client=Depends(get_supabase),
):
    try:
        resources.delete_resource(db, client, resource_id)
    except PortalError as e:
        return redirect_back(MANAGE_URL, return_query, error=e.message)
    return redirect_back(MANAGE_URL, return_query, msg="Resource deleted successfully")


@router.post("/manage/{resource_id}/move")
def move_resource(
    resource_id: str,
    folder_id: str = Form(""),
    return_query: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        resources.move_resource(db, resource_id, folder_id or None)
    except PortalError as e:
        return redirect_back(MANAGE_URL, return_query, error=e.message)
    return redirect_back(MANAGE_URL, return_query, msg="Resource moved")


# --- Upload ---
@router.get("/upload")
def upload_page(request: Request, db: Session = Depends(get_db)):
    return render(
        request,
        "admin/upload.html",
        branches=branches.branch_names(db),
        folders=list(folders.load_tree(db).walk()),
        form={},
    )


@router.post("/upload")
async def upload_resource(
    request: Request,
    title: str = Form(""),
    branch: str = Form(""),
    semester: str = Form(""),
    subject_code: str = Form(""),
    type: str = Form("Notes"),
    folder_id: str = Form(""),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    client=Depends(get_supabase),
    session: SessionContext = Depends(require_admin),
):
    form = {"title": title, "branch": branch, "semester": semester, "subject_code": subject_code, "type": type, "folder_id": folder_id}
    error = None
    try:
        data = ResourceUpload(**form)
        content = await file.read() if file is not None else b""
        filename = file.filename if file is not None else ""
        content_type = file.content_type if file is not None else None
        await run_in_threadpool(
            resources.upload_resource, db, client, data, filename, content, content_type, session.user.id
        )
    except ValidationError as e:
        error = first_error(e)
    except PortalError as e:
        error = e.message

    page_context = {
        "branches": branches.branch_names(db),
        "folders": list(folders.load_tree(db).walk()),
    }
    if error:
        return render(request, "admin/upload.html", error=error, form=form, **page_context)
    # keep academic info for the next upload, clear the rest
    kept = {"branch": branch, "semester": semester, "type": type, "folder_id": folder_id}
    return render(request, "admin/upload.html", message="Resource uploaded successfully!", form=kept, **page_context)


# --- Branches ---
@router.get("/branches")
def branches_page(request: Request, error: Optional[str] = None, db: Session = Depends(get_db)):
    return render(request, "admin/branches.html", branches=branches.list_branches(db), error=error)


@router.post("/branches")
def add_branch(name: str = Form(""), db: Session = Depends(get_db)):
    try:
        branches.add_branch(db, BranchCreate(name=name))
    except ValidationError:
        return redirect("/admin/branches", error="Branch name cannot be empty")
    except PortalError as e:
        return redirect("/admin/branches", error=e.message)
    return redirect("/admin/branches")


@router.post("/branches/{branch_id}/delete")
def delete_branch(branch_id: str, db: Session = Depends(get_db)):
    try:
        branches.delete_branch(db, branch_id)
    except PortalError as e:
        return redirect("/admin/branches", error=e.message)
    return redirect("/admin/branches")


# --- Broadcast notifications ---
@router.get("/notifications")
def notifications_page(request: Request, error: Optional[str] = None, db: Session = Depends(get_db)):
    return render(request, "admin/notifications.html", notifications=notifications.list_notifications(db), error=error)


@router.post("/notifications")
def create_notification(
    message: str = Form(""),
    type: str = Form("info"),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(require_admin),
):
    try:
        notifications.create_notification(db, NotificationCreate(message=message, type=type), session.user.id)
    except ValidationError as e:
        return redirect("/admin/notifications", error=first_error(e))
    except PortalError as e:
        return redirect("/admin/notifications", error=f"Failed to create notification: {e.message}")
    return redirect("/admin/notifications")


@router.post("/notifications/{notification_id}/delete")
def delete_notification(notification_id: str, db: Session = Depends(get_db)):
    try:
        notifications.delete_notification(db, notification_id)
    except PortalError as e:
        return redirect("/admin/notifications", error=e.message)
    return redirect("/admin/notifications")
