from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app import config
from app.catalog import ResourceFilters
from app.database import get_db
from app.dependencies import require_user
from app.exceptions import PortalError
from app.schemas import ProfileUpdate, first_error
from app.services import branches, folders, notifications, profiles, resources
from app.session import SessionContext
from app.templating import parse_ids, redirect, render

router = APIRouter()


# --- Student dashboard ---
@router.get("/dashboard")
def dashboard(
    request: Request,
    branch: Optional[str] = None,
    semester: Optional[str] = None,
    resource_type: Optional[str] = Query(None, alias="type"),
    q: Optional[str] = None,
    folder: Optional[str] = None,
    open: Optional[str] = None,
    session: SessionContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    profile = profiles.get_profile(db, session.user.id)
    # missing parameter = profile default, empty parameter = all
    if profile is not None:
        if branch is None:
            branch = profile.branch or ""
        if semester is None:
            semester = profile.semester or ""

    filters = ResourceFilters.from_params(branch, semester, resource_type, q, folder)
    tree = folders.load_tree(db, expanded=parse_ids(open))
    if filters.folder_id:
        tree.expanded.update(a.id for a in tree.ancestors(filters.folder_id))

    return render(
        request,
        "dashboard.html",
        profile=profile,
        filters=filters,
        resources=resources.search_resources(db, filters),
        branches=branches.branch_names(db),
        tree=tree,
        selected_folder=filters.folder_id,
    )


# --- Notifications feed (public) ---
@router.get("/notifications")
def notification_feed(request: Request, db: Session = Depends(get_db)):
    items = notifications.list_notifications(db, limit=config.NOTIFICATION_FEED_LIMIT)
    return render(request, "notifications.html", notifications=items)


# --- Profile ---
@router.get("/profile")
def profile_page(request: Request, msg: Optional[str] = None, session: SessionContext = Depends(require_user), db: Session = Depends(get_db)):
    profile = profiles.get_profile(db, session.user.id)
    return render(
        request,
        "profile.html",
        profile=profile,
        branches=branches.branch_names(db),
        upload_count=resources.count_resources(db, uploaded_by=session.user.id),
        message=msg,
    )


@router.post("/profile")
def update_profile(
    request: Request,
    full_name: str = Form(""),
    branch: str = Form(""),
    semester: str = Form(""),
    session: SessionContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    try:
        data = ProfileUpdate(full_name=full_name, branch=branch, semester=semester)
        profiles.update_profile(db, session.user.id, data)
    except ValidationError as e:
        error = first_error(e)
    except PortalError as e:
        error = e.message
    else:
        return redirect("/profile", msg="Profile updated successfully!")

    return render(
        request,
        "profile.html",
        profile=profiles.get_profile(db, session.user.id),
        branches=branches.branch_names(db),
        upload_count=resources.count_resources(db, uploaded_by=session.user.id),
        error=error,
    )


@router.get("/profile/activity")
def activity_page(request: Request, session: SessionContext = Depends(require_user), db: Session = Depends(get_db)):
    uploads = resources.uploads_by(db, session.user.id)
    return render(
        request,
        "activity.html",
        profile=profiles.get_profile(db, session.user.id),
        uploads=uploads,
        upload_count=len(uploads),
    )
