from typing import List

from sqlalchemy.orm import Session

from app.config import DEFAULT_BRANCHES
from app.exceptions import NotFoundError
from app.models import models
from app.schemas import BranchCreate
from app.services.common import commit


def list_branches(db: Session) -> List[models.Branch]:
    return db.query(models.Branch).order_by(models.Branch.name).all()


def branch_names(db: Session) -> List[str]:
    """Names for filter dropdowns, falling back to the built-in list."""
    names = [b.name for b in list_branches(db)]
    return names or list(DEFAULT_BRANCHES)


def add_branch(db: Session, data: BranchCreate) -> models.Branch:
    branch = models.Branch(name=data.name)
    db.add(branch)
    commit(db, "Add branch", conflict_message=f"Branch '{data.name}' already exists")
    db.refresh(branch)
    return branch


def delete_branch(db: Session, branch_id: str) -> None:
    # resources keep their branch text
    branch = db.get(models.Branch, branch_id)
    if branch is None:
        raise NotFoundError("Branch", branch_id)
    db.delete(branch)
    commit(db, "Delete branch")
