"""
Resource catalog filters.

The dashboard pushes filters into the SQL query; the admin manage page
fetches everything once and filters in memory with the same rules. Both
combine filters with AND; search matches title OR subject code.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Query

from app.config import RESOURCE_TYPES, SEMESTERS
from app.models import models


def _like_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def parse_semester(value) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        semester = int(value)
    except (TypeError, ValueError):
        return None
    return semester if semester in SEMESTERS else None


@dataclass(frozen=True)
class ResourceFilters:
    branch: Optional[str] = None
    semester: Optional[int] = None
    type: Optional[str] = None
    search: Optional[str] = None
    folder_id: Optional[str] = None

    @classmethod
    def from_params(cls, branch=None, semester=None, type=None, search=None, folder_id=None) -> "ResourceFilters":
        """Blank or unknown values mean "no filter"."""
        search = (search or "").strip() or None
        return cls(
            branch=(branch or "").strip() or None,
            semester=parse_semester(semester),
            type=type if type in RESOURCE_TYPES else None,
            search=search,
            folder_id=folder_id or None,
        )

    def as_query(self) -> Dict[str, str]:
        """Filter values as page parameters; blank values are kept so "all" survives a reload."""
        return {
            "q": self.search or "",
            "branch": self.branch or "",
            "semester": str(self.semester) if self.semester else "",
            "type": self.type or "",
        }

    def apply(self, query: Query) -> Query:
        R = models.Resource
        if self.branch:
            query = query.filter(R.branch == self.branch)
        if self.semester:
            query = query.filter(R.semester == self.semester)
        if self.type:
            query = query.filter(R.type == self.type)
        if self.folder_id:
            query = query.filter(R.folder_id == self.folder_id)
        if self.search:
            pattern = f"%{_like_escape(self.search)}%"
            query = query.filter(or_(
                R.title.ilike(pattern, escape="\\"),
                R.subject_code.ilike(pattern, escape="\\"),
            ))
        return query

    def matches(self, resource: Any) -> bool:
        if self.search:
            needle = self.search.lower()
            if needle not in (resource.title or "").lower() and needle not in (resource.subject_code or "").lower():
                return False
        if self.branch and resource.branch != self.branch:
            return False
        if self.semester and resource.semester != self.semester:
            return False
        if self.type and resource.type != self.type:
            return False
        if self.folder_id and resource.folder_id != self.folder_id:
            return False
        return True

    def filter(self, resources: Sequence[Any]) -> List[Any]:
        return [r for r in resources if self.matches(r)]


@dataclass(frozen=True)
class Page:
    items: List[Any]
    number: int
    size: int
    total: int

    @property
    def pages(self) -> int:
        return max(1, math.ceil(self.total / self.size))

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.pages


def paginate(items: Sequence[Any], page: int, size: int) -> Page:
    """Slice an already fetched list; out of range pages are clamped."""
    total = len(items)
    pages = max(1, math.ceil(total / size))
    number = min(max(1, page or 1), pages)
    start = (number - 1) * size
    return Page(items=list(items[start:start + size]), number=number, size=size, total=total)
