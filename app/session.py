"""
Per-request session context.

The user is resolved once from the access token cookie; the role is a point
read from ``profiles`` done at most once per request and only when someone
asks for it. Handlers receive the context through dependencies instead of
calling Supabase themselves.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from app.exceptions import ConfigurationError
from app.models import models

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: Optional[str] = None


class SessionContext:
    def __init__(self, user: Optional[SessionUser], role_lookup: Callable[[str], Optional[str]] = None, token: str = None):
        self.user = user
        self.token = token
        self._role_lookup = role_lookup
        self._role = _UNSET

    @property
    def authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> Optional[str]:
        if self.user is None:
            return None
        if self._role is _UNSET:
            self._role = self._role_lookup(self.user.id) if self._role_lookup else None
        return self._role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls(None)


def resolve_user(client_factory: Callable, token: Optional[str]) -> Optional[SessionUser]:
    """Current Supabase user for `token`; a missing or rejected token is a logged-out visitor."""
    if not token:
        return None
    try:
        client = client_factory()
    except ConfigurationError as e:
        logger.error("Cannot check session token: %s", e.message)
        return None
    try:
        response = client.auth.get_user(token)
    except Exception as e:
        logger.debug("Session token rejected: %s", e)
        return None
    user = getattr(response, "user", None) if response else None
    if user is None:
        return None
    return SessionUser(id=str(user.id), email=getattr(user, "email", None))


def role_lookup_for(session_factory: Callable) -> Callable[[str], Optional[str]]:
    def lookup(user_id: str) -> Optional[str]:
        db = session_factory()
        try:
            profile = db.query(models.Profile).filter(models.Profile.id == user_id).first()
            return profile.role if profile else None
        finally:
            db.close()

    return lookup
