from fastapi import Depends, Request

from app.exceptions import AuthenticationError, AuthorizationError
from app.session import SessionContext


def get_session(request: Request) -> SessionContext:
    # set by RouteGuardMiddleware; anonymous when the guard did not run
    return getattr(request.state, "session", None) or SessionContext.anonymous()


def require_user(session: SessionContext = Depends(get_session)) -> SessionContext:
    if not session.authenticated:
        raise AuthenticationError("You must be logged in")
    return session


def require_admin(session: SessionContext = Depends(require_user)) -> SessionContext:
    if not session.is_admin:
        raise AuthorizationError("Admin access required")
    return session
