"""Account operations delegated to Supabase auth."""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.exceptions import AuthenticationError, BackendError
from app.logging_config import log_auth_event
from app.schemas import SignUpForm
from app.services import profiles

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    user_id: Optional[str]
    access_token: Optional[str]

    @property
    def signed_in(self) -> bool:
        return bool(self.access_token)


def _token(response) -> Optional[str]:
    session = getattr(response, "session", None)
    return getattr(session, "access_token", None) if session else None


def sign_up(client, db: Session, form: SignUpForm) -> AuthResult:
    try:
        response = client.auth.sign_up({
            "email": form.email,
            "password": form.password,
            "options": {"data": {"full_name": form.full_name}},
        })
    except Exception as e:
        log_auth_event(logger, "sign_up", False, form.email, str(e))
        raise AuthenticationError(str(e)) from e

    user = getattr(response, "user", None)
    if user is None:
        raise AuthenticationError("Sign up did not return a user")
    profiles.ensure_profile(db, str(user.id), form.full_name)
    log_auth_event(logger, "sign_up", True, form.email)
    return AuthResult(user_id=str(user.id), access_token=_token(response))


def sign_in(client, email: str, password: str) -> AuthResult:
    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        log_auth_event(logger, "sign_in", False, email, str(e))
        raise AuthenticationError(str(e)) from e

    token = _token(response)
    if not token:
        raise AuthenticationError("Invalid email or password")
    log_auth_event(logger, "sign_in", True, email)
    return AuthResult(user_id=str(response.user.id), access_token=token)


def send_password_reset(client, email: str, redirect_to: str) -> None:
    try:
        client.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
    except Exception as e:
        logger.error("Password reset for %s failed: %s", email, e)
        raise BackendError(str(e), operation="reset_password") from e
    logger.info("Password reset email requested for %s", email)
