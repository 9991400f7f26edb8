import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app import config
from app.database import get_db
from app.exceptions import PortalError
from app.schemas import SignUpForm, first_error
from app.services import auth
from app.supabase_client import get_supabase
from app.templating import render

logger = logging.getLogger(__name__)

router = APIRouter()


def _signed_in_response(token: str) -> RedirectResponse:
    response = RedirectResponse(url="/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=config.SESSION_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        secure=config.COOKIE_SECURE,
    )
    return response


# Home
@router.get("/")
def read_root(request: Request):
    return render(request, "index.html")


# --- Login & logout ---
@router.get("/login", name="login_page")
def login_page(request: Request):
    return render(request, "login.html")


@router.post("/login")
def login_user(request: Request, email: str = Form(...), password: str = Form(...), client=Depends(get_supabase)):
    try:
        result = auth.sign_in(client, email, password)
    except PortalError as e:
        return render(request, "login.html", error=e.message, email=email)
    return _signed_in_response(result.access_token)


@router.get("/logout")
def logout():
    response = RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(config.SESSION_COOKIE)
    return response


# --- Sign up ---
@router.get("/signup")
def signup_page(request: Request):
    return render(request, "signup.html")


@router.post("/signup")
def signup(
    request: Request,
    full_name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
    client=Depends(get_supabase),
):
    try:
        form = SignUpForm(full_name=full_name, email=email, password=password)
    except ValidationError as e:
        return render(request, "signup.html", error=first_error(e), full_name=full_name, email=email)

    try:
        result = auth.sign_up(client, db, form)
    except PortalError as e:
        return render(request, "signup.html", error=e.message, full_name=full_name, email=email)

    if not result.signed_in:
        # email confirmation is switched on in Supabase
        return render(request, "signup.html", confirm_email=True, email=form.email)
    return _signed_in_response(result.access_token)


# --- Forgot password ---
@router.get("/forgot-password")
def forgot_password_page(request: Request):
    return render(request, "forgot_password.html")


@router.post("/forgot-password")
def forgot_password(request: Request, email: str = Form(...), client=Depends(get_supabase)):
    redirect_to = config.PASSWORD_RESET_REDIRECT or str(request.url_for("login_page"))
    try:
        auth.send_password_reset(client, email, redirect_to)
    except PortalError as e:
        return render(request, "forgot_password.html", error=e.message, email=email)
    return render(request, "forgot_password.html", success=True, email=email)
