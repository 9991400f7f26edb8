import os
from typing import Iterable, List, Optional
from urllib.parse import parse_qsl, urlencode

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from app import config

script_dir = os.path.dirname(__file__)
templates = Jinja2Templates(directory=os.path.join(script_dir, "templates"))
templates.env.globals.update(
    SEMESTERS=config.SEMESTERS,
    RESOURCE_TYPES=config.RESOURCE_TYPES,
    NOTIFICATION_TYPES=config.NOTIFICATION_TYPES,
    FOLDER_COLORS=config.FOLDER_COLORS,
)


def render(request: Request, name: str, status_code: int = 200, **context):
    context.setdefault("session", getattr(request.state, "session", None))
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def redirect(url: str, **params) -> RedirectResponse:
    query = {k: v for k, v in params.items() if v not in (None, "")}
    if query:
        url = f"{url}?{urlencode(query)}"
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def redirect_back(url: str, return_query: Optional[str] = None, **params) -> RedirectResponse:
    """
    Redirect to `url` with the view the form was posted from.

    `return_query` is the page's query string; `params` override it and a
    None or blank value drops the key. Old messages are never carried over.
    """
    query = {k: v for k, v in parse_qsl(return_query or "") if k not in ("msg", "error")}
    for key, value in params.items():
        if value in (None, ""):
            query.pop(key, None)
        else:
            query[key] = value
    return redirect(url, **query)


def page_url(base_url: str, params: Optional[dict] = None, **extra) -> str:
    """Link to `base_url` keeping `params` (blank values too) plus non-blank `extra`."""
    query = dict(params or {})
    query.update({k: v for k, v in extra.items() if v not in (None, "")})
    return f"{base_url}?{urlencode(query)}" if query else base_url


def parse_ids(value: Optional[str]) -> List[str]:
    """`open=a,b,c` -> ["a", "b", "c"]"""
    return [v for v in (value or "").split(",") if v]


def join_ids(ids: Iterable[str]) -> str:
    return ",".join(ids)


templates.env.globals["join_ids"] = join_ids
templates.env.globals["page_url"] = page_url
