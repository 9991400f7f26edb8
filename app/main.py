import os
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.database import engine
from app.exceptions import AuthenticationError, PortalError
from app.guard import RouteGuardMiddleware
from app.logging_config import setup_logging
from app.models import models
from app.routers import admin, folders, pages, portal
from app.templating import redirect

setup_logging()
logger = logging.getLogger(__name__)

# 1. Create tables if they do not exist yet
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Engineering Resource Portal")

# 2. Static files, resolved relative to this file
script_dir = os.path.dirname(__file__)
static_abs_path = os.path.join(script_dir, "static")

if not os.path.isdir(static_abs_path):
    os.makedirs(static_abs_path)

app.mount("/static", StaticFiles(directory=static_abs_path), name="static")

# 3. Every page request passes the route guard first
app.add_middleware(RouteGuardMiddleware)

# 4. Routes
app.include_router(pages.router)
app.include_router(portal.router)
app.include_router(admin.router)
app.include_router(folders.router)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    if isinstance(exc, AuthenticationError) and request.method == "GET":
        return redirect("/login")
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
