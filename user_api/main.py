import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models  # noqa: F401 - ensure models are registered
from .config import settings
from .database import Base, engine
from .middleware import (
    AccessGateMiddleware,
    ExceptionBoundaryMiddleware,
    RequestLoggingMiddleware,
)
from .routers import pages, users

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Create, read, update and delete user records.",
    docs_url="/swagger",
    redoc_url=None,
    openapi_url="/api-docs/openapi.json",
)

# Middleware added last runs first, so on the way in the order is:
# exception boundary -> access gate -> request logging -> CORS -> routes.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware, logger=logging.getLogger("user_api.requests"))
app.add_middleware(AccessGateMiddleware, logger=logging.getLogger("user_api.access"))
app.add_middleware(ExceptionBoundaryMiddleware, logger=logging.getLogger("user_api.errors"))


@app.on_event("startup")
def on_startup() -> None:
    """Create tables so the app is immediately usable."""
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Report the first problem only, in the same {"error": ...} shape as
    # every other client error.
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return JSONResponse(
        {"error": f"{location}: {first['msg']}"},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


app.include_router(pages.router)
app.include_router(users.router)


def run() -> None:
    uvicorn.run("user_api.main:app", host=settings.host, port=settings.port)
