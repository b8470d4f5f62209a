"""
Main entrypoint for the Memo API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app`` so it can be served
with::

    uvicorn memo_api.app.main:app --reload

The dependency container (and with it the database) is created by
the application lifespan, not at import time.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.endpoints import health
from .api.v1.endpoints.memos import TOTAL_COUNT_HEADER
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.container import setup_container
from .core.exceptions import LifecycleError, MemoError, StorageError, ValidationError
from .core.logging_config import setup_logging
from .schemas.memo import ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (LifecycleError, status.HTTP_409_CONFLICT),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    body = ErrorResponse(message=message, errors=list(errors or []))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def memo_error_handler(request: Request, exc: MemoError) -> JSONResponse:
    for error_cls, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return _error_response(status_code, exc.message, exc.errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request.", errors)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Requested resource not found."
    return _error_response(exc.status_code, str(message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the ones read from the environment
        at import time.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        container = setup_container(app_settings)
        database = container.resolve("database")
        container.validate_dependencies()
        app.state.container = container
        app.state.started_at = time.monotonic()
        try:
            yield
        finally:
            database.close()

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=[TOTAL_COUNT_HEADER],
    )

    if app_settings.debug:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            logger.debug("%s %s", request.method, request.url.path)
            return await call_next(request)

    app.add_exception_handler(MemoError, memo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(health.router, prefix="/health", tags=["system"])

    @app.get("/swagger.json", include_in_schema=False)
    async def swagger_json() -> dict:
        return app.openapi()

    return app


app = create_app()
