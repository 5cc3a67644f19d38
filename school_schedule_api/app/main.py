"""
Main entrypoint for the School Schedule API.

This module assembles the FastAPI application: logging, CORS, request
logging, error handlers, routers and the record store lifecycle.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app`` so it can be served
with uvicorn::

    uvicorn school_schedule_api.app.main:app --reload
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.errors import SchedulingError
from .core.logging_config import setup_logging
from .core.store import RecordStore, build_store


logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": <message>}``."""

    @app.exception_handler(SchedulingError)
    async def scheduling_error_handler(_: Request, exc: SchedulingError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Store failure: %s", exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Rota não encontrada"
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = "Método não permitido"
        else:
            message = str(exc.detail)
        return _error(exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "Requisição inválida"
        errors = exc.errors()
        if errors:
            field = ".".join(
                part for part in errors[0].get("loc", ()) if isinstance(part, str) and part != "body"
            )
            detail = errors[0].get("msg", "")
            message = f"{message}: {field} {detail}".strip() if field else f"{message}: {detail}"
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro interno do servidor")


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.
    store : Optional[RecordStore]
        Record store to use instead of the one selected by the settings.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    # Initialise logging before anything else so that the setup below
    # can safely log messages.
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)
    app.state.settings = app_settings
    app.state.store = store or build_store(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

    register_exception_handlers(app)

    # Resources are served at the root (``/materias``, ``/aulas``...).
    app.include_router(v1_router)

    @app.on_event("startup")
    def open_store() -> None:
        app.state.store.open()
        logger.info("Using %s store", app.state.store.backend)

    @app.on_event("shutdown")
    def close_store() -> None:
        app.state.store.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
