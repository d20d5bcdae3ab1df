"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from library_catalog import __version__
from library_catalog.api.http.app_data import ApplicationDependencies
from library_catalog.api.http.routers import books_router, health_router, index_router
from library_catalog.api.http.templating import (
    STATIC_DIR,
    create_templates,
    render_error_page,
)
from library_catalog.api.utils.app_startup import configure_logging
from library_catalog.core.errors import SERVER_ERROR_MESSAGE
from library_catalog.core.services import DbManageService, DbSessionService
from library_catalog.runtime.config.config_data import ConfigData
from library_catalog.runtime.context import get_config


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next) -> Response:
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            # Anything the routes did not handle becomes the generic error page
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return render_error_page(
                request,
                500,
                SERVER_ERROR_MESSAGE,
                headers={"X-Request-ID": request_id},
            )


# --- Error pages ---
async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Render every HTTP error (including unknown routes) as an HTML page."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return render_error_page(request, exc.status_code, message, headers=exc.headers)


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    config: ConfigData = app.state.config
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config)
    if config.database.create_tables:
        DbManageService(database_service.engine).create_all()

    app.state.app_dependencies = ApplicationDependencies(
        config=config,
        database_service=database_service,
        templates=app.state.templates,
    )


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the catalog application for ``config`` (the current config by default)."""
    config = config or get_config()
    configure_logging(config)

    is_production = config.app.environment == "production"
    app = FastAPI(
        title=config.app.title,
        version=__version__,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.config = config
    app.state.templates = create_templates(config)

    app.add_middleware(SecurityHeadersMiddleware)
    app.middleware("http")(log_requests)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # --- Router registration ---
    app.include_router(index_router)
    app.include_router(books_router)
    app.include_router(health_router)

    return app


app = create_app()

# expose startup for tests
__all__ = ["app", "create_app", "startup", "shutdown"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
