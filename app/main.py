from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import currencies, health, sessions, ui
from .services.errors import ConversionError
from .services.rates.assets import AssetResolver
from .services.session_store import SessionStore, build_session_store

logger = logging.getLogger("app")


def create_app(
    settings_override: Settings | None = None,
    store_override: SessionStore | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., static provider). Falls back to cached get_settings().
    store_override: inject a pre-built SessionStore (e.g., with a fake provider).
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    store = store_override or build_session_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("rate provider: %s", store.provider.name)
        yield
        await store.aclose()

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_store = store
    app.state.assets = AssetResolver(settings.flag_cdn_base_url)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(ConversionError, errors.conversion_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(currencies.router)
    app.include_router(sessions.router)
    app.include_router(ui.router)

    @app.get("/")
    async def root():
        return {"message": "Currency Converter API", "version": settings.version}

    return app


app = create_app()
