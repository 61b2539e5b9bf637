import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.config import Settings, settings
from app.database import AsyncSessionLocal
from app.exception_handlers import register_exception_handlers
from app.exceptions import CacheError
from app.middleware.language import SiteLanguageMiddleware
from app.middleware.language_mode import LanguageModeMiddleware
from app.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from app.middleware.routing import PageRoutingMiddleware
from app.routes import pages
from app.services.mode_cache import ModeCache
from app.services.mode_resolver import ModeResolver
from app.services.mode_store import ModeStore
from app.utils.cache import RedisTaggedCache, TaggedCache, build_cache
from app.utils.metrics import metrics_response, set_app_info

logger = logging.getLogger(__name__)


def create_app(
    config: Settings = settings,
    session_factory=None,
    cache_backend: TaggedCache | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    ``session_factory`` and ``cache_backend`` default to the configured
    database and cache; tests pass their own.
    """
    session_factory = session_factory or AsyncSessionLocal
    cache_backend = cache_backend if cache_backend is not None else build_cache(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if isinstance(cache_backend, RedisTaggedCache):
            try:
                await cache_backend.connect()
            except CacheError as e:
                # Modes are read from the database until Redis comes back
                logger.warning("Cache: %s. Starting without Redis.", e.message)
        yield
        if isinstance(cache_backend, RedisTaggedCache):
            await cache_backend.disconnect()

    app = FastAPI(
        title=config.app_name,
        description="Per-page language mode switching for translated pages",
        debug=config.debug,
        version=config.app_version,
        lifespan=lifespan,
    )

    mode_cache = ModeCache(cache_backend, ttl=config.cache_ttl)
    resolver = ModeResolver(ModeStore(session_factory), mode_cache, automatic_mode=config.automatic_mode)

    app.state.session_factory = session_factory
    app.state.mode_cache = mode_cache
    app.state.mode_resolver = resolver

    register_exception_handlers(app)

    # Middleware is LIFO: the last one added runs first.
    # Order per request: logging → site language → page routing → mode switch
    app.add_middleware(LanguageModeMiddleware, resolver=resolver)
    app.add_middleware(PageRoutingMiddleware)
    app.add_middleware(SiteLanguageMiddleware, languages=config.site_languages)
    app.add_middleware(StructuredLoggingMiddleware)

    app.include_router(pages.api_router, prefix="/api/v1", tags=["Pages"])
    app.include_router(pages.router, tags=["Frontend"])

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok", "automatic_mode": resolver.automatic_mode}

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        return metrics_response()

    set_app_info(config.app_version, config.environment)
    logger.info("Running in %s mode (automatic_mode=%s)", config.environment, config.automatic_mode)
    if config.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)  # Logs SQL statements

    return app


setup_structured_logging(settings.log_level, json_format=settings.log_json)
app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
