from fastapi import Request
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base
from app.config import settings
import logging

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    if settings.database_url.startswith("sqlite"):
        return {"echo": settings.debug}
    # Environment-based configurations
    if settings.environment == "production":
        return {
            "pool_size": 20,
            "max_overflow": 50,
            "pool_timeout": 60,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        }
    return {
        "echo": settings.debug,  # Enable query logging in debug mode
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
    }


engine = create_async_engine(settings.database_url, **_engine_options())

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db(request: Request):
    # create_app() may bind a different session factory (tests, workers)
    session_factory = getattr(request.app.state, "session_factory", AsyncSessionLocal)
    async with session_factory() as db:
        try:
            yield db
        except Exception as e:
            logger.error("Database session error: %s", e)
            await db.rollback()
            raise
