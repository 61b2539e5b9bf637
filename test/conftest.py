"""
Pytest configuration and fixtures for the language mode switch tests

Every test that touches the database gets a fresh in-memory SQLite
database (aiosqlite) seeded with the page tree below:

    uid  l10n_parent  language  l10n_mode
    1    0            0
    2    0            0
    3    0            0
    4    0            0
    11   1            1         strict
    12   1            2         ""
    21   2            1         free
    41   4            1         ""
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Base
from app.models.content_element import ContentElement
from app.models.page import Page
from app.services.mode_cache import ModeCache
from app.services.mode_resolver import ModeResolver
from app.services.mode_store import ModeStore
from app.utils.cache import MemoryTaggedCache

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PAGES = [
    {"uid": 1, "pid": 0, "title": "Home"},
    {"uid": 2, "pid": 1, "title": "About"},
    {"uid": 3, "pid": 1, "title": "Contact"},
    {"uid": 4, "pid": 1, "title": "News"},
    {"uid": 11, "pid": 0, "title": "Startseite", "sys_language_uid": 1, "l10n_parent": 1, "l10n_mode": "strict"},
    {"uid": 12, "pid": 0, "title": "Accueil", "sys_language_uid": 2, "l10n_parent": 1, "l10n_mode": ""},
    {"uid": 21, "pid": 1, "title": "Über uns", "sys_language_uid": 1, "l10n_parent": 2, "l10n_mode": "free"},
    {"uid": 41, "pid": 1, "title": "Neuigkeiten", "sys_language_uid": 1, "l10n_parent": 4, "l10n_mode": ""},
]


@pytest.fixture
async def db_engine():
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded_pages(session_factory):
    """Insert the page tree from the module docstring."""
    async with session_factory() as session:
        session.add_all(Page(**row) for row in PAGES)
        await session.commit()


@pytest.fixture
def add_content(session_factory):
    """Factory fixture inserting one content element."""

    async def _add(pid: int, sys_language_uid: int, l18n_parent: int = 0, header: str = "Element"):
        async with session_factory() as session:
            element = ContentElement(
                pid=pid,
                sys_language_uid=sys_language_uid,
                l18n_parent=l18n_parent,
                header=header,
            )
            session.add(element)
            await session.commit()
            return element.uid

    return _add


@pytest.fixture
def memory_cache() -> MemoryTaggedCache:
    return MemoryTaggedCache(max_size=100)


@pytest.fixture
def mode_cache(memory_cache) -> ModeCache:
    return ModeCache(memory_cache)


@pytest.fixture
def mode_store(session_factory) -> ModeStore:
    return ModeStore(session_factory)


@pytest.fixture
def make_resolver(mode_store, mode_cache):
    def _make(automatic_mode: bool = False) -> ModeResolver:
        return ModeResolver(mode_store, mode_cache, automatic_mode=automatic_mode)

    return _make


@pytest.fixture
def test_settings() -> Settings:
    return Settings(automatic_mode=False, redis_url=None, log_json=False)


@pytest.fixture
def make_app(session_factory, memory_cache, test_settings):
    from main import create_app

    def _make(automatic_mode: bool = False, cache_backend=None):
        config = test_settings.model_copy(update={"automatic_mode": automatic_mode})
        backend = cache_backend if cache_backend is not None else memory_cache
        return create_app(config, session_factory=session_factory, cache_backend=backend)

    return _make


@pytest.fixture
def make_client(make_app):
    """Build an httpx AsyncClient bound to a freshly created app."""

    def _make(automatic_mode: bool = False) -> AsyncClient:
        app = make_app(automatic_mode)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _make
