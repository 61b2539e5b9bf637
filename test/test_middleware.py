"""
Tests for middleware modules

Site language detection, page routing and the language mode switch,
both in isolation and wired together by create_app().
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from app.config import DEFAULT_SITE_LANGUAGES, SiteLanguageConfig
from app.database import Base
from app.exceptions import StorageError
from app.i18n.mode import LanguageMode
from app.middleware.language import SiteLanguageMiddleware
from app.middleware.language_mode import LanguageModeMiddleware
from app.middleware.routing import PageRoutingMiddleware, extract_page_id


def _echo_app(resolver=None) -> FastAPI:
    """Minimal app exposing what the middleware chain put on request.state."""
    app = FastAPI()

    @app.get("/{path:path}")
    async def echo(request: Request):
        routing = request.state.routing
        return {
            "page_id": routing.page_id if routing else None,
            **request.state.language.to_dict(),
        }

    if resolver is not None:
        app.add_middleware(LanguageModeMiddleware, resolver=resolver)
    app.add_middleware(PageRoutingMiddleware)
    app.add_middleware(SiteLanguageMiddleware, languages=DEFAULT_SITE_LANGUAGES)
    return app


class TestExtractPageId:
    @pytest.mark.parametrize(
        "path, query_id, expected",
        [
            ("/page/4", None, 4),
            ("/de/page/4", None, 4),
            ("/de/page/4/", None, 4),
            ("/", "7", 7),
            ("/", "abc", None),
            ("/", None, None),
            ("/page/0", None, None),
            ("/pages/4", None, None),
        ],
    )
    def test_extract(self, path, query_id, expected):
        assert extract_page_id(path, query_id) == expected


class TestSiteLanguageMiddleware:
    def test_default_language(self):
        client = TestClient(_echo_app())

        data = client.get("/page/1").json()

        assert data["language_id"] == 0
        assert data["base"] == "/"

    def test_language_from_base(self):
        client = TestClient(_echo_app())

        data = client.get("/de/page/1").json()

        assert data["language_id"] == 1
        assert data["locale"] == "de_DE.UTF-8"
        assert data["page_id"] == 1

    def test_base_without_trailing_slash(self):
        client = TestClient(_echo_app())

        assert client.get("/fr").json()["language_id"] == 2

    def test_longest_base_wins(self):
        languages = [
            *DEFAULT_SITE_LANGUAGES,
            SiteLanguageConfig(language_id=3, locale="de_CH.UTF-8", base="/de/ch/", fallback_type="free"),
        ]
        middleware = SiteLanguageMiddleware(FastAPI(), languages=languages)

        assert middleware.match_base("/de/ch/page/1").language_id == 3
        assert middleware.match_base("/de/page/1").language_id == 1
        assert middleware.match_base("/page/1") is None

    def test_x_language_header(self):
        client = TestClient(_echo_app())

        data = client.get("/page/1", headers={"X-Language": "fr"}).json()

        assert data["language_id"] == 2

    def test_accept_language_header(self):
        client = TestClient(_echo_app())

        data = client.get("/page/1", headers={"Accept-Language": "de-AT,de;q=0.9,en;q=0.5"}).json()

        assert data["language_id"] == 1

    def test_base_beats_headers(self):
        client = TestClient(_echo_app())

        data = client.get("/fr/page/1", headers={"X-Language": "de"}).json()

        assert data["language_id"] == 2

    def test_page_from_query_parameter(self):
        client = TestClient(_echo_app())

        data = client.get("/de/", params={"id": 4}).json()

        assert data["page_id"] == 4
        assert data["language_id"] == 1

    def test_requires_languages(self):
        with pytest.raises(ValueError):
            SiteLanguageMiddleware(FastAPI(), languages=[])


class TestLanguageModeMiddleware:
    def test_switches_mode(self):
        resolver = AsyncMock()
        resolver.resolve.return_value = LanguageMode.STRICT
        client = TestClient(_echo_app(resolver))

        data = client.get("/de/page/1").json()

        assert data["fallback_type"] == "strict"
        assert data["locale"] == "de_DE.UTF-8"
        routing, language = resolver.resolve.await_args.args
        assert routing.page_id == 1
        assert language.fallback_type == "fallback"

    def test_unset_keeps_site_setting(self):
        resolver = AsyncMock()
        resolver.resolve.return_value = LanguageMode.UNSET
        client = TestClient(_echo_app(resolver))

        assert client.get("/de/page/1").json()["fallback_type"] == "fallback"

    def test_storage_error_fails_request(self):
        resolver = AsyncMock()
        resolver.resolve.side_effect = StorageError(operation="load_override")
        client = TestClient(_echo_app(resolver))

        response = client.get("/de/page/1")

        assert response.status_code == 500
        assert response.json()["error"]["error_code"] == "STORAGE_ERROR"


class TestLanguageModeSwitching:
    """create_app() wiring against the seeded database."""

    async def test_skips_default_language(self, make_client, seeded_pages):
        async with make_client() as client:
            response = await client.get("/page/1")

        assert response.status_code == 200
        assert response.json()["language"]["language_id"] == 0
        assert response.json()["language"]["fallback_type"] == "strict"

    async def test_switches_to_configured_mode(self, make_client, seeded_pages):
        async with make_client() as client:
            response = await client.get("/de/page/1")

        assert response.status_code == 200
        assert response.json()["language"]["fallback_type"] == "strict"
        assert response.json()["title"] == "Startseite"

    async def test_keeps_default_when_no_mode_configured(self, make_client, seeded_pages):
        async with make_client(automatic_mode=False) as client:
            response = await client.get("/fr/page/1")

        assert response.json()["language"]["fallback_type"] == "fallback"

    async def test_automatic_mode_free_for_standalone_content(self, make_client, seeded_pages, add_content):
        await add_content(pid=4, sys_language_uid=1, l18n_parent=0)

        async with make_client(automatic_mode=True) as client:
            response = await client.get("/de/page/4")

        assert response.json()["language"]["fallback_type"] == "free"

    async def test_automatic_mode_fallback_for_connected_content(self, make_client, seeded_pages):
        async with make_client(automatic_mode=True) as client:
            response = await client.get("/de/page/4")

        assert response.json()["language"]["fallback_type"] == "fallback"

    async def test_storage_failure_returns_500(self, make_client, db_engine):
        async with db_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        async with make_client() as client:
            response = await client.get("/de/page/1")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["error_code"] == "STORAGE_ERROR"
        assert error["path"] == "/de/page/1"

    async def test_request_id_header(self, make_client, seeded_pages):
        async with make_client() as client:
            response = await client.get("/page/1", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
