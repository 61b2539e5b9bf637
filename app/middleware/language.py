"""
Site Language Middleware

Sets request.state.language (a LanguageContext) from:
  1. The URL base of a configured site language (longest prefix wins,
     e.g. "/de/page/4" → the language with base "/de/")
  2. X-Language request header (language code, e.g. "de")
  3. Accept-Language header (quality-weighted, best-match)
  4. The default language (language_id 0)

No DB lookups — configuration and header parsing only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from app.config import SiteLanguageConfig, settings
from app.i18n.context import LanguageContext
from app.i18n.locale import locale_language_code, parse_accept_language

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp


def _normalize_base(base: str) -> str:
    base = "/" + base.strip("/")
    return base if base == "/" else base + "/"


class SiteLanguageMiddleware(BaseHTTPMiddleware):
    """Detect the site language and attach it to request.state.language."""

    def __init__(self, app: ASGIApp, languages: list[SiteLanguageConfig] | None = None):
        super().__init__(app)
        configs = languages if languages is not None else settings.site_languages
        if not configs:
            raise ValueError("At least one site language must be configured")
        self.languages = [LanguageContext.from_config(config) for config in configs]
        self.default = next((lang for lang in self.languages if lang.language_id == 0), self.languages[0])
        # Longest base first so "/de-ch/" wins over "/de/"
        self._by_base = sorted(
            ((_normalize_base(lang.base), lang) for lang in self.languages),
            key=lambda item: len(item[0]),
            reverse=True,
        )
        self._by_code = {}
        for lang in self.languages:
            self._by_code.setdefault(locale_language_code(lang.locale), lang)

    def match_base(self, path: str) -> LanguageContext | None:
        path = path if path.endswith("/") else path + "/"
        for base, lang in self._by_base:
            if base != "/" and path.startswith(base):
                return lang
        return None

    def detect(self, request: Request) -> LanguageContext:
        language = self.match_base(request.url.path)
        if language is not None:
            return language

        # Explicit header takes priority over Accept-Language
        code = request.headers.get("X-Language", "").strip().lower()
        if code not in self._by_code:
            code = parse_accept_language(request.headers.get("Accept-Language", ""), list(self._by_code))
        if code:
            return self._by_code[code]
        return self.default

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.language = self.detect(request)
        return await call_next(request)
