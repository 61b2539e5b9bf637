"""
Language Mode Switch Middleware

Site languages carry one fallback type for the whole site. This middleware
asks the ModeResolver whether the routed page translation overrides it and,
if so, replaces request.state.language with a copy carrying the page's
mode.

Must run after SiteLanguageMiddleware and PageRoutingMiddleware (register
it BEFORE them in create_app(): Starlette middleware is LIFO).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from app.exception_handlers import cms_exception_handler
from app.exceptions import CMSError
from app.i18n.context import with_mode

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from app.services.mode_resolver import ModeResolver

logger = logging.getLogger(__name__)


class LanguageModeMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, resolver: ModeResolver):
        super().__init__(app)
        self.resolver = resolver

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        routing = getattr(request.state, "routing", None)
        language = getattr(request.state, "language", None)

        try:
            mode = await self.resolver.resolve(routing, language)
        except CMSError as exc:
            # Fail the request; a guessed mode would hide broken data
            return await cms_exception_handler(request, exc)

        if mode.is_set:
            request.state.language = with_mode(language, mode)
            logger.debug(
                "Language mode switched: page_id=%d language_id=%d fallback_type=%s",
                routing.page_id,
                language.language_id,
                mode.value,
            )
        return await call_next(request)
