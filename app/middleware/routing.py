"""
Page Routing Middleware

Sets request.state.routing to a PageContext when the request addresses a
page, either by a ``/page/<id>`` path segment or an ``?id=<id>`` query
parameter. Requests that address no page get ``None``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from app.i18n.context import PageContext

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response

PAGE_PATH_PATTERN = re.compile(r"(?:^|/)page/(\d+)/?$")


def extract_page_id(path: str, query_id: str | None) -> int | None:
    match = PAGE_PATH_PATTERN.search(path)
    if match:
        page_id = int(match.group(1))
    elif query_id and query_id.isdigit():
        page_id = int(query_id)
    else:
        return None
    return page_id if page_id > 0 else None


class PageRoutingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        page_id = extract_page_id(request.url.path, request.query_params.get("id"))
        request.state.routing = PageContext(page_id) if page_id is not None else None
        return await call_next(request)
