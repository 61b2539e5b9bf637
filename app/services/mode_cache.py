"""
Language Mode Cache

Caches resolved override modes per (page, language) in a tagged cache.
Every entry is tagged with its page so that editing the page flushes all
of its language entries at once.

Cache failures never fail a resolution: reads degrade to a miss and writes
are skipped, so resolution falls through to the database.
"""

from __future__ import annotations

import logging

from app.exceptions import CacheError
from app.i18n.mode import LanguageMode
from app.utils.cache import TaggedCache  # noqa: TC001
from app.utils.metrics import record_cache_error

logger = logging.getLogger(__name__)

KEY_PREFIX = "customTranslationMode_"
TAG_PREFIX = "pageId_"


def cache_key(page_id: int, language_id: int) -> str:
    """``customTranslationMode_<page>_<language>``; the separator keeps (1, 23) and (12, 3) apart."""
    return f"{KEY_PREFIX}{page_id}_{language_id}"


def page_tag(page_id: int) -> str:
    return f"{TAG_PREFIX}{page_id}"


class ModeCache:
    def __init__(self, backend: TaggedCache, ttl: int | None = None):
        self._backend = backend
        self._ttl = ttl

    async def get(self, page_id: int, language_id: int) -> LanguageMode | None:
        """Return the cached mode, or None when nothing is cached."""
        key = cache_key(page_id, language_id)
        try:
            value = await self._backend.get(key)
        except CacheError as e:
            record_cache_error("get")
            logger.warning("Language mode cache read failed for %s, treating as miss: %s", key, e.message)
            return None
        if value is None:
            return None
        return LanguageMode.parse(value)

    async def put(self, page_id: int, language_id: int, mode: LanguageMode) -> None:
        key = cache_key(page_id, language_id)
        try:
            await self._backend.set(key, LanguageMode(mode).value, tags=[page_tag(page_id)], ttl=self._ttl)
        except CacheError as e:
            record_cache_error("set")
            logger.warning("Language mode cache write failed for %s, skipping: %s", key, e.message)

    async def invalidate_page(self, page_id: int) -> int:
        """Drop every cached mode of a page. Returns the number of entries removed.

        Unlike reads and writes, a failed flush is raised so the caller can
        report the stale entries.
        """
        removed = await self._backend.flush_by_tag(page_tag(page_id))
        logger.info("Language mode cache flushed: page_id=%d entries=%d", page_id, removed)
        return removed
