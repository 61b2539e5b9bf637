"""
Language Mode Resolver

Decides which language mode applies to the requested page translation:

1. No page, no language, or the default language → UNSET
2. Cached override                                → cached value
3. Stored override                                → override (cached)
4. No override, automatic mode off                → UNSET (cached)
5. No override, automatic mode on                 → FREE if the page has
   standalone content in the language, FALLBACK otherwise (not cached)

Heuristic results stay uncached: they depend on content records, and the
cache is only flushed when the page itself changes.
"""

from __future__ import annotations

import logging

from app.i18n.context import LanguageContext, PageContext  # noqa: TC001
from app.i18n.mode import LanguageMode
from app.services.mode_cache import ModeCache  # noqa: TC001
from app.services.mode_store import ModeStore  # noqa: TC001
from app.utils.metrics import record_mode_resolution

logger = logging.getLogger(__name__)


class ModeResolver:
    def __init__(self, store: ModeStore, cache: ModeCache, automatic_mode: bool = False):
        self._store = store
        self._cache = cache
        self._automatic_mode = bool(automatic_mode)

    @property
    def automatic_mode(self) -> bool:
        return self._automatic_mode

    async def resolve(
        self,
        page: PageContext | None,
        language: LanguageContext | None,
    ) -> LanguageMode:
        """Return the effective mode for the request, UNSET when none applies.

        Raises:
            StorageError: if the override or content query fails.
        """
        if page is None or language is None or language.language_id <= 0:
            record_mode_resolution("skipped", LanguageMode.UNSET.value)
            return LanguageMode.UNSET

        page_id = page.page_id
        language_id = language.language_id

        cached = await self._cache.get(page_id, language_id)
        if cached is not None:
            record_mode_resolution("cache", cached.value)
            return cached

        mode = await self._store.load_override(page_id, language_id)
        if mode.is_set or not self._automatic_mode:
            await self._cache.put(page_id, language_id, mode)
            record_mode_resolution("override" if mode.is_set else "unset", mode.value)
            logger.debug("Language mode override: page_id=%d language_id=%d mode=%r", page_id, language_id, mode.value)
            return mode

        if await self._store.has_standalone_content(page_id, language_id):
            mode = LanguageMode.FREE
        else:
            mode = LanguageMode.FALLBACK
        record_mode_resolution("automatic", mode.value)
        logger.debug("Language mode automatic: page_id=%d language_id=%d mode=%s", page_id, language_id, mode.value)
        return mode
