"""
Page Service

Editor-facing operations on translated page records:

    get_page                     — fetch a page record by uid
    get_translation              — fetch the (page, language) translation
    update_language_mode         — store a mode override, then flush the
                                   page's cached modes
    language_mode_field          — select-field definition for editors
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from app.exceptions import CacheError, PageNotFoundError, ValidationError
from app.i18n.mode import SELECTABLE_MODES, LanguageMode
from app.models.page import Page
from app.schemas.page import LanguageModeFieldDefinition, SelectItem
from app.services.mode_cache import ModeCache  # noqa: TC001
from app.utils.metrics import record_cache_error

logger = logging.getLogger(__name__)

MODE_LABELS: dict[LanguageMode, str] = {
    LanguageMode.UNSET: "Default (use site language setting)",
    LanguageMode.STRICT: "Strict: show only translated content",
    LanguageMode.FALLBACK: "Fallback: show default language content where untranslated",
    LanguageMode.FREE: "Free: independent content",
}
AUTOMATIC_LABEL = "Automatic (free if the page has own content, fallback otherwise)"


async def get_page(page_id: int, db: AsyncSession) -> Page | None:
    result = await db.execute(select(Page).where(Page.uid == page_id))
    return result.scalars().first()


async def get_translation(page_id: int, language_id: int, db: AsyncSession) -> Page | None:
    """Fetch the translation record of a default-language page. Returns None if not found."""
    result = await db.execute(
        select(Page).where(
            Page.l10n_parent == page_id,
            Page.sys_language_uid == language_id,
        )
    )
    return result.scalars().first()


async def update_language_mode(
    page_id: int,
    language_id: int,
    mode: LanguageMode,
    db: AsyncSession,
    cache: ModeCache,
) -> Page:
    """Store ``mode`` on the translation record and flush the page's cached modes.

    Raises:
        ValidationError: for the default language, which cannot carry a mode.
        PageNotFoundError: if the page has no translation in the language.

    A failed cache flush is logged and counted; the stored translation is
    still returned.
    """
    if language_id <= 0:
        raise ValidationError("The default language cannot carry a language mode", field="language_id")

    translation = await get_translation(page_id, language_id, db)
    if translation is None:
        raise PageNotFoundError(page_id, language_id=language_id)

    translation.l10n_mode = LanguageMode(mode).value
    await db.commit()
    await db.refresh(translation)

    # Page edited: every cached mode of this page is stale now
    try:
        await cache.invalidate_page(page_id)
    except CacheError as e:
        # The row is committed; stale entries expire with their TTL
        record_cache_error("flush_by_tag")
        logger.error("Language mode cache flush failed for page_id=%d: %s", page_id, e.message)

    logger.info(
        "Language mode updated: page_id=%d language_id=%d l10n_mode=%r", page_id, language_id, translation.l10n_mode
    )
    return translation


def language_mode_field(automatic_mode: bool) -> LanguageModeFieldDefinition:
    items = []
    for mode in SELECTABLE_MODES:
        label = AUTOMATIC_LABEL if mode is LanguageMode.UNSET and automatic_mode else MODE_LABELS[mode]
        items.append(SelectItem(label=label, value=mode.value))
    return LanguageModeFieldDefinition(items=items)
