"""
Language Mode Store

Read-only queries behind language mode resolution:

    load_override           — l10n_mode of the translated page record
    has_standalone_content  — does the page carry untranslated-origin
                              content in the language (LIMIT 1)

Both run in their own short-lived session from the injected session
factory. Query failures surface as StorageError; nothing is retried.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: TC002

from app.exceptions import StorageError
from app.i18n.mode import LanguageMode
from app.models.content_element import ContentElement
from app.models.page import Page
from app.utils.metrics import track_db_query

logger = logging.getLogger(__name__)


class ModeStore:
    """Reads language mode overrides and content signals from the database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @track_db_query("load_override")
    async def load_override(self, page_id: int, language_id: int) -> LanguageMode:
        """Return the override stored on the (page, language) translation.

        A missing translation record and an empty column both yield
        ``LanguageMode.UNSET``.

        Raises:
            StorageError: if the query cannot be executed.
        """
        stmt = (
            select(Page.l10n_mode)
            .where(
                Page.l10n_parent == page_id,
                Page.sys_language_uid == language_id,
            )
            .limit(1)
        )
        try:
            async with self._session_factory() as session:
                value = (await session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Loading language mode failed: page_id=%d language_id=%d: %s", page_id, language_id, e)
            raise StorageError(operation="load_override") from e

        return LanguageMode.parse(value)

    @track_db_query("has_standalone_content")
    async def has_standalone_content(self, page_id: int, language_id: int) -> bool:
        """Return True if the page has at least one standalone content element in the language.

        Raises:
            StorageError: if the query cannot be executed.
        """
        stmt = (
            select(ContentElement.uid)
            .where(
                ContentElement.pid == page_id,
                ContentElement.l18n_parent == 0,
                ContentElement.sys_language_uid == language_id,
            )
            .limit(1)
        )
        try:
            async with self._session_factory() as session:
                uid = (await session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                "Standalone content check failed: page_id=%d language_id=%d: %s", page_id, language_id, e
            )
            raise StorageError(operation="has_standalone_content") from e

        return uid is not None
