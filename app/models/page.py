"""
Page model — translated page records

A default-language page has ``sys_language_uid = 0`` and ``l10n_parent = 0``.
Each translation is its own row pointing back at the default-language page
through ``l10n_parent``; the per-translation language mode override lives in
``l10n_mode`` on that row.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String

from app.database import Base


class Page(Base):
    """One page record (default language or translation)."""

    __tablename__ = "pages"

    uid = Column(Integer, primary_key=True, index=True, autoincrement=True)
    pid = Column(Integer, nullable=False, default=0, index=True)  # parent in the page tree
    title = Column(String(255), nullable=False, default="")

    # ── Localization ──────────────────────────────────────────────────────────
    sys_language_uid = Column(Integer, nullable=False, default=0)
    l10n_parent = Column(Integer, nullable=False, default=0)
    # "" (use site default / automatic), "strict", "fallback" or "free"
    l10n_mode = Column(String(20), nullable=False, default="", server_default="")

    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        # Translation lookup by (default page, language)
        Index("idx_pages_l10n_parent_language", "l10n_parent", "sys_language_uid"),
    )

    @property
    def is_translation(self) -> bool:
        return self.l10n_parent != 0
