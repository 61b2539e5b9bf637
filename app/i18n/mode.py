"""
Language fallback modes

A translated page is rendered in one of three modes:

- ``strict``   — show only records explicitly translated into the language
- ``fallback`` — show default-language records where no translation exists
- ``free``     — treat the translation as independent content

``UNSET`` (stored as an empty string) means "no override": the site
language keeps its configured mode.
"""

from __future__ import annotations

import enum


class LanguageMode(str, enum.Enum):
    """Localization fallback mode of a page translation."""

    UNSET = ""
    STRICT = "strict"
    FALLBACK = "fallback"
    FREE = "free"

    @classmethod
    def parse(cls, value: str | None) -> LanguageMode:
        """Parse a stored column value.

        ``None``, empty strings and values outside the known set all map to
        ``UNSET`` so that a stray value in the database never selects a mode.
        """
        if not value:
            return cls.UNSET
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNSET

    @property
    def is_set(self) -> bool:
        return self is not LanguageMode.UNSET


# Values an editor may store on a translated page record
SELECTABLE_MODES: tuple[LanguageMode, ...] = (
    LanguageMode.UNSET,
    LanguageMode.STRICT,
    LanguageMode.FALLBACK,
    LanguageMode.FREE,
)
