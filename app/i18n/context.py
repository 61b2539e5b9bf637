"""
Request-scoped page and language context values

Both values are frozen: a pipeline step that wants a different language
configuration derives a new ``LanguageContext`` and puts it back on the
request instead of changing the one it received.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from app.config import SiteLanguageConfig
from app.i18n.mode import LanguageMode


@dataclass(frozen=True)
class PageContext:
    """The routed page of the current request."""

    page_id: int


@dataclass(frozen=True)
class LanguageContext:
    """The active site language of the current request.

    ``fallback_type`` holds the language mode; ``extra`` carries any
    further site-language settings untouched.
    """

    language_id: int
    locale: str
    base: str
    fallback_type: str = LanguageMode.STRICT.value
    title: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Read-only view so nested settings cannot be changed behind our back
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_config(cls, config: SiteLanguageConfig) -> LanguageContext:
        return cls(
            language_id=config.language_id,
            locale=config.locale,
            base=config.base,
            fallback_type=config.fallback_type,
            title=config.title,
        )

    @property
    def is_default(self) -> bool:
        return self.language_id == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "language_id": self.language_id,
            "locale": self.locale,
            "base": self.base,
            "title": self.title,
            "fallback_type": self.fallback_type,
        }


def with_mode(language: LanguageContext, mode: LanguageMode) -> LanguageContext:
    """Return a copy of ``language`` whose fallback type is ``mode``.

    The input is left untouched. ``UNSET`` is rejected: callers keep the
    original context when no mode applies.
    """
    mode = LanguageMode(mode)
    if not mode.is_set:
        raise ValueError("An unset language mode cannot be applied to a language context")
    return dataclasses.replace(language, fallback_type=mode.value)
