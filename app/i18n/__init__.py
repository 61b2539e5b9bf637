"""
i18n (Internationalization) package

Language mode values, request-scoped page/language contexts and
Accept-Language parsing used by the request pipeline.
"""

from .context import LanguageContext, PageContext, with_mode
from .locale import parse_accept_language
from .mode import SELECTABLE_MODES, LanguageMode

__all__ = [
    "SELECTABLE_MODES",
    "LanguageContext",
    "LanguageMode",
    "PageContext",
    "parse_accept_language",
    "with_mode",
]
