from .page import (
    LanguageContextResponse,
    LanguageModeFieldDefinition,
    LanguageModeUpdate,
    PageTranslationResponse,
    PageViewResponse,
    SelectItem,
)

# Define the public API of this module
__all__ = [
    "LanguageContextResponse",
    "LanguageModeFieldDefinition",
    "LanguageModeUpdate",
    "PageTranslationResponse",
    "PageViewResponse",
    "SelectItem",
]
