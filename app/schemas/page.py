from pydantic import BaseModel, ConfigDict, Field

from app.i18n.mode import LanguageMode


class LanguageModeUpdate(BaseModel):
    l10n_mode: LanguageMode = Field(
        ...,
        title="Language Mode",
        description='Mode override for this translation: "", "strict", "fallback" or "free".',
    )

    model_config = ConfigDict(json_schema_extra={"example": {"l10n_mode": "free"}})


class PageTranslationResponse(BaseModel):
    uid: int = Field(..., title="Record ID", description="ID of the translated page record.")
    l10n_parent: int = Field(..., title="Default Page ID", description="ID of the default-language page.")
    sys_language_uid: int = Field(..., title="Language ID")
    title: str
    l10n_mode: str = Field(..., description="Stored override, empty when unset.")

    model_config = ConfigDict(from_attributes=True)


class LanguageContextResponse(BaseModel):
    language_id: int
    locale: str
    base: str
    title: str
    fallback_type: str


class PageViewResponse(BaseModel):
    page_id: int
    title: str
    language: LanguageContextResponse


class SelectItem(BaseModel):
    label: str
    value: str


class LanguageModeFieldDefinition(BaseModel):
    """Editor form field for the per-translation mode override."""

    name: str = "l10n_mode"
    label: str = "Language mode"
    description: str = (
        "Overrides the fallback behaviour of the site language for this translation only."
    )
    render_type: str = "selectSingle"
    display_condition: str = Field("l10n_parent != 0", description="Shown on translated pages only.")
    position: str = "after:l18n_cfg"
    items: list[SelectItem]
