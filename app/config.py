from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import Optional

load_dotenv()


class SiteLanguageConfig(BaseModel):
    """One language variant of the site, as configured by the operator."""

    language_id: int
    locale: str
    base: str
    title: str = ""
    fallback_type: str = "strict"


DEFAULT_SITE_LANGUAGES = [
    SiteLanguageConfig(language_id=0, locale="en_US.UTF-8", base="/", title="English", fallback_type="strict"),
    SiteLanguageConfig(language_id=1, locale="de_DE.UTF-8", base="/de/", title="Deutsch", fallback_type="fallback"),
    SiteLanguageConfig(language_id=2, locale="fr_FR.UTF-8", base="/fr/", title="Français", fallback_type="fallback"),
]


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Language Mode Switch"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./language_mode_switch.db"

    # Cache settings (memory cache when redis_url is unset)
    redis_url: Optional[str] = None
    cache_ttl: int = 86400
    cache_max_size: int = 10000

    # Language mode switching
    automatic_mode: bool = False
    site_languages: list[SiteLanguageConfig] = DEFAULT_SITE_LANGUAGES

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
