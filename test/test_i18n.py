"""
Language mode and context value tests

Pure unit tests, no database.

Test classes:
    TestLanguageMode       — parsing of stored mode values
    TestLanguageContext    — immutable context construction
    TestWithMode           — deriving a context with a new mode
    TestLocaleHelpers      — locale code and Accept-Language matching
"""

from __future__ import annotations

import dataclasses

import pytest

from app.config import SiteLanguageConfig
from app.i18n.context import LanguageContext, PageContext, with_mode
from app.i18n.locale import locale_language_code, parse_accept_language
from app.i18n.mode import SELECTABLE_MODES, LanguageMode


def _language(language_id: int = 1, fallback_type: str = "fallback") -> LanguageContext:
    return LanguageContext(
        language_id=language_id,
        locale="de_DE.UTF-8",
        base="/de/",
        fallback_type=fallback_type,
        title="Deutsch",
        extra={"hreflang": "de-DE"},
    )


class TestLanguageMode:
    def test_unset_serializes_as_empty_string(self):
        assert LanguageMode.UNSET.value == ""

    def test_named_modes_serialize_lowercase(self):
        assert LanguageMode.STRICT.value == "strict"
        assert LanguageMode.FALLBACK.value == "fallback"
        assert LanguageMode.FREE.value == "free"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_parse_empty_is_unset(self, value):
        assert LanguageMode.parse(value) is LanguageMode.UNSET

    def test_parse_known_values(self):
        assert LanguageMode.parse("strict") is LanguageMode.STRICT
        assert LanguageMode.parse(" Free ") is LanguageMode.FREE

    def test_parse_unknown_value_is_unset(self):
        assert LanguageMode.parse("sometimes") is LanguageMode.UNSET

    def test_is_set(self):
        assert not LanguageMode.UNSET.is_set
        assert LanguageMode.FALLBACK.is_set

    def test_selectable_modes_order(self):
        assert [mode.value for mode in SELECTABLE_MODES] == ["", "strict", "fallback", "free"]


class TestLanguageContext:
    def test_from_config(self):
        config = SiteLanguageConfig(language_id=2, locale="fr_FR.UTF-8", base="/fr/", title="Français")
        language = LanguageContext.from_config(config)

        assert language.language_id == 2
        assert language.locale == "fr_FR.UTF-8"
        assert language.base == "/fr/"
        assert language.fallback_type == "strict"
        assert not language.is_default

    def test_is_frozen(self):
        language = _language()
        with pytest.raises(dataclasses.FrozenInstanceError):
            language.fallback_type = "free"

    def test_extra_is_read_only(self):
        language = _language()
        with pytest.raises(TypeError):
            language.extra["hreflang"] = "en"

    def test_to_dict_keeps_extra_settings(self):
        data = _language().to_dict()
        assert data["hreflang"] == "de-DE"
        assert data["fallback_type"] == "fallback"

    def test_page_context_is_frozen(self):
        page = PageContext(4)
        with pytest.raises(dataclasses.FrozenInstanceError):
            page.page_id = 5


class TestWithMode:
    def test_replaces_only_the_mode(self):
        original = _language(fallback_type="fallback")

        updated = with_mode(original, LanguageMode.STRICT)

        assert updated.fallback_type == "strict"
        assert dataclasses.replace(updated, fallback_type="fallback") == original
        assert updated.extra == original.extra

    def test_does_not_mutate_input(self):
        original = _language(fallback_type="fallback")

        with_mode(original, LanguageMode.FREE)

        assert original.fallback_type == "fallback"

    def test_returns_new_object(self):
        original = _language(fallback_type="strict")
        assert with_mode(original, LanguageMode.STRICT) is not original

    def test_accepts_string_value(self):
        assert with_mode(_language(), "free").fallback_type == "free"

    def test_rejects_unset(self):
        with pytest.raises(ValueError):
            with_mode(_language(), LanguageMode.UNSET)


class TestLocaleHelpers:
    def test_posix_locale_code(self):
        assert locale_language_code("de_DE.UTF-8") == "de"

    def test_bcp47_locale_code(self):
        assert locale_language_code("fr-CA") == "fr"

    def test_accept_language_quality_order(self):
        result = parse_accept_language("en;q=0.5,fr;q=0.9", ["en", "de", "fr"])
        assert result == "fr"

    def test_accept_language_base_match(self):
        assert parse_accept_language("de-AT", ["en", "de"]) == "de"

    def test_accept_language_zero_quality_ignored(self):
        assert parse_accept_language("de;q=0", ["en", "de"]) is None

    def test_accept_language_no_match(self):
        assert parse_accept_language("ja", ["en", "de"]) is None

    def test_accept_language_empty_header(self):
        assert parse_accept_language("", ["en"]) is None
