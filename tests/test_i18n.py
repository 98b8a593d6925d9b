"""
Tests for the catalog translator: locale fallback, formatting, HTML escaping
and Accept-Language negotiation.
"""

import pytest

from devicename.i18n import (
    MissingTranslation,
    Safe,
    Translator,
    load_catalogs,
    locale_chain,
)

CATALOGS = {
    "en": {
        "greeting": "Hello %(name)s",
        "plain": "Nothing to fill",
        "only.en": "English only",
    },
    "fr": {"greeting": "Bonjour %(name)s"},
    "pt-BR": {"greeting": "Olá %(name)s"},
}


@pytest.fixture
def small() -> Translator:
    return Translator(CATALOGS)


# -------------------- Locale chain --------------------


@pytest.mark.parametrize(
    "locale,chain",
    [
        ("fr-CA", ["fr-ca", "fr", "en"]),
        ("en_GB", ["en-gb", "en"]),
        ("EN", ["en"]),
        ("zh-Hant-TW", ["zh-hant-tw", "zh-hant", "zh", "en"]),
        (None, ["en"]),
        ("", ["en"]),
    ],
)
def test_locale_chain(locale, chain):
    assert locale_chain(locale) == chain


def test_locale_chain_without_default():
    assert locale_chain("fr-CA", default="") == ["fr-ca", "fr"]


# -------------------- Catalogs --------------------


def test_bundled_catalogs():
    catalogs = load_catalogs()
    assert {"en", "de", "fr", "nl"} <= set(catalogs)
    assert catalogs["en"]["device_name.unknown_device"] == "Unknown device"


def test_bundled_catalogs_have_placeholders():
    for locale, messages in load_catalogs().items():
        assert "%(clientName)s" in messages["device_name.client_on_device"], locale
        assert "%(deviceName)s" in messages["device_name.client_on_device"], locale


def test_available_locales(small):
    assert small.available_locales() == ["en", "fr", "pt-br"]


def test_default_locale_must_exist():
    with pytest.raises(ValueError, match="default locale"):
        Translator(CATALOGS, default_locale="de")


# -------------------- Lookup and formatting --------------------


def test_exact_locale(small):
    assert small.translate("greeting", {"name": "Ana"}, "fr") == "Bonjour Ana"


def test_region_falls_back_to_language(small):
    assert small.translate("greeting", {"name": "Ana"}, "fr-CA") == "Bonjour Ana"
    assert small.translate("greeting", {"name": "Ana"}, "pt_BR") == "Olá Ana"


def test_unknown_locale_uses_default(small):
    assert small.translate("greeting", {"name": "Ana"}, "sv") == "Hello Ana"
    assert small.message_with_fallback("sv", "greeting") == ("Hello %(name)s", "en")


def test_missing_message_uses_default(small):
    assert small.translate("only.en", {}, "fr") == "English only"


def test_message_without_placeholders(small):
    assert small("plain", {}, "en") == "Nothing to fill"


def test_missing_key(small):
    with pytest.raises(MissingTranslation):
        small.translate("nope", {}, "en")


def test_missing_param(small):
    with pytest.raises(MissingTranslation, match="greeting"):
        small.translate("greeting", {}, "en")


# -------------------- Escaping --------------------


def test_no_escaping_by_default(small):
    assert small.translate("greeting", {"name": "<b>"}, "en") == "Hello <b>"


def test_escaping_params():
    t = Translator(CATALOGS, escape=True)
    result = t.translate("greeting", {"name": "<b>&"}, "en")
    assert result == "Hello &lt;b&gt;&amp;"
    assert isinstance(result, Safe)


def test_safe_params_not_escaped_twice():
    t = Translator(CATALOGS, escape=True)
    inner = t.translate("greeting", {"name": "<i>"}, "en")
    outer = t.translate("greeting", {"name": inner}, "en")
    assert outer == "Hello Hello &lt;i&gt;"


# -------------------- Negotiation --------------------


@pytest.mark.parametrize(
    "header,expected",
    [
        ("fr-CH, fr;q=0.9, en;q=0.8", "fr"),
        ("de;q=0.5, fr;q=0.9", "fr"),
        ("pt-BR", "pt-br"),
        ("sv, *;q=0.1", "en"),
        ("fr;q=0, en;q=0.1", "en"),
        ("fr;q=abc, en", "en"),
        ("", "en"),
        (None, "en"),
    ],
)
def test_negotiate(small, header, expected):
    assert small.negotiate(header) == expected
