"""Tests for locale normalisation and locale-map resolution."""

import pytest

from feuerwehr.services.localization import (
    is_locale_map,
    normalize_locale,
    other_locale,
    resolve_document,
    resolve_localized,
    to_locale_map,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("de", "de"),
        ("en", "en"),
        ("EN", "de"),
        (" en ", "de"),
        ("fr", "de"),
        ("", "de"),
        (None, "de"),
        (42, "de"),
    ],
)
def test_normalize_locale(raw, expected):
    assert normalize_locale(raw) == expected


def test_other_locale():
    assert other_locale("de") == "en"
    assert other_locale("en") == "de"


def test_resolve_plain_value_unchanged():
    assert resolve_localized("Einsatz", "en") == "Einsatz"
    assert resolve_localized(3, "de") == 3


def test_resolve_requested_locale():
    assert resolve_localized({"de": "Einsatz", "en": "Operation"}, "en") == "Operation"


def test_resolve_falls_back_to_other_locale():
    assert resolve_localized({"de": "Einsatz"}, "en") == "Einsatz"
    assert resolve_localized({"de": "", "en": "Operation"}, "de") == "Operation"


def test_resolve_missing_returns_default():
    assert resolve_localized(None, "de") == ""
    assert resolve_localized({}, "de", default="-") == "-"


def test_is_locale_map():
    assert is_locale_map({"de": "a", "en": "b"})
    assert is_locale_map({"en": None})
    assert not is_locale_map({})
    assert not is_locale_map({"de": "a", "url": "x"})
    assert not is_locale_map("de")


def test_resolve_document_nested():
    doc = {
        "siteName": {"de": "Feuerwehr Droß", "en": "Fire Brigade Droß"},
        "facebook": {"enabled": True, "pageUrl": "https://facebook.com/ffdross"},
        "mapLocations": [{"title": {"de": "Hauptwache", "en": "Main Station"}}],
    }
    resolved = resolve_document(doc, "en")
    assert resolved == {
        "siteName": "Fire Brigade Droß",
        "facebook": {"enabled": True, "pageUrl": "https://facebook.com/ffdross"},
        "mapLocations": [{"title": "Main Station"}],
    }


def test_to_locale_map_keeps_other_locale():
    assert to_locale_map("Operation", "en", {"de": "Einsatz"}) == {"de": "Einsatz", "en": "Operation"}


def test_to_locale_map_merges_maps():
    assert to_locale_map({"en": "New"}, "de", {"de": "Alt", "en": "Old"}) == {"de": "Alt", "en": "New"}
