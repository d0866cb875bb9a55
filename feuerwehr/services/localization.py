"""Locale handling for bilingual (de/en) content.

Localized CMS fields are always stored as locale maps:

    {"de": "Einsatz", "en": "Operation"}

and resolved to plain values once, when the repository hands content to
routes and templates. Nothing downstream of the repository sees a locale map.
"""

from typing import Any, Literal

Locale = Literal["de", "en"]

LOCALES: tuple[Locale, ...] = ("de", "en")
DEFAULT_LOCALE: Locale = "de"


def normalize_locale(value: object, default: Locale = DEFAULT_LOCALE) -> Locale:
    """Map a raw ?lang= value to a supported locale.

    Only the exact values "de" and "en" are accepted; anything else
    (including "EN" or " en ") falls back to `default`.
    """
    if value == "de":
        return "de"
    if value == "en":
        return "en"
    return default


def other_locale(locale: Locale) -> Locale:
    """The fallback locale for `locale`."""
    return "en" if locale == "de" else "de"


def is_locale_map(value: object) -> bool:
    """True for a non-empty dict whose keys are all supported locales."""
    return isinstance(value, dict) and bool(value) and all(key in LOCALES for key in value)


def resolve_localized(value: object, locale: Locale, default: str = "") -> Any:
    """Resolve a possibly-localized value.

    - plain value -> returned unchanged
    - locale map -> requested locale, else the other locale, else `default`
    - None -> `default`

    Empty strings count as missing so a half-translated field falls back to
    the translated one.
    """
    if value is None:
        return default
    if isinstance(value, dict):
        for key in (locale, other_locale(locale)):
            candidate = value.get(key)
            if candidate is not None and candidate != "":
                return candidate
        return default
    return value


def resolve_document(data: Any, locale: Locale) -> Any:
    """Recursively resolve every locale map inside a nested structure."""
    if is_locale_map(data):
        return resolve_document(resolve_localized(data, locale, default=None), locale)
    if isinstance(data, dict):
        return {key: resolve_document(value, locale) for key, value in data.items()}
    if isinstance(data, list):
        return [resolve_document(item, locale) for item in data]
    return data


def to_locale_map(
    value: object,
    locale: Locale,
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Normalise an incoming write into a locale map.

    A plain value is stored under `locale`; a locale map is merged key by key.
    Keys already present in `existing` for the other locale are kept.
    """
    merged: dict[str, Any] = dict(existing or {})
    if is_locale_map(value):
        merged.update(value)  # type: ignore[arg-type]
    else:
        merged[locale] = value
    return merged
