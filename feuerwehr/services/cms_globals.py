"""CMS globals: singleton configuration documents.

Each global is stored as one JSON document whose localized fields are locale
maps. Missing globals are created with bilingual defaults at startup.

Globals:
- site-settings: site name, description, logo/favicon media ids
- contact-info: address (rich text), phone, email
- cookie-banner: consent banner texts and categories
- alert-top-bar: emergency bar above the navigation, optionally linking a post
- sidebar-widgets: Facebook / Instagram widgets next to the news list
- map-settings: map locations on the contact page
- home-pages: hero slides on the home page
"""

import asyncio
import copy
import logging
from typing import Any

from sqlalchemy.exc import ProgrammingError

from feuerwehr.models.post import STATUS_PUBLISHED
from feuerwehr.schemas.api import AlertTopBarResponse, ReadMoreLink
from feuerwehr.services.localization import Locale, is_locale_map, to_locale_map
from feuerwehr.services.posts import post_link
from feuerwehr.services.repository import ContentRepository
from feuerwehr.services.richtext import text_to_lexical

logger = logging.getLogger("uvicorn.error")

SITE_SETTINGS = "site-settings"
CONTACT_INFO = "contact-info"
COOKIE_BANNER = "cookie-banner"
ALERT_TOP_BAR = "alert-top-bar"
SIDEBAR_WIDGETS = "sidebar-widgets"
MAP_SETTINGS = "map-settings"
HOME_PAGES = "home-pages"

ALERT_COLORS = ("red", "yellow", "orange", "purple", "green")
MAP_TYPES = ("google", "osm")
MAP_DISPLAY_MODES = ("all", "first", "switchable")

DEFAULT_ADDRESS = {
    "de": "Schloßstraße 308, A-3552 Droß, Österreich",
    "en": "Schloßstraße 308, A-3552 Droß, Austria",
}
DEFAULT_EMBED_URL = "https://www.google.com/maps?q=Schloßstraße+308,+3552+Droß,+Austria&output=embed"

DEFAULT_ALERT_TOP_BAR: dict[str, Any] = {
    "active": False,
    "color": "red",
    "title": {"de": "Live-Alarm", "en": "Live alert"},
    "description": {
        "de": "Dies ist eine Standard-Warnmeldung.",
        "en": "This is a default alert message.",
    },
    "readMoreText": {"de": "Weiterlesen", "en": "Read more"},
    "post": None,
}

DEFAULT_MAP_SETTINGS: dict[str, Any] = {
    "enabled": True,
    "mapType": "google",
    "mapLocations": [
        {
            "title": {"de": "Hauptwache", "en": "Main Station"},
            "address": DEFAULT_ADDRESS,
            "googleMapsEmbedUrl": DEFAULT_EMBED_URL,
        }
    ],
    "displayMode": "first",
    "mapTitle": {"de": "So finden Sie uns", "en": "How to Find Us"},
}

GLOBAL_DEFAULTS: dict[str, dict[str, Any]] = {
    SITE_SETTINGS: {
        "siteName": {"de": "Freiwillige Feuerwehr Droß", "en": "Volunteer Fire Brigade Droß"},
        "siteDescription": {
            "de": "Retten, Löschen, Bergen, Schützen: die Freiwillige Feuerwehr Droß.",
            "en": "Rescue, extinguish, recover, protect: the Volunteer Fire Brigade Droß.",
        },
        "logo": None,
        "favicon": None,
        "adminLogo": None,
    },
    CONTACT_INFO: {
        "address": {
            "de": text_to_lexical(DEFAULT_ADDRESS["de"]),
            "en": text_to_lexical(DEFAULT_ADDRESS["en"]),
        },
        "phone": "",
        "email": "",
    },
    COOKIE_BANNER: {
        "enabled": True,
        "version": 1,
        "title": {"de": "Wir verwenden Cookies", "en": "We use cookies"},
        "description": {
            "de": "Wir verwenden Cookies, um unsere Website für Sie zu verbessern.",
            "en": "We use cookies to improve our website for you.",
        },
        "buttonText": {"de": "Alle akzeptieren", "en": "Accept all"},
        "rejectButtonText": {"de": "Ablehnen", "en": "Reject"},
        "saveButtonText": {"de": "Auswahl speichern", "en": "Save selection"},
        "essentialLabel": {"de": "Notwendig", "en": "Essential"},
        "essentialDescription": {
            "de": "Für den Betrieb der Website erforderlich.",
            "en": "Required for the website to work.",
        },
        "showAnalytics": True,
        "analyticsLabel": {"de": "Statistik", "en": "Analytics"},
        "analyticsDescription": {
            "de": "Hilft uns zu verstehen, wie die Website genutzt wird.",
            "en": "Helps us understand how the website is used.",
        },
        "showMarketing": True,
        "marketingLabel": {"de": "Marketing", "en": "Marketing"},
        "marketingDescription": {
            "de": "Wird für eingebettete Inhalte von Drittanbietern verwendet.",
            "en": "Used for embedded third-party content.",
        },
    },
    ALERT_TOP_BAR: DEFAULT_ALERT_TOP_BAR,
    SIDEBAR_WIDGETS: {
        "facebook": {"enabled": True, "pageUrl": "https://web.facebook.com/ffdross"},
        "instagram": {"enabled": True, "username": "ff_dross"},
    },
    MAP_SETTINGS: DEFAULT_MAP_SETTINGS,
    HOME_PAGES: {
        "title": {"de": "Willkommen", "en": "Welcome"},
        "slides": [],
    },
}


class SchemaNotReadyError(RuntimeError):
    """Globals table still missing after all seeding attempts."""


def default_global(slug: str) -> dict[str, Any]:
    """Fresh copy of the default document for `slug`."""
    return copy.deepcopy(GLOBAL_DEFAULTS[slug])


async def ensure_globals(
    repo: ContentRepository,
    *,
    attempts: int = 5,
    delay: float = 2.0,
) -> list[str]:
    """Create every missing global with its default document.

    Retries while the schema is not migrated yet (table missing).

    Returns:
        Slugs that were created.
    """
    for attempt in range(1, attempts + 1):
        try:
            created = []
            for slug in GLOBAL_DEFAULTS:
                if await repo.get_global_raw(slug) is None:
                    await repo.save_global(slug, default_global(slug))
                    created.append(slug)
            if created:
                logger.info("[globals] seeded defaults: %s", ", ".join(created))
            return created
        except ProgrammingError as e:
            if attempt >= attempts:
                raise SchemaNotReadyError("CMS schema not ready") from e
            logger.warning(
                "[globals] schema not ready, retrying in %.1fs (attempt %s/%s)",
                delay,
                attempt + 1,
                attempts,
            )
            await asyncio.sleep(delay)
    return []


async def alert_top_bar_payload(repo: ContentRepository, locale: Locale) -> AlertTopBarResponse:
    """Alert bar data, with a read-more link when the linked post is published."""
    data = await repo.get_global(ALERT_TOP_BAR, locale)
    if data is None:
        logger.warning("[globals] alert-top-bar not initialized yet")
        return AlertTopBarResponse()

    payload = AlertTopBarResponse(
        active=bool(data.get("active")),
        title=data.get("title") or None,
        description=data.get("description") or None,
        color=data.get("color") or "red",
    )

    post_id = data.get("post")
    if isinstance(post_id, dict):
        post_id = post_id.get("id")
    if post_id is None:
        return payload

    try:
        post = await repo.get_post(int(post_id), locale)
    except (TypeError, ValueError):
        logger.warning("[globals] alert-top-bar has invalid post reference %r", post_id)
        return payload

    if post is not None and post.status == STATUS_PUBLISHED:
        payload.read_more_link = ReadMoreLink(
            url=post_link(post, locale),
            text=data.get("readMoreText") or ("Read more" if locale == "en" else "Weiterlesen"),
            open_in_new_tab=False,
        )
    return payload


async def init_alert_top_bar(repo: ContentRepository) -> tuple[str, dict[str, Any]]:
    """Create the alert bar global unless it exists.

    Returns:
        (message, stored document)
    """
    existing = await repo.get_global_raw(ALERT_TOP_BAR)
    if existing is not None:
        return "Alert top bar global already exists", existing

    data = default_global(ALERT_TOP_BAR)
    await repo.save_global(ALERT_TOP_BAR, data)
    return "Alert top bar global initialized successfully", data


def _localized_or(value: Any, fallback: dict[str, str]) -> Any:
    if isinstance(value, dict) and any(value.values()):
        return value
    if isinstance(value, str) and value:
        return {"de": value, "en": value}
    return dict(fallback)


def migrate_map_settings(old: dict[str, Any]) -> dict[str, Any]:
    """Convert the legacy single-address shape into `mapLocations`."""
    return {
        "enabled": old["enabled"] if old.get("enabled") is not None else True,
        "mapType": old.get("mapType") or "google",
        "mapLocations": [
            {
                "title": {"de": "Hauptstandort", "en": "Main Location"},
                "address": _localized_or(old.get("mapAddress"), DEFAULT_ADDRESS),
                "googleMapsEmbedUrl": old.get("googleMapsEmbedUrl") or DEFAULT_EMBED_URL,
            }
        ],
        "displayMode": "first",
        "mapTitle": _localized_or(
            old.get("mapTitle"),
            {"de": "So finden Sie uns", "en": "How to Find Us"},
        ),
    }


async def init_map_settings(repo: ContentRepository) -> tuple[str, dict[str, Any]]:
    """Create map settings, or migrate the legacy shape.

    Returns:
        (message, stored document)
    """
    existing = await repo.get_global_raw(MAP_SETTINGS)

    locations = existing.get("mapLocations") if existing else None
    if isinstance(locations, list) and locations:
        return "Map settings global already exists with new structure", existing

    if existing is not None:
        data = migrate_map_settings(existing)
        await repo.save_global(MAP_SETTINGS, data)
        logger.info("[globals] migrated legacy map settings")
        return "Map settings migrated from old structure", data

    data = default_global(MAP_SETTINGS)
    await repo.save_global(MAP_SETTINGS, data)
    return "Map settings global initialized successfully", data


def merge_global_update(existing: dict[str, Any], update: dict[str, Any], locale: Locale) -> dict[str, Any]:
    """Apply an admin write for one locale to a stored global.

    A plain value written over a stored locale map only replaces the entry
    for `locale`; locale maps are merged; anything else replaces the field.
    """
    merged = copy.deepcopy(existing)
    for key, value in update.items():
        current = merged.get(key)
        if is_locale_map(value) or (is_locale_map(current) and not isinstance(value, (dict, list))):
            merged[key] = to_locale_map(value, locale, current if is_locale_map(current) else None)
        else:
            merged[key] = value
    return merged
