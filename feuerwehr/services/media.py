"""Media URL and type helpers."""

import logging

from feuerwehr.schemas.content import MediaOut
from feuerwehr.settings import get_settings

logger = logging.getLogger("uvicorn.error")

FALLBACK_IMAGE_URL = (
    "https://images.unsplash.com/photo-1581578731548-c64695cc6952?auto=format&fit=crop&w=800&q=80"
)


def media_url(media: MediaOut | None) -> str:
    """Public URL of a media file.

    Prefers the stored URL (object storage), then the local media mount.
    """
    if media is None:
        return ""
    if media.url and media.url.strip():
        return media.url
    if media.filename:
        prefix = get_settings().media_url_prefix.rstrip("/")
        return f"{prefix}/{media.filename}"
    logger.debug("[media] media %s has neither url nor filename", media.id)
    return ""


def image_url_or_fallback(media: MediaOut | None) -> str:
    """Image URL for cards, with the site's placeholder photo."""
    return media_url(media) or FALLBACK_IMAGE_URL


def _mime(media: MediaOut | None) -> str:
    return (media.mime_type or "") if media is not None else ""


def is_image(media: MediaOut | None) -> bool:
    return _mime(media).startswith("image/")


def is_video(media: MediaOut | None) -> bool:
    return _mime(media).startswith("video/")


def is_audio(media: MediaOut | None) -> bool:
    return _mime(media).startswith("audio/")
