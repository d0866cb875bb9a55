"""Jinja2 templates for the public site.

Filters available in templates:
- rich_text: Lexical document -> HTML
- media_url / image_url: media file URL (image_url falls back to the placeholder photo)
- date: dd.mm.yyyy
- post_url: post link for a locale
- category_label
"""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from feuerwehr.services.categories import category_label
from feuerwehr.services.media import image_url_or_fallback, is_audio, is_image, is_video, media_url
from feuerwehr.services.posts import format_date, post_link
from feuerwehr.services.richtext import render_rich_text

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

templates.env.filters["rich_text"] = render_rich_text
templates.env.filters["media_url"] = media_url
templates.env.filters["image_url"] = image_url_or_fallback
templates.env.filters["date"] = format_date
templates.env.filters["post_url"] = post_link
templates.env.filters["category_label"] = category_label
templates.env.tests["image"] = is_image
templates.env.tests["video"] = is_video
templates.env.tests["audio"] = is_audio


def render_template(
    request: Request,
    name: str,
    context: dict[str, Any],
    status_code: int = 200,
) -> Response:
    """Render a template with the request in its context."""
    return templates.TemplateResponse(request, name, context, status_code=status_code)
