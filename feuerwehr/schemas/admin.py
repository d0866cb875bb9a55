"""Request schemas for the admin API (/api/admin).

Localized fields accept either a plain value (stored under `locale`) or a
full locale map such as {"de": "...", "en": "..."}.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

Localized = str | dict[str, Any]


class LocalizedWrite(BaseModel):
    locale: str = "de"


class PostWrite(LocalizedWrite):
    title: Localized | None = None
    slug: Localized | None = None
    # Plain text (converted to paragraphs) or a Lexical document
    content: str | dict[str, Any] | None = None
    category_id: int | None = None
    featured_image_id: int | None = None
    gallery_image_ids: list[int] | None = None
    author_id: int | None = None
    status: str | None = None
    show_author: bool | None = None
    published_date: datetime | None = None
    meta_title: Localized | None = None
    meta_description: Localized | None = None


class CategoryWrite(LocalizedWrite):
    name: Localized
    slug: Localized | None = None
    description: Localized | None = None
    active: bool = True
    icon: str | None = None


class CategoryActive(BaseModel):
    active: bool


class PageWrite(LocalizedWrite):
    title: Localized | None = None
    slug: Localized | None = None
    description: Localized | None = None
    menu_label: Localized | None = None
    content: str | dict[str, Any] | None = None
    is_top_item: bool | None = None
    menu_parent_id: int | None = None
    menu_order: int | None = None
    status: str | None = None
    meta_title: Localized | None = None
    meta_description: Localized | None = None
    meta_keywords: Localized | None = None


class ContactStatusUpdate(BaseModel):
    status: str


class CreatedResponse(BaseModel):
    id: int


class InitGlobalResponse(BaseModel):
    message: str
    data: dict[str, Any] = Field(default_factory=dict)
