"""Resolved content views.

These are what the repository returns: every localized field is already a
plain value for the requested locale. JSON output uses the camelCase names
the site's client components expect.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ContentModel(BaseModel):
    """Base for content views (camelCase aliases, populate by field name)."""

    model_config = {"populate_by_name": True}


class MediaOut(ContentModel):
    id: int
    url: str | None = None
    filename: str | None = None
    mime_type: str | None = Field(alias="mimeType", default=None)
    alt: str = ""
    width: int | None = None
    height: int | None = None


class CategoryOut(ContentModel):
    id: int
    name: str
    slug: str
    description: str = ""
    active: bool = True
    icon: str | None = None


class PostSummary(ContentModel):
    """A published post as listed on cards, sliders and search."""

    id: int
    title: str
    slug: str
    status: str = "published"
    category: CategoryOut | None = None
    featured_image: MediaOut | None = Field(alias="featuredImage", default=None)
    published_date: datetime | None = Field(alias="publishedDate", default=None)
    # Raw Lexical document for this locale (used for excerpts and search).
    content: dict[str, Any] | None = None


class PostDetail(PostSummary):
    """A post with everything its article page renders."""

    gallery_images: list[MediaOut] = Field(alias="galleryImages", default_factory=list)
    author_email: str | None = Field(alias="authorEmail", default=None)
    show_author: bool = Field(alias="showAuthor", default=False)
    meta_title: str = Field(alias="metaTitle", default="")
    meta_description: str = Field(alias="metaDescription", default="")


class PageOut(ContentModel):
    id: int
    title: str = ""
    slug: str = ""
    description: str = ""
    menu_label: str = Field(alias="menuLabel", default="")
    is_top_item: bool = Field(alias="isTopItem", default=False)
    menu_parent_id: int | None = Field(alias="menuParent", default=None)
    status: str = "published"
    content: dict[str, Any] | None = None
    meta_title: str = Field(alias="metaTitle", default="")
    meta_description: str = Field(alias="metaDescription", default="")
    meta_keywords: str = Field(alias="metaKeywords", default="")


class NavItem(ContentModel):
    """One entry of the navigation menu built from pages."""

    label: str
    href: str | None = None
    children: list["NavItem"] = Field(default_factory=list)


class TaskOut(ContentModel):
    id: int
    title: str
    description: str = ""
    icon: str | None = None
    icon_image: MediaOut | None = Field(alias="iconImage", default=None)
    order: int = 0


class SponsorOut(ContentModel):
    id: int
    name: str
    logo: MediaOut | None = None
    website: str | None = None
    order: int = 0


class MagazineSlideOut(ContentModel):
    id: int
    title: str
    excerpt: str = ""
    author: str = ""
    show_author: bool = Field(alias="showAuthor", default=False)
    image: MediaOut | None = None
    post: PostSummary | None = None
    order: int = 0
    published_date: datetime | None = Field(alias="publishedDate", default=None)


class GalleryItemOut(ContentModel):
    id: int
    title: str = ""
    description: str = ""
    media_type: str = Field(alias="mediaType", default="image")
    media: MediaOut | None = None
    featured: bool = False
    order: int = 0


class TimelineEvent(ContentModel):
    year: str
    header: str = ""
    description: str = ""
    image: MediaOut | None = None
    video_url: str | None = Field(alias="videoUrl", default=None)


class HistoryOut(ContentModel):
    id: int
    hero_image: MediaOut | None = Field(alias="heroImage", default=None)
    hero_title: str = Field(alias="heroTitle", default="")
    hero_subtitle: str = Field(alias="heroSubtitle", default="")
    hero_paragraphs: list[str] = Field(alias="heroParagraphs", default_factory=list)
    timeline_events: list[TimelineEvent] = Field(alias="timelineEvents", default_factory=list)
    meta_title: str = Field(alias="metaTitle", default="")
    meta_description: str = Field(alias="metaDescription", default="")


class LegalPageOut(ContentModel):
    """Impressum / Datenschutz."""

    id: int
    kind: str
    title: str = ""
    description: str = ""
    content: dict[str, Any] | None = None
    meta_title: str = Field(alias="metaTitle", default="")
    meta_description: str = Field(alias="metaDescription", default="")


class TeamMemberOut(ContentModel):
    name: str
    position: str = ""
    rank: str = ""
    email: str | None = None
    image: MediaOut | None = None
    bio: str = ""
    card_media_type: str = Field(alias="cardMediaType", default="none")
    card_video_url: str | None = Field(alias="cardVideoUrl", default=None)
    order: int = 0


class TeamRosterOut(ContentModel):
    key: str
    title: str = ""
    intro: str = ""
    members: list[TeamMemberOut] = Field(default_factory=list)


class UserOut(ContentModel):
    id: int
    email: str
    roles: list[str] = Field(default_factory=list)


class ContactSubmissionOut(ContentModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    subject: str
    message: str
    status: str = "new"
    created_at: datetime | None = Field(alias="createdAt", default=None)
