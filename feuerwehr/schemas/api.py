"""Request/response schemas for the public JSON API (/api)."""

from typing import Any

from pydantic import BaseModel, Field

from feuerwehr.schemas.content import CategoryOut, PageOut


class SearchHit(BaseModel):
    """A single search result."""

    id: int
    title: str
    slug: str
    category: CategoryOut | None = None
    category_label: str = Field(alias="categoryLabel")
    image_url: str | None = Field(alias="imageUrl", default=None)
    description: str = ""

    model_config = {"populate_by_name": True}


class SearchResponse(BaseModel):
    posts: list[SearchHit] = Field(default_factory=list, max_length=10)
    error: str | None = None


class ReadMoreLink(BaseModel):
    url: str
    text: str
    open_in_new_tab: bool = Field(alias="openInNewTab", default=False)

    model_config = {"populate_by_name": True}


class AlertTopBarResponse(BaseModel):
    """Payload for the alert bar at the top of every page."""

    active: bool = False
    title: str | None = None
    description: str | None = None
    color: str = "red"
    read_more_link: ReadMoreLink | None = Field(alias="readMoreLink", default=None)
    error: str | None = None

    model_config = {"populate_by_name": True}


class SiteSettingsResponse(BaseModel):
    site_settings: dict[str, Any] | None = Field(alias="siteSettings", default=None)
    error: str | None = None

    model_config = {"populate_by_name": True}


class ContactInfoResponse(BaseModel):
    contact_info: dict[str, Any] | None = Field(alias="contactInfo", default=None)
    error: str | None = None

    model_config = {"populate_by_name": True}


class SidebarWidgetsResponse(BaseModel):
    sidebar_widgets: dict[str, Any] | None = Field(alias="sidebarWidgets", default=None)
    error: str | None = None

    model_config = {"populate_by_name": True}


class MapSettingsResponse(BaseModel):
    map_settings: dict[str, Any] | None = Field(alias="mapSettings", default=None)
    error: str | None = None

    model_config = {"populate_by_name": True}


class HomePagesResponse(BaseModel):
    home_pages: dict[str, Any] | None = Field(alias="homePages", default=None)
    error: str | None = None

    model_config = {"populate_by_name": True}


class CategoriesResponse(BaseModel):
    categories: list[CategoryOut] = Field(default_factory=list)
    error: str | None = None


class PagesResponse(BaseModel):
    pages: list[PageOut] = Field(default_factory=list)
    error: str | None = None


class ContactRequest(BaseModel):
    """Contact form body. Presence is checked by the contact service."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    subject: str | None = None
    message: str | None = None


class ContactResponse(BaseModel):
    message: str
    id: int


class RegisterRequest(BaseModel):
    """Registration body. Presence is checked by the accounts service."""

    email: str | None = None
    password: str | None = None


class RegisteredUser(BaseModel):
    id: int
    email: str


class RegisterResponse(BaseModel):
    message: str
    user: RegisteredUser
