"""Typed data-access interface for the CMS.

Routes and services depend on `ContentRepository` (injected with
`Depends(get_repository)`), never on a module-level data cache. Every read
returns resolved views for one locale; locale maps stay behind this boundary.

Admin writes take column values as-is (locale maps included) and are shaped
by the services before they get here. Post, page and category writes raise
`DuplicateRecordError` when a slug is already taken.
"""

from datetime import datetime
from typing import Any, Protocol

from feuerwehr.schemas.content import (
    CategoryOut,
    ContactSubmissionOut,
    GalleryItemOut,
    HistoryOut,
    LegalPageOut,
    MagazineSlideOut,
    PageOut,
    PostDetail,
    PostSummary,
    SponsorOut,
    TaskOut,
    TeamRosterOut,
    UserOut,
)
from feuerwehr.services.localization import Locale
from feuerwehr.stores.cms import SqlContentRepository


class ContentRepository(Protocol):
    """Everything the site and the API read from or write to the CMS."""

    # Slugs
    async def slug_exists(
        self,
        kind: str,
        slug: str,
        locale: Locale,
        *,
        exclude_id: int | None = None,
    ) -> bool:
        """True when a post, page or category (`kind`) other than `exclude_id` uses `slug` in `locale`.

        Drafts count too.
        """
        ...

    # Categories
    async def list_categories(self, locale: Locale) -> list[CategoryOut]: ...

    async def get_category(self, category_id: int, locale: Locale) -> CategoryOut | None: ...

    async def get_category_by_slug(self, slug: str, locale: Locale) -> CategoryOut | None:
        """Match `slug` against the category slug in either locale."""
        ...

    async def create_category(self, values: dict[str, Any]) -> int: ...

    async def set_category_active(self, category_id: int, active: bool) -> bool: ...

    # Posts (published only unless stated otherwise)
    async def list_posts(
        self,
        locale: Locale,
        *,
        category_id: int | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[PostSummary]:
        """Newest first."""
        ...

    async def count_posts(self, *, category_id: int | None = None) -> int: ...

    async def get_post_by_slug(
        self,
        slug: str,
        *,
        slug_locale: Locale,
        locale: Locale,
        category_id: int | None = None,
    ) -> PostDetail | None:
        """Find a post whose `slug_locale` slug equals `slug`, resolved for `locale`."""
        ...

    async def get_post(self, post_id: int, locale: Locale) -> PostDetail | None: ...

    async def adjacent_posts(
        self,
        published_date: datetime | None,
        locale: Locale,
        *,
        category_id: int | None = None,
    ) -> tuple[PostSummary | None, PostSummary | None]:
        """(previous, next): the nearest older and newer post."""
        ...

    async def get_post_raw(self, post_id: int) -> dict[str, Any] | None:
        """Stored column values of any post (drafts included)."""
        ...

    async def create_post(self, values: dict[str, Any]) -> int: ...

    async def update_post(self, post_id: int, values: dict[str, Any]) -> bool: ...

    # Pages
    async def list_pages(self, locale: Locale) -> list[PageOut]: ...

    async def get_page_by_slug(self, slug: str, locale: Locale) -> PageOut | None: ...

    async def get_page_raw(self, page_id: int) -> dict[str, Any] | None: ...

    async def create_page(self, values: dict[str, Any]) -> int: ...

    async def update_page(self, page_id: int, values: dict[str, Any]) -> bool: ...

    # Globals
    async def get_global(self, slug: str, locale: Locale) -> dict[str, Any] | None:
        """Global document with every locale map resolved."""
        ...

    async def get_global_raw(self, slug: str) -> dict[str, Any] | None: ...

    async def save_global(self, slug: str, data: dict[str, Any]) -> None: ...

    # Home page sections and standalone pages
    async def list_tasks(self, locale: Locale) -> list[TaskOut]: ...

    async def list_sponsors(self, locale: Locale) -> list[SponsorOut]: ...

    async def list_magazine_slides(self, locale: Locale) -> list[MagazineSlideOut]: ...

    async def list_gallery_items(self, locale: Locale) -> list[GalleryItemOut]: ...

    async def get_history(self, locale: Locale) -> HistoryOut | None: ...

    async def get_legal_page(self, kind: str, locale: Locale) -> LegalPageOut | None: ...

    async def get_team_roster(self, key: str, locale: Locale) -> TeamRosterOut | None: ...

    # Users
    async def get_user_by_email(self, email: str) -> UserOut | None:
        """Case-insensitive lookup."""
        ...

    async def create_user(self, email: str, password_hash: str, roles: list[str]) -> UserOut:
        """Raises DuplicateRecordError when the email is taken."""
        ...

    # Contact submissions
    async def create_contact_submission(self, values: dict[str, Any]) -> ContactSubmissionOut: ...

    async def list_contact_submissions(
        self,
        *,
        status: str | None = None,
        limit: int = 100,
    ) -> list[ContactSubmissionOut]: ...

    async def set_contact_status(self, submission_id: int, status: str) -> ContactSubmissionOut | None: ...


def get_repository() -> ContentRepository:
    """FastAPI dependency: the SQL-backed repository."""
    return SqlContentRepository()
