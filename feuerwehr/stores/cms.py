"""SQL implementation of the CMS repository.

Each method opens its own session (`get_session`) and reads go through
`with_pool_retry`. ORM rows are turned into resolved views for one locale
right here; callers never see locale maps.

Resolved globals and the public category list are cached in Redis. When Redis
is not initialised the cache is skipped.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import func, inspect, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feuerwehr.models import (
    Category,
    ContactSubmission,
    GalleryItem,
    HistoryPage,
    LegalPage,
    MagazineSlide,
    Media,
    Page,
    Post,
    SiteGlobal,
    Sponsor,
    Task,
    TeamRoster,
    User,
)
from feuerwehr.models.post import STATUS_PUBLISHED
from feuerwehr.schemas.content import (
    CategoryOut,
    ContactSubmissionOut,
    GalleryItemOut,
    HistoryOut,
    LegalPageOut,
    MagazineSlideOut,
    MediaOut,
    PageOut,
    PostDetail,
    PostSummary,
    SponsorOut,
    TaskOut,
    TeamMemberOut,
    TeamRosterOut,
    TimelineEvent,
    UserOut,
)
from feuerwehr.services.localization import Locale, other_locale, resolve_document, resolve_localized
from feuerwehr.stores.postgres import DuplicateRecordError, get_session, with_pool_retry
from feuerwehr.stores.redis import (
    get_categories_cache,
    get_global_cache,
    invalidate_categories_cache,
    invalidate_global_cache,
    set_categories_cache,
    set_global_cache,
)

logger = logging.getLogger("uvicorn.error")

T = TypeVar("T")


# ============================================================
# Row -> view conversion
# ============================================================


def _text(value: Any, locale: Locale) -> str:
    resolved = resolve_localized(value, locale)
    return resolved if isinstance(resolved, str) else ""


def _media_out(media: Media | None, locale: Locale) -> MediaOut | None:
    if media is None:
        return None
    return MediaOut(
        id=media.id,
        url=media.url,
        filename=media.filename,
        mime_type=media.mime_type,
        alt=_text(media.alt, locale),
        width=media.width,
        height=media.height,
    )


def _category_out(category: Category | None, locale: Locale) -> CategoryOut | None:
    if category is None:
        return None
    return CategoryOut(
        id=category.id,
        name=_text(category.name, locale),
        slug=_text(category.slug, locale),
        description=_text(category.description, locale),
        active=category.active,
        icon=category.icon,
    )


def _post_fields(post: Post, locale: Locale) -> dict[str, Any]:
    content = resolve_localized(post.content, locale, default=None)
    return {
        "id": post.id,
        "title": _text(post.title, locale),
        "slug": _text(post.slug, locale),
        "status": post.status,
        "category": _category_out(post.category, locale),
        "featured_image": _media_out(post.featured_image, locale),
        "published_date": post.published_date or post.created_at,
        "content": content if isinstance(content, dict) else None,
    }


def _post_summary(post: Post | None, locale: Locale) -> PostSummary | None:
    if post is None:
        return None
    return PostSummary(**_post_fields(post, locale))


def _page_out(page: Page, locale: Locale) -> PageOut:
    content = resolve_localized(page.content, locale, default=None)
    return PageOut(
        id=page.id,
        title=_text(page.title, locale),
        slug=_text(page.slug, locale),
        description=_text(page.description, locale),
        menu_label=_text(page.menu_label, locale),
        is_top_item=page.is_top_item,
        menu_parent_id=page.menu_parent_id,
        status=page.status,
        content=content if isinstance(content, dict) else None,
        meta_title=_text(page.meta_title, locale),
        meta_description=_text(page.meta_description, locale),
        meta_keywords=_text(page.meta_keywords, locale),
    )


def _submission_out(row: ContactSubmission) -> ContactSubmissionOut:
    return ContactSubmissionOut(
        id=row.id,
        name=row.name,
        email=row.email,
        phone=row.phone,
        subject=row.subject,
        message=row.message,
        status=row.status,
        created_at=row.created_at,
    )


def _column_values(row: Any) -> dict[str, Any]:
    mapper = inspect(type(row))
    return {column.key: getattr(row, column.key) for column in mapper.column_attrs}


def _apply_values(row: Any, values: dict[str, Any]) -> None:
    """Set known column attributes; unknown keys and the primary key are ignored."""
    keys = {column.key for column in inspect(type(row)).column_attrs} - {"id"}
    for key, value in values.items():
        if key in keys:
            setattr(row, key, value)


async def _media_map(session: AsyncSession, ids: list[Any], locale: Locale) -> dict[int, MediaOut]:
    wanted = {media_id for media_id in ids if isinstance(media_id, int)}
    if not wanted:
        return {}
    result = await session.execute(select(Media).where(Media.id.in_(wanted)))
    media_by_id: dict[int, MediaOut] = {}
    for media in result.scalars().all():
        out = _media_out(media, locale)
        if out is not None:
            media_by_id[media.id] = out
    return media_by_id


_SLUG_MODELS: dict[str, Any] = {"posts": Post, "pages": Page, "categories": Category}


async def _flush_unique(session: AsyncSession, label: str) -> None:
    try:
        await session.flush()
    except IntegrityError as e:
        raise DuplicateRecordError(f"{label} slug already exists") from e


async def _try_get_cached(getter: Callable[..., Awaitable[T]], *args: Any) -> T | None:
    try:
        return await getter(*args)
    except RuntimeError:
        # Redis not initialised (tests / local minimal env)
        return None


async def _try_cache(action: Callable[..., Awaitable[None]], *args: Any) -> None:
    try:
        await action(*args)
    except RuntimeError:
        return


# ============================================================
# Repository
# ============================================================


class SqlContentRepository:
    """ContentRepository over PostgreSQL."""

    async def _read(self, query: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async def run() -> T:
            async with get_session() as session:
                return await query(session)

        return await with_pool_retry(run)

    # -------------------- slugs --------------------

    async def slug_exists(
        self,
        kind: str,
        slug: str,
        locale: Locale,
        *,
        exclude_id: int | None = None,
    ) -> bool:
        model = _SLUG_MODELS[kind]

        async def query(session: AsyncSession) -> bool:
            stmt = select(model.id).where(model.slug[locale].astext == slug)
            if exclude_id is not None:
                stmt = stmt.where(model.id != exclude_id)
            result = await session.execute(stmt.limit(1))
            return result.scalar_one_or_none() is not None

        return await self._read(query)

    # -------------------- categories --------------------

    async def list_categories(self, locale: Locale) -> list[CategoryOut]:
        cached = await _try_get_cached(get_categories_cache, locale)
        if cached is not None:
            return [CategoryOut.model_validate(item) for item in cached]

        async def query(session: AsyncSession) -> list[CategoryOut]:
            result = await session.execute(
                select(Category)
                .where(Category.active.is_(True))
                .order_by(Category.name[locale].astext, Category.id)
            )
            return [
                out
                for out in (_category_out(row, locale) for row in result.scalars().all())
                if out is not None
            ]

        categories = await self._read(query)
        await _try_cache(
            set_categories_cache,
            locale,
            [category.model_dump() for category in categories],
        )
        return categories

    async def get_category(self, category_id: int, locale: Locale) -> CategoryOut | None:
        async def query(session: AsyncSession) -> CategoryOut | None:
            return _category_out(await session.get(Category, category_id), locale)

        return await self._read(query)

    async def get_category_by_slug(self, slug: str, locale: Locale) -> CategoryOut | None:
        async def query(session: AsyncSession) -> CategoryOut | None:
            result = await session.execute(
                select(Category)
                .where(
                    or_(
                        Category.slug[locale].astext == slug,
                        Category.slug[other_locale(locale)].astext == slug,
                    )
                )
                .order_by(Category.id)
                .limit(1)
            )
            return _category_out(result.scalar_one_or_none(), locale)

        return await self._read(query)

    async def create_category(self, values: dict[str, Any]) -> int:
        async with get_session() as session:
            category = Category()
            _apply_values(category, values)
            session.add(category)
            await _flush_unique(session, "Category")
            category_id = category.id
        await _try_cache(invalidate_categories_cache)
        return category_id

    async def set_category_active(self, category_id: int, active: bool) -> bool:
        async with get_session() as session:
            category = await session.get(Category, category_id)
            if category is None:
                return False
            category.active = active
        await _try_cache(invalidate_categories_cache)
        return True

    # -------------------- posts --------------------

    async def list_posts(
        self,
        locale: Locale,
        *,
        category_id: int | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[PostSummary]:
        async def query(session: AsyncSession) -> list[PostSummary]:
            stmt = select(Post).where(Post.status == STATUS_PUBLISHED)
            if category_id is not None:
                stmt = stmt.where(Post.category_id == category_id)
            stmt = (
                stmt.order_by(Post.published_date.desc().nulls_last(), Post.id.desc())
                .offset(offset)
                .limit(limit)
            )
            result = await session.execute(stmt)
            return [PostSummary(**_post_fields(post, locale)) for post in result.scalars().all()]

        return await self._read(query)

    async def count_posts(self, *, category_id: int | None = None) -> int:
        async def query(session: AsyncSession) -> int:
            stmt = select(func.count()).select_from(Post).where(Post.status == STATUS_PUBLISHED)
            if category_id is not None:
                stmt = stmt.where(Post.category_id == category_id)
            result = await session.execute(stmt)
            return int(result.scalar_one())

        return await self._read(query)

    async def _post_detail(self, session: AsyncSession, post: Post, locale: Locale) -> PostDetail:
        gallery_ids = list(post.gallery_image_ids or [])
        media_by_id = await _media_map(session, gallery_ids, locale)
        return PostDetail(
            **_post_fields(post, locale),
            gallery_images=[media_by_id[i] for i in gallery_ids if i in media_by_id],
            author_email=post.author.email if post.author is not None else None,
            show_author=post.show_author,
            meta_title=_text(post.meta_title, locale),
            meta_description=_text(post.meta_description, locale),
        )

    async def get_post_by_slug(
        self,
        slug: str,
        *,
        slug_locale: Locale,
        locale: Locale,
        category_id: int | None = None,
    ) -> PostDetail | None:
        async def query(session: AsyncSession) -> PostDetail | None:
            stmt = (
                select(Post)
                .where(Post.status == STATUS_PUBLISHED)
                .where(Post.slug[slug_locale].astext == slug)
            )
            if category_id is not None:
                stmt = stmt.where(Post.category_id == category_id)
            result = await session.execute(stmt.order_by(Post.id).limit(1))
            post = result.scalar_one_or_none()
            if post is None:
                return None
            return await self._post_detail(session, post, locale)

        return await self._read(query)

    async def get_post(self, post_id: int, locale: Locale) -> PostDetail | None:
        async def query(session: AsyncSession) -> PostDetail | None:
            post = await session.get(Post, post_id)
            if post is None or post.status != STATUS_PUBLISHED:
                return None
            return await self._post_detail(session, post, locale)

        return await self._read(query)

    async def adjacent_posts(
        self,
        published_date: datetime | None,
        locale: Locale,
        *,
        category_id: int | None = None,
    ) -> tuple[PostSummary | None, PostSummary | None]:
        if published_date is None:
            return None, None

        async def query(session: AsyncSession) -> tuple[PostSummary | None, PostSummary | None]:
            base = select(Post).where(Post.status == STATUS_PUBLISHED)
            if category_id is not None:
                base = base.where(Post.category_id == category_id)

            older = await session.execute(
                base.where(Post.published_date < published_date)
                .order_by(Post.published_date.desc())
                .limit(1)
            )
            newer = await session.execute(
                base.where(Post.published_date > published_date)
                .order_by(Post.published_date.asc())
                .limit(1)
            )
            return (
                _post_summary(older.scalar_one_or_none(), locale),
                _post_summary(newer.scalar_one_or_none(), locale),
            )

        return await self._read(query)

    async def get_post_raw(self, post_id: int) -> dict[str, Any] | None:
        async def query(session: AsyncSession) -> dict[str, Any] | None:
            post = await session.get(Post, post_id)
            return _column_values(post) if post is not None else None

        return await self._read(query)

    async def create_post(self, values: dict[str, Any]) -> int:
        async with get_session() as session:
            post = Post()
            _apply_values(post, values)
            session.add(post)
            await _flush_unique(session, "Post")
            return post.id

    async def update_post(self, post_id: int, values: dict[str, Any]) -> bool:
        async with get_session() as session:
            post = await session.get(Post, post_id)
            if post is None:
                return False
            _apply_values(post, values)
            await _flush_unique(session, "Post")
            return True

    # -------------------- pages --------------------

    async def list_pages(self, locale: Locale) -> list[PageOut]:
        async def query(session: AsyncSession) -> list[PageOut]:
            result = await session.execute(
                select(Page)
                .where(Page.status == STATUS_PUBLISHED)
                .order_by(Page.menu_order, Page.id)
            )
            return [_page_out(page, locale) for page in result.scalars().all()]

        return await self._read(query)

    async def get_page_by_slug(self, slug: str, locale: Locale) -> PageOut | None:
        async def query(session: AsyncSession) -> PageOut | None:
            result = await session.execute(
                select(Page)
                .where(Page.status == STATUS_PUBLISHED)
                .where(
                    or_(
                        Page.slug[locale].astext == slug,
                        Page.slug[other_locale(locale)].astext == slug,
                    )
                )
                .order_by(Page.id)
                .limit(1)
            )
            page = result.scalar_one_or_none()
            return _page_out(page, locale) if page is not None else None

        return await self._read(query)

    async def get_page_raw(self, page_id: int) -> dict[str, Any] | None:
        async def query(session: AsyncSession) -> dict[str, Any] | None:
            page = await session.get(Page, page_id)
            return _column_values(page) if page is not None else None

        return await self._read(query)

    async def create_page(self, values: dict[str, Any]) -> int:
        async with get_session() as session:
            page = Page()
            _apply_values(page, values)
            session.add(page)
            await _flush_unique(session, "Page")
            return page.id

    async def update_page(self, page_id: int, values: dict[str, Any]) -> bool:
        async with get_session() as session:
            page = await session.get(Page, page_id)
            if page is None:
                return False
            _apply_values(page, values)
            await _flush_unique(session, "Page")
            return True

    # -------------------- globals --------------------

    async def get_global(self, slug: str, locale: Locale) -> dict[str, Any] | None:
        cached = await _try_get_cached(get_global_cache, slug, locale)
        if cached is not None:
            return cached

        raw = await self.get_global_raw(slug)
        if raw is None:
            return None
        resolved = resolve_document(raw, locale)
        await _try_cache(set_global_cache, slug, locale, resolved)
        return resolved

    async def get_global_raw(self, slug: str) -> dict[str, Any] | None:
        async def query(session: AsyncSession) -> dict[str, Any] | None:
            row = await session.get(SiteGlobal, slug)
            return dict(row.data or {}) if row is not None else None

        return await self._read(query)

    async def save_global(self, slug: str, data: dict[str, Any]) -> None:
        async with get_session() as session:
            row = await session.get(SiteGlobal, slug)
            if row is None:
                session.add(SiteGlobal(slug=slug, data=dict(data)))
            else:
                row.data = dict(data)
        await _try_cache(invalidate_global_cache, slug)
        logger.info("[globals] saved %s", slug)

    # -------------------- home page sections --------------------

    async def list_tasks(self, locale: Locale) -> list[TaskOut]:
        async def query(session: AsyncSession) -> list[TaskOut]:
            result = await session.execute(select(Task).order_by(Task.order, Task.id))
            return [
                TaskOut(
                    id=task.id,
                    title=_text(task.title, locale),
                    description=_text(task.description, locale),
                    icon=task.icon,
                    icon_image=_media_out(task.icon_image, locale),
                    order=task.order,
                )
                for task in result.scalars().all()
            ]

        return await self._read(query)

    async def list_sponsors(self, locale: Locale) -> list[SponsorOut]:
        async def query(session: AsyncSession) -> list[SponsorOut]:
            result = await session.execute(select(Sponsor).order_by(Sponsor.order, Sponsor.id))
            return [
                SponsorOut(
                    id=sponsor.id,
                    name=_text(sponsor.name, locale),
                    logo=_media_out(sponsor.logo, locale),
                    website=sponsor.website,
                    order=sponsor.order,
                )
                for sponsor in result.scalars().all()
            ]

        return await self._read(query)

    async def list_magazine_slides(self, locale: Locale) -> list[MagazineSlideOut]:
        async def query(session: AsyncSession) -> list[MagazineSlideOut]:
            result = await session.execute(
                select(MagazineSlide).order_by(MagazineSlide.order, MagazineSlide.id)
            )
            slides = []
            for slide in result.scalars().all():
                # Slides pointing at unpublished posts are shown without a link
                post = slide.post if slide.post is not None and slide.post.status == STATUS_PUBLISHED else None
                slides.append(
                    MagazineSlideOut(
                        id=slide.id,
                        title=_text(slide.title, locale),
                        excerpt=_text(slide.excerpt, locale),
                        author=slide.author or "",
                        show_author=slide.show_author,
                        image=_media_out(slide.image, locale),
                        post=_post_summary(post, locale),
                        order=slide.order,
                        published_date=slide.published_date,
                    )
                )
            return slides

        return await self._read(query)

    async def list_gallery_items(self, locale: Locale) -> list[GalleryItemOut]:
        async def query(session: AsyncSession) -> list[GalleryItemOut]:
            result = await session.execute(
                select(GalleryItem).order_by(GalleryItem.order, GalleryItem.id)
            )
            return [
                GalleryItemOut(
                    id=item.id,
                    title=_text(item.title, locale),
                    description=_text(item.description, locale),
                    media_type=item.media_type,
                    media=_media_out(item.media, locale),
                    featured=item.featured,
                    order=item.order,
                )
                for item in result.scalars().all()
            ]

        return await self._read(query)

    # -------------------- standalone pages --------------------

    async def get_history(self, locale: Locale) -> HistoryOut | None:
        async def query(session: AsyncSession) -> HistoryOut | None:
            result = await session.execute(
                select(HistoryPage)
                .where(HistoryPage.status == STATUS_PUBLISHED)
                .order_by(HistoryPage.id)
                .limit(1)
            )
            history = result.scalar_one_or_none()
            if history is None:
                return None

            events = list(history.timeline_events or [])
            media_by_id = await _media_map(session, [e.get("image_id") for e in events], locale)
            return HistoryOut(
                id=history.id,
                hero_image=_media_out(history.hero_image, locale),
                hero_title=_text(history.hero_title, locale),
                hero_subtitle=_text(history.hero_subtitle, locale),
                hero_paragraphs=[
                    text
                    for text in (_text(p, locale) for p in history.hero_paragraphs or [])
                    if text
                ],
                timeline_events=[
                    TimelineEvent(
                        year=str(event.get("year", "")),
                        header=_text(event.get("header"), locale),
                        description=_text(event.get("description"), locale),
                        image=media_by_id.get(event.get("image_id")),
                        video_url=event.get("video_url") or None,
                    )
                    for event in events
                ],
                meta_title=_text(history.meta_title, locale),
                meta_description=_text(history.meta_description, locale),
            )

        return await self._read(query)

    async def get_legal_page(self, kind: str, locale: Locale) -> LegalPageOut | None:
        async def query(session: AsyncSession) -> LegalPageOut | None:
            result = await session.execute(
                select(LegalPage)
                .where(LegalPage.kind == kind)
                .where(LegalPage.status == STATUS_PUBLISHED)
            )
            page = result.scalar_one_or_none()
            if page is None:
                return None
            content = resolve_localized(page.content, locale, default=None)
            return LegalPageOut(
                id=page.id,
                kind=page.kind,
                title=_text(page.title, locale),
                description=_text(page.description, locale),
                content=content if isinstance(content, dict) else None,
                meta_title=_text(page.meta_title, locale),
                meta_description=_text(page.meta_description, locale),
            )

        return await self._read(query)

    async def get_team_roster(self, key: str, locale: Locale) -> TeamRosterOut | None:
        async def query(session: AsyncSession) -> TeamRosterOut | None:
            result = await session.execute(
                select(TeamRoster)
                .where(TeamRoster.key == key)
                .where(TeamRoster.status == STATUS_PUBLISHED)
            )
            roster = result.scalar_one_or_none()
            if roster is None:
                return None

            members = sorted(roster.members or [], key=lambda m: m.get("order", 0))
            media_by_id = await _media_map(session, [m.get("image_id") for m in members], locale)
            out = []
            for member in members:
                card = member.get("card_media") or {}
                out.append(
                    TeamMemberOut(
                        name=str(member.get("name", "")),
                        position=_text(member.get("position"), locale),
                        rank=_text(member.get("rank"), locale),
                        email=member.get("email") or None,
                        image=media_by_id.get(member.get("image_id")),
                        bio=_text(member.get("bio"), locale),
                        card_media_type=card.get("type") or "none",
                        card_video_url=card.get("video_url") or None,
                        order=member.get("order", 0),
                    )
                )
            return TeamRosterOut(
                key=roster.key,
                title=_text(roster.title, locale),
                intro=_text(roster.intro, locale),
                members=out,
            )

        return await self._read(query)

    # -------------------- users --------------------

    async def get_user_by_email(self, email: str) -> UserOut | None:
        async def query(session: AsyncSession) -> UserOut | None:
            result = await session.execute(
                select(User).where(func.lower(User.email) == email.strip().lower())
            )
            user = result.scalar_one_or_none()
            if user is None:
                return None
            return UserOut(id=user.id, email=user.email, roles=list(user.roles or []))

        return await self._read(query)

    async def create_user(self, email: str, password_hash: str, roles: list[str]) -> UserOut:
        async with get_session() as session:
            user = User(email=email, password_hash=password_hash, roles=list(roles))
            session.add(user)
            try:
                await session.flush()
            except IntegrityError as e:
                raise DuplicateRecordError(f"User {email} already exists") from e
            return UserOut(id=user.id, email=user.email, roles=list(user.roles))

    # -------------------- contact submissions --------------------

    async def create_contact_submission(self, values: dict[str, Any]) -> ContactSubmissionOut:
        async with get_session() as session:
            row = ContactSubmission()
            _apply_values(row, values)
            session.add(row)
            await session.flush()
            await session.refresh(row)
            return _submission_out(row)

    async def list_contact_submissions(
        self,
        *,
        status: str | None = None,
        limit: int = 100,
    ) -> list[ContactSubmissionOut]:
        async def query(session: AsyncSession) -> list[ContactSubmissionOut]:
            stmt = select(ContactSubmission)
            if status is not None:
                stmt = stmt.where(ContactSubmission.status == status)
            result = await session.execute(
                stmt.order_by(ContactSubmission.created_at.desc()).limit(limit)
            )
            return [_submission_out(row) for row in result.scalars().all()]

        return await self._read(query)

    async def set_contact_status(self, submission_id: int, status: str) -> ContactSubmissionOut | None:
        async with get_session() as session:
            row = await session.get(ContactSubmission, submission_id)
            if row is None:
                return None
            row.status = status
            await session.flush()
            await session.refresh(row)
            return _submission_out(row)
