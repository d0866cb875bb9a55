"""initial_content_schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-17
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "1a2b3c4d5e6f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONB = postgresql.JSONB(astext_type=sa.Text())


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _unique_slug_indexes(table: str) -> None:
    """One unique index per locale on the JSONB slug map; blank slugs are exempt."""
    for locale in ("de", "en"):
        op.create_index(
            f"uq_{table}_slug_{locale}",
            table,
            [sa.text(f"(slug->>'{locale}')")],
            unique=True,
            postgresql_where=sa.text(f"(slug->>'{locale}') <> ''"),
        )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(length=200), nullable=False),
        sa.Column("roles", JSONB, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "media",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("filename", sa.String(length=300), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("mime_type", sa.String(length=100), nullable=True),
        sa.Column("filesize", sa.Integer(), nullable=True),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("alt", JSONB, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", JSONB, nullable=False),
        sa.Column("slug", JSONB, nullable=False),
        sa.Column("description", JSONB, nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("icon", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_categories_active"), "categories", ["active"], unique=False)
    _unique_slug_indexes("categories")

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", JSONB, nullable=False),
        sa.Column("slug", JSONB, nullable=False),
        sa.Column("content", JSONB, nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("featured_image_id", sa.Integer(), nullable=True),
        sa.Column("author_id", sa.Integer(), nullable=True),
        sa.Column("gallery_image_ids", JSONB, nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("published_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("show_author", sa.Boolean(), nullable=False),
        sa.Column("meta_title", JSONB, nullable=True),
        sa.Column("meta_description", JSONB, nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.ForeignKeyConstraint(["featured_image_id"], ["media.id"]),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_posts_category_id"), "posts", ["category_id"], unique=False)
    op.create_index(op.f("ix_posts_status"), "posts", ["status"], unique=False)
    op.create_index(op.f("ix_posts_published_date"), "posts", ["published_date"], unique=False)
    _unique_slug_indexes("posts")

    op.create_table(
        "pages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("is_top_item", sa.Boolean(), nullable=False),
        sa.Column("menu_label", JSONB, nullable=True),
        sa.Column("menu_parent_id", sa.Integer(), nullable=True),
        sa.Column("menu_order", sa.Integer(), nullable=False),
        sa.Column("title", JSONB, nullable=True),
        sa.Column("description", JSONB, nullable=True),
        sa.Column("slug", JSONB, nullable=True),
        sa.Column("content", JSONB, nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("meta_title", JSONB, nullable=True),
        sa.Column("meta_description", JSONB, nullable=True),
        sa.Column("meta_keywords", JSONB, nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["menu_parent_id"], ["pages.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_pages_menu_parent_id"), "pages", ["menu_parent_id"], unique=False)
    op.create_index(op.f("ix_pages_status"), "pages", ["status"], unique=False)
    _unique_slug_indexes("pages")

    op.create_table(
        "contact_submissions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("subject", sa.String(length=300), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_contact_submissions_email"), "contact_submissions", ["email"], unique=False)
    op.create_index(op.f("ix_contact_submissions_status"), "contact_submissions", ["status"], unique=False)

    op.create_table(
        "site_globals",
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("data", JSONB, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("slug"),
    )

    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", JSONB, nullable=False),
        sa.Column("description", JSONB, nullable=False),
        sa.Column("icon_image_id", sa.Integer(), nullable=True),
        sa.Column("icon", sa.String(length=20), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["icon_image_id"], ["media.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tasks_order"), "tasks", ["order"], unique=False)

    op.create_table(
        "sponsors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", JSONB, nullable=False),
        sa.Column("logo_id", sa.Integer(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["logo_id"], ["media.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sponsors_order"), "sponsors", ["order"], unique=False)

    op.create_table(
        "magazine_slides",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", JSONB, nullable=False),
        sa.Column("excerpt", JSONB, nullable=True),
        sa.Column("author", sa.String(length=320), nullable=True),
        sa.Column("show_author", sa.Boolean(), nullable=False),
        sa.Column("image_id", sa.Integer(), nullable=True),
        sa.Column("post_id", sa.Integer(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("published_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["image_id"], ["media.id"]),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_magazine_slides_order"), "magazine_slides", ["order"], unique=False)

    op.create_table(
        "gallery_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", JSONB, nullable=True),
        sa.Column("description", JSONB, nullable=True),
        sa.Column("media_type", sa.String(length=10), nullable=False),
        sa.Column("media_id", sa.Integer(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["media_id"], ["media.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_gallery_items_order"), "gallery_items", ["order"], unique=False)

    op.create_table(
        "history_pages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("hero_image_id", sa.Integer(), nullable=True),
        sa.Column("hero_title", JSONB, nullable=True),
        sa.Column("hero_subtitle", JSONB, nullable=True),
        sa.Column("hero_paragraphs", JSONB, nullable=False),
        sa.Column("timeline_events", JSONB, nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("meta_title", JSONB, nullable=True),
        sa.Column("meta_description", JSONB, nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["hero_image_id"], ["media.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_history_pages_status"), "history_pages", ["status"], unique=False)

    op.create_table(
        "legal_pages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(length=20), nullable=False),
        sa.Column("title", JSONB, nullable=False),
        sa.Column("description", JSONB, nullable=True),
        sa.Column("content", JSONB, nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("meta_title", JSONB, nullable=True),
        sa.Column("meta_description", JSONB, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("kind"),
    )
    op.create_index(op.f("ix_legal_pages_status"), "legal_pages", ["status"], unique=False)

    op.create_table(
        "team_rosters",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(length=40), nullable=False),
        sa.Column("title", JSONB, nullable=True),
        sa.Column("intro", JSONB, nullable=True),
        sa.Column("members", JSONB, nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key"),
    )
    op.create_index(op.f("ix_team_rosters_status"), "team_rosters", ["status"], unique=False)


def downgrade() -> None:
    op.drop_table("team_rosters")
    op.drop_table("legal_pages")
    op.drop_table("history_pages")
    op.drop_table("gallery_items")
    op.drop_table("magazine_slides")
    op.drop_table("sponsors")
    op.drop_table("tasks")
    op.drop_table("site_globals")
    op.drop_table("contact_submissions")
    op.drop_table("pages")
    op.drop_table("posts")
    op.drop_table("categories")
    op.drop_table("media")
    op.drop_table("users")
