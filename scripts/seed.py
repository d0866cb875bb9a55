#!/usr/bin/env python3
"""Seed database with initial content.

Creates:
- The brigade's standing post categories (German and English names/slugs)
- The four core tasks shown on the home page
- Every CMS global with its default document

The script is idempotent: existing rows are left untouched.

Usage:
    python -m scripts.seed
"""

import asyncio
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feuerwehr.models import Category, Task
from feuerwehr.services.categories import CATEGORY_LABELS
from feuerwehr.services.cms_globals import ensure_globals
from feuerwehr.services.slugs import slugify
from feuerwehr.stores import postgres
from feuerwehr.stores.cms import SqlContentRepository

load_dotenv()

# ============================================================
# Task Definitions
# ============================================================

TASKS = [
    {
        "icon": "rescue",
        "title": {"de": "Retten", "en": "Rescue"},
        "description": {
            "de": "Menschen und Tiere aus Gefahrensituationen befreien.",
            "en": "Freeing people and animals from dangerous situations.",
        },
    },
    {
        "icon": "extinguish",
        "title": {"de": "Löschen", "en": "Extinguish"},
        "description": {
            "de": "Brände bekämpfen und Schäden begrenzen.",
            "en": "Fighting fires and limiting damage.",
        },
    },
    {
        "icon": "recover",
        "title": {"de": "Bergen", "en": "Recover"},
        "description": {
            "de": "Fahrzeuge, Sachwerte und Verunglückte bergen.",
            "en": "Recovering vehicles, property and casualties.",
        },
    },
    {
        "icon": "protect",
        "title": {"de": "Schützen", "en": "Protect"},
        "description": {
            "de": "Vorbeugender Brandschutz und Katastrophenschutz.",
            "en": "Preventive fire protection and disaster relief.",
        },
    },
]


async def seed_database() -> None:
    """Seed categories, tasks and globals."""
    await postgres.init_db()
    try:
        print("Seeding database...")

        async with postgres.get_session() as session:
            print("\nCreating categories...")
            await seed_categories(session)

            print("\nCreating tasks...")
            await seed_tasks(session)

        print("\nCreating globals...")
        created = await ensure_globals(SqlContentRepository())
        for slug in created:
            print(f"  + {slug}")
        if not created:
            print("  (all globals exist)")

        print("\nDatabase seeded successfully!")
    finally:
        await postgres.close_db()


async def seed_categories(session: AsyncSession) -> None:
    for slug, labels in CATEGORY_LABELS.items():
        result = await session.execute(select(Category).where(Category.slug["de"].astext == slug))
        if result.scalar_one_or_none() is not None:
            print(f"  = {slug} (exists)")
            continue

        session.add(
            Category(
                name={"de": labels["de"], "en": labels["en"]},
                slug={"de": slug, "en": slugify(labels["en"])},
                active=True,
            )
        )
        await session.flush()
        print(f"  + {slug}")


async def seed_tasks(session: AsyncSession) -> None:
    existing = (await session.execute(select(func.count(Task.id)))).scalar_one()
    if existing:
        print(f"  = {existing} tasks exist, skipping")
        return

    for order, task in enumerate(TASKS):
        session.add(Task(order=order, **task))
        print(f"  + {task['icon']}")
    await session.flush()


if __name__ == "__main__":
    asyncio.run(seed_database())
