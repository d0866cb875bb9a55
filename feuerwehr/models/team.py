"""Team roster model.

One roster per team page (command, clerks, active members, youth, reserve).
Members are stored inline, ordered by their `order` key:

    {"name": "Max Muster", "position": {"de": "Kommandant", "en": "Commander"},
     "rank": "HBI", "email": null, "image_id": 12, "bio": {...},
     "card_media": {"type": "video", "video_url": "https://..."}, "order": 0}
"""

from typing import Any

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.stores.postgres import Base

ROSTER_KEYS = ("kommando", "clerk", "active-members", "fire-brigade-youth", "reserve")


class TeamRoster(TimestampMixin, Base):
    """Members shown on one team page."""

    __tablename__ = "team_rosters"

    id: Mapped[int] = mapped_column(primary_key=True)

    key: Mapped[str] = mapped_column(String(40), unique=True)
    title: Mapped[LocaleMap] = localized_column()
    intro: Mapped[LocaleMap] = localized_column()
    members: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, default=list)

    status: Mapped[str] = mapped_column(String(20), default="published", index=True)

    def __repr__(self) -> str:
        return f"<TeamRoster {self.key} ({len(self.members or [])} members)>"
