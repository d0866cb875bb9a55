"""SQLAlchemy ORM models.

Models represent the CMS collections and globals:
- users, media, categories, posts, pages
- contact_submissions: messages from the public contact form
- site_globals: singleton configuration documents (site settings, banners, ...)
- tasks, sponsors, magazine_slides: home page sections
- gallery_items, history_pages, legal_pages, team_rosters
"""

from feuerwehr.models.user import User
from feuerwehr.models.media import Media
from feuerwehr.models.category import Category
from feuerwehr.models.post import Post
from feuerwehr.models.page import Page
from feuerwehr.models.contact import ContactSubmission
from feuerwehr.models.site_global import SiteGlobal
from feuerwehr.models.home import MagazineSlide, Sponsor, Task
from feuerwehr.models.gallery import GalleryItem
from feuerwehr.models.history import HistoryPage
from feuerwehr.models.legal import LegalPage
from feuerwehr.models.team import TeamRoster

__all__ = [
    "User",
    "Media",
    "Category",
    "Post",
    "Page",
    "ContactSubmission",
    "SiteGlobal",
    "Task",
    "Sponsor",
    "MagazineSlide",
    "GalleryItem",
    "HistoryPage",
    "LegalPage",
    "TeamRoster",
]
