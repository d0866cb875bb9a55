"""Post category helpers.

Categories arrive from the repository already resolved for one locale
(`CategoryOut`). Posts fetched without their category populated carry
`category=None`; every helper falls back to the "news" section then.
"""

from feuerwehr.schemas.content import CategoryOut
from feuerwehr.services.localization import Locale

DEFAULT_CATEGORY_SLUG = "news"

# Labels for the brigade's standing categories, keyed by German slug.
CATEGORY_LABELS: dict[str, dict[str, str]] = {
    "ausbildung": {"en": "Training", "de": "Ausbildung"},
    "bewerb": {"en": "Competition", "de": "Bewerb"},
    "bürgerinformation": {"en": "Citizen Information", "de": "Bürgerinformation"},
    "chargen": {"en": "Ranks", "de": "Chargen"},
    "einsatz": {"en": "Operation", "de": "Einsatz"},
    "event": {"en": "Event", "de": "Event"},
    "feuerwehrhaus": {"en": "Fire Station", "de": "Feuerwehrhaus"},
    "fuhrpark": {"en": "Vehicle Fleet", "de": "Fuhrpark"},
    "jugend": {"en": "Youth", "de": "Jugend"},
    "news": {"en": "News", "de": "News"},
    "notruf": {"en": "Emergency Call", "de": "Notruf"},
    "sachgebiete": {"en": "Subject Areas", "de": "Sachgebiete"},
    "sonderdienste": {"en": "Special Services", "de": "Sonderdienste"},
    "sondergeräte": {"en": "Special Equipment", "de": "Sondergeräte"},
    "spenden": {"en": "Donations", "de": "Spenden"},
    "zivilschutz": {"en": "Civil Defense", "de": "Zivilschutz"},
    "übung": {"en": "Exercise", "de": "Übung"},
}


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:] if text else ""


def category_label(category: CategoryOut | None) -> str:
    """Display label with the first letter capitalised."""
    if category is None:
        return ""
    return _capitalize_first(category.name or "")


def category_slug(category: CategoryOut | None) -> str:
    """Slug of the category, "news" when missing."""
    if category is None or not category.slug:
        return DEFAULT_CATEGORY_SLUG
    return category.slug


def category_path(category: CategoryOut | None) -> str:
    """First URL segment for posts in this category."""
    return category_slug(category)


def search_label(slug: str, locale: Locale) -> str:
    """Label used when matching and displaying search hits."""
    labels = CATEGORY_LABELS.get(slug)
    if labels:
        return labels.get(locale, slug)
    return slug
