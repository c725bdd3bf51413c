"""
Category data model.

Named keyword sets used for tag inference, category health scoring,
report generation and drill-down filtering.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from config.lexicon import CATEGORY_KEYWORDS


@dataclass(frozen=True)
class Category:
    """
    A topical review category (e.g. "Cleanliness") and its keywords.
    Keywords are lower-case and matched as plain substrings.
    """
    name: str
    keywords: Tuple[str, ...]

    def matches_text(self, text: str) -> bool:
        """True if any keyword appears in the text (case-insensitive)."""
        lower_text = (text or "").lower()
        return any(keyword in lower_text for keyword in self.keywords)

    def matches_tag(self, tag: str) -> bool:
        """True if the tag contains any keyword (case-insensitive)."""
        lower_tag = tag.lower()
        return any(keyword in lower_tag for keyword in self.keywords)

    def matches_review(self, review) -> bool:
        """True if one of the review's tags or its text hits this category."""
        return (
            any(self.matches_tag(tag) for tag in review.tags)
            or self.matches_text(review.text)
        )


CATEGORIES: Tuple[Category, ...] = tuple(
    Category(name=name, keywords=tuple(dict.fromkeys(keywords)))
    for name, keywords in CATEGORY_KEYWORDS
)


def get_category(name: str) -> Optional[Category]:
    """Look up a category by name (case-insensitive)."""
    if not name:
        return None
    lower_name = name.lower()
    for category in CATEGORIES:
        if category.name.lower() == lower_name:
            return category
    return None
