"""
Review filters.

Compound predicate filtering that produces the working view of a review
collection, plus the category drill-down used by the analysis panel.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple, Union

from src.models.category import Category, get_category
from src.models.review import NEGATIVE, NEUTRAL, Review

logger = logging.getLogger(__name__)

ALL = "all"

DateLike = Union[str, date, None]


def _is_unset(value: Optional[str]) -> bool:
    return value is None or value == "" or value == ALL


def _to_date(value: DateLike) -> Optional[date]:
    """Calendar date from a date, an ISO date or an ISO timestamp."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class FilterCriteria:
    """
    Conjunction of review predicates.
    Unset values ("all", empty or None) match everything.
    """
    search: str = ""
    sentiment: str = ALL
    listing: str = ALL
    channel: str = ALL
    start_date: DateLike = None  # Inclusive
    end_date: DateLike = None  # Inclusive
    category: Optional[str] = None

    def matches(self, review: Review, category: Optional[Category] = None) -> bool:
        if self.search:
            term = self.search.lower()
            if not (
                term in review.text.lower()
                or term in review.author.lower()
                or term in review.source.lower()
            ):
                return False

        if not _is_unset(self.sentiment) and review.sentiment != self.sentiment:
            return False
        if not _is_unset(self.listing) and review.listing_name != self.listing:
            return False
        if not _is_unset(self.channel) and review.source != self.channel:
            return False

        review_day = review.timestamp.date()
        start = _to_date(self.start_date)
        end = _to_date(self.end_date)
        if start and review_day < start:
            return False
        if end and review_day > end:
            return False

        if category is not None and not category.matches_review(review):
            return False

        return True


def filter_reviews(reviews: Sequence[Review], criteria: FilterCriteria) -> List[Review]:
    """
    Apply filter criteria.

    Args:
        reviews: Normalized reviews
        criteria: Predicates to AND together

    Returns:
        Matching reviews in their original order
    """
    category = None
    if criteria.category:
        category = get_category(criteria.category)
        if category is None:
            # No keywords to match against
            logger.warning(f"Unknown category '{criteria.category}', no review can match")
            return []

    filtered = [r for r in reviews if criteria.matches(r, category)]
    logger.debug(f"Filter kept {len(filtered)} of {len(reviews)} reviews")
    return filtered


def filter_by_listing(reviews: Sequence[Review], listing: Optional[str]) -> List[Review]:
    """Reviews of one listing ("all" or None keeps everything)."""
    if _is_unset(listing):
        return list(reviews)
    return [r for r in reviews if r.listing_name == listing]


def category_drill_down(
    reviews: Sequence[Review],
    category: Category,
    query: str = ""
) -> List[Review]:
    """
    Negative and neutral reviews that mention a category.

    Args:
        reviews: Normalized reviews
        category: Category being drilled into
        query: Optional search against text, listing name or tags

    Returns:
        Matching reviews in their original order
    """
    matched = [
        r for r in reviews
        if r.sentiment in (NEGATIVE, NEUTRAL) and category.matches_review(r)
    ]

    if query:
        term = query.lower()
        matched = [
            r for r in matched
            if term in r.text.lower()
            or (r.listing_name and term in r.listing_name.lower())
            or any(term in tag.lower() for tag in r.tags)
        ]

    return matched


def default_date_range(reviews: Sequence[Review]) -> Optional[Tuple[date, date]]:
    """Earliest and latest calendar date in the collection (None if empty)."""
    if not reviews:
        return None
    days = [r.timestamp.date() for r in reviews]
    return min(days), max(days)
