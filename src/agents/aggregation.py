"""
Review Aggregator.

Read-only analytics over a normalized review collection: sentiment mix,
top issues, persistent issues, category health scores and report statistics.
"""

import logging
import math
from collections import Counter
from datetime import timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from src.models.category import CATEGORIES, Category
from src.models.insight import CategoryScore, PersistentIssue, ReportStats, SentimentBreakdown
from src.models.review import NEGATIVE, NEUTRAL, POSITIVE, Review
import config.settings as settings

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def scale_rating(rating: float) -> float:
    """Bring a rating onto the 1-5 scale; ratings above 5 are out of 10."""
    return rating / 2 if rating > settings.RATING_SCALE_MAX else rating


def _newest_first(reviews: Sequence[Review]) -> List[Review]:
    return sorted(reviews, key=lambda r: r.timestamp, reverse=True)


class ReviewAggregator:
    """
    Computes dashboard and report analytics.

    Every method is a pure function of its arguments; the input collection
    is never modified.
    """

    def __init__(self, categories: Sequence[Category] = CATEGORIES):
        self.categories = tuple(categories)

    def sentiment_distribution(self, reviews: Sequence[Review]) -> SentimentBreakdown:
        """Count positive, neutral and negative reviews."""
        counts = Counter(r.sentiment for r in reviews)
        return SentimentBreakdown(
            positive=counts.get(POSITIVE, 0),
            neutral=counts.get(NEUTRAL, 0),
            negative=counts.get(NEGATIVE, 0)
        )

    def average_rating(self, reviews: Sequence[Review]) -> float:
        """Mean rating on the 1-5 scale; 0 for an empty collection."""
        if not reviews:
            return 0.0
        return sum(scale_rating(r.rating) for r in reviews) / len(reviews)

    def top_issues(
        self,
        reviews: Sequence[Review],
        limit: int = settings.TOP_ISSUES_LIMIT
    ) -> List[Tuple[str, int]]:
        """
        Most frequent tags among negative reviews.

        Args:
            reviews: Normalized reviews
            limit: Number of tags to return

        Returns:
            (tag, count) pairs, count descending; ties keep first-seen order
        """
        tag_counts = Counter(
            tag
            for r in reviews if r.sentiment == NEGATIVE
            for tag in r.tags
        )
        return tag_counts.most_common(limit)

    def category_scores(self, reviews: Sequence[Review]) -> List[CategoryScore]:
        """
        Health score (1-5) of every category.

        A category loses one point for every 20% of the collection made of
        negative reviews that mention it, down to a floor of 1. A category
        with issues but no full deduction scores 4.5.
        """
        total = len(reviews)
        negative_reviews = [r for r in reviews if r.sentiment == NEGATIVE]

        scores = []
        for category in self.categories:
            issues_count = sum(1 for r in negative_reviews if category.matches_review(r))
            scores.append(CategoryScore(
                name=category.name,
                score=self._score(issues_count, total),
                issues_count=issues_count
            ))
        return scores

    def _score(self, issues_count: int, total: int) -> float:
        if issues_count == 0 or total == 0:
            return 5.0

        deduction = min(
            settings.MAX_CATEGORY_DEDUCTION,
            math.floor((issues_count / total) * 10 * settings.CATEGORY_DEDUCTION_WEIGHT)
        )
        if deduction == 0:
            return 4.5
        return float(max(1, 5 - deduction))

    def persistent_issues(
        self,
        reviews: Sequence[Review],
        min_span_days: int = settings.PERSISTENT_ISSUE_MIN_DAYS
    ) -> List[PersistentIssue]:
        """
        Negative tags that recur for the same listing over a long period.

        Negative reviews with a listing name are grouped by (listing, tag).
        A group is reported when it has more than one review and its first
        and last review are more than min_span_days apart.

        Returns:
            Persistent issues, longest span first
        """
        groups: Dict[Tuple[str, str], List[Review]] = {}
        for review in reviews:
            if review.sentiment != NEGATIVE or not review.listing_name:
                continue
            for tag in review.tags:
                groups.setdefault((review.listing_name, tag), []).append(review)

        min_span = timedelta(days=min_span_days)
        issues = []
        for (listing, tag), group in groups.items():
            if len(group) <= 1:
                continue

            first = min(group, key=lambda r: r.timestamp)
            last = max(group, key=lambda r: r.timestamp)
            span = last.timestamp - first.timestamp
            if span <= min_span:
                continue

            issues.append(PersistentIssue(
                listing=listing,
                issue=tag,
                first_occurrence=first.date,
                last_occurrence=last.date,
                occurrence_count=len(group),
                duration_days=math.ceil(span / ONE_DAY)
            ))

        issues.sort(key=lambda i: i.duration_days, reverse=True)

        if issues:
            logger.info(f"Detected {len(issues)} persistent issues")
        return issues

    def report_stats(self, reviews: Sequence[Review]) -> ReportStats:
        """
        Statistics for the audit and owner reports.

        Returns:
            ReportStats; all counts are zero for an empty collection
        """
        positives = [r for r in reviews if r.sentiment == POSITIVE]
        negatives = [r for r in reviews if r.sentiment == NEGATIVE]

        return ReportStats(
            total=len(reviews),
            average_rating=self.average_rating(reviews),
            sentiment_counts=self.sentiment_distribution(reviews),
            top_tags=self.top_issues(reviews, settings.TOP_ISSUES_LIMIT),
            recent_positive=_newest_first(positives)[:settings.RECENT_POSITIVE_LIMIT],
            recent_negative=_newest_first(negatives),
            category_scores=self.category_scores(reviews)
        )

    def overall_assessment(self, reviews: Sequence[Review], listing_label: str) -> Optional[str]:
        """One-line summary of a listing (None when there are no reviews)."""
        if not reviews:
            return None
        return (
            f"{listing_label} has an average rating of "
            f"{self.average_rating(reviews):.1f} from {len(reviews)} reviews."
        )

    def top_listings_for_category(
        self,
        reviews: Sequence[Review],
        category: Category,
        limit: int = settings.TOP_LISTINGS_LIMIT
    ) -> List[Tuple[str, int]]:
        """
        Listings with the most non-positive reviews in a category.

        Returns:
            (listing, count) pairs, count descending
        """
        counts = Counter(
            r.listing_name
            for r in reviews
            if r.listing_name and r.sentiment != POSITIVE and category.matches_review(r)
        )
        return counts.most_common(limit)

    def listing_options(self, reviews: Sequence[Review]) -> List[str]:
        """Distinct listing names, sorted."""
        return sorted({r.listing_name for r in reviews if r.listing_name})

    def channel_options(self, reviews: Sequence[Review]) -> List[str]:
        """Distinct sources, sorted."""
        return sorted({r.source for r in reviews if r.source})


# Design Rationale and Trade-offs:
#
# 1. Why recompute everything on every call?
#    - Collections are small (one property manager's reviews)
#    - No cache to invalidate when filters change
#    - Trade-off: Repeated work per dashboard refresh, acceptable
#
# 2. Why Counter.most_common for rankings?
#    - Ties keep first-seen order
#    - Trade-off: Ranking among ties depends on input order
#
# 3. Why halve ratings above 5 only here?
#    - Stored ratings stay as exported
#    - Trade-off: A 5-point review of 5 and a 10-point review of 5 look alike
