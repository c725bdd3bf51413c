"""
Report Generator.

Builds the Internal Performance Audit and the Owner Summary for all
listings or for a single listing.
"""

import logging
from typing import Dict, Optional, Sequence

from src.agents.aggregation import ReviewAggregator
from src.agents.filtering import filter_by_listing
from src.models.review import Review
from src.utils.dates import utc_now_iso
import config.settings as settings

logger = logging.getLogger(__name__)

INTERNAL = "internal"
EXTERNAL = "external"
REPORT_TYPES = (INTERNAL, EXTERNAL)

ALL_LISTINGS_LABEL = "All Listings"


class ReportGenerator:
    """
    Turns report statistics into exportable report documents.

    Internal audit: average rating, category performance, recurring tags,
    every negative review.
    Owner summary: headline numbers, sentiment shares, top three issues,
    five most recent negative reviews.
    """

    def __init__(self, aggregator: Optional[ReviewAggregator] = None):
        self.aggregator = aggregator or ReviewAggregator()

    def generate(
        self,
        reviews: Sequence[Review],
        report_type: str,
        listing: Optional[str] = None,
        generated_at: Optional[str] = None
    ) -> Optional[Dict]:
        """
        Build a report.

        Args:
            reviews: Full normalized collection
            report_type: "internal" or "external"
            listing: Listing to report on (None or "all" for every listing)
            generated_at: Report timestamp (defaults to now)

        Returns:
            Report dict, or None if the target has no reviews

        Raises:
            ValueError: If report_type is unknown
        """
        if report_type not in REPORT_TYPES:
            raise ValueError(f"Invalid report type: {report_type}. Must be one of {REPORT_TYPES}")

        target = filter_by_listing(reviews, listing)
        target_label = listing if listing and listing != "all" else ALL_LISTINGS_LABEL

        if not target:
            logger.warning(f"No reviews for {target_label}, skipping {report_type} report")
            return None

        generated_at = generated_at or utc_now_iso()

        if report_type == INTERNAL:
            report = self._internal_audit(target, target_label, generated_at)
        else:
            report = self._owner_summary(target, target_label, generated_at)

        logger.info(f"Built {report_type} report for {target_label} ({len(target)} reviews)")
        return report

    def _internal_audit(self, reviews: Sequence[Review], target: str, generated_at: str) -> Dict:
        stats = self.aggregator.report_stats(reviews)

        return {
            "title": "Internal Performance Audit",
            "report_type": INTERNAL,
            "target": target,
            "generated_at": generated_at,
            "total_reviews": stats.total,
            "average_rating": round(stats.average_rating, 1),
            "sentiment_counts": stats.sentiment_counts.to_dict(),
            "category_performance": [c.to_dict() for c in stats.category_scores],
            "critical_issues": [
                {
                    "name": name,
                    "count": count,
                    "share": min(100.0, round(100.0 * count / stats.total, 1)),
                }
                for name, count in stats.top_tags
            ],
            "persistent_issues": [
                issue.to_dict() for issue in self.aggregator.persistent_issues(reviews)
            ],
            "negative_reviews": [r.to_dict() for r in stats.recent_negative],
        }

    def _owner_summary(self, reviews: Sequence[Review], target: str, generated_at: str) -> Dict:
        stats = self.aggregator.report_stats(reviews)
        shares = stats.sentiment_counts.percentages()

        return {
            "title": "Owner Summary",
            "report_type": EXTERNAL,
            "target": target,
            "generated_at": generated_at,
            "total_reviews": stats.total,
            "average_rating": round(stats.average_rating, 1),
            "sentiment_share": {key: round(value, 1) for key, value in shares.items()},
            "top_issues": [
                {"name": name, "count": count}
                for name, count in stats.top_tags[:settings.OWNER_SUMMARY_TAG_LIMIT]
            ],
            "recent_positive": [r.to_dict() for r in stats.recent_positive],
            "recent_negative": [
                r.to_dict() for r in stats.recent_negative[:settings.OWNER_SUMMARY_NEGATIVE_LIMIT]
            ],
            "footer": f"Generated by {settings.REPORT_BRAND}",
        }
