"""
Insight data models.

Derived results of the aggregation engine. Recomputed on every pass,
never persisted.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from src.models.review import Review


@dataclass(frozen=True)
class PersistentIssue:
    """
    A negative tag that keeps coming back for one listing.
    Emitted when it occurs more than once over more than the minimum span.
    """
    listing: str
    issue: str  # The recurring tag
    first_occurrence: str  # ISO timestamp of the earliest review
    last_occurrence: str  # ISO timestamp of the latest review
    occurrence_count: int
    duration_days: int  # Span rounded up to whole days

    def to_dict(self) -> dict:
        return {
            "listing": self.listing,
            "issue": self.issue,
            "first_occurrence": self.first_occurrence,
            "last_occurrence": self.last_occurrence,
            "occurrence_count": self.occurrence_count,
            "duration_days": self.duration_days,
        }


@dataclass(frozen=True)
class CategoryScore:
    """1-5 health score of a category, driven by negative-review density."""
    name: str
    score: float
    issues_count: int

    def to_dict(self) -> dict:
        return {"name": self.name, "score": self.score, "issues_count": self.issues_count}


@dataclass(frozen=True)
class SentimentBreakdown:
    """Counts of positive, neutral and negative reviews."""
    positive: int = 0
    neutral: int = 0
    negative: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative

    def percentages(self) -> Dict[str, float]:
        """Share of each sentiment in percent (all zero for an empty set)."""
        total = self.total
        if total == 0:
            return {"positive": 0.0, "neutral": 0.0, "negative": 0.0}
        return {
            "positive": 100.0 * self.positive / total,
            "neutral": 100.0 * self.neutral / total,
            "negative": 100.0 * self.negative / total,
        }

    def to_dict(self) -> dict:
        return {"positive": self.positive, "neutral": self.neutral, "negative": self.negative}


@dataclass(frozen=True)
class ReportStats:
    """
    Statistics behind the audit and owner reports.
    """
    total: int
    average_rating: float  # On the 1-5 scale
    sentiment_counts: SentimentBreakdown
    top_tags: List[Tuple[str, int]] = field(default_factory=list)  # Negative reviews only
    recent_positive: List[Review] = field(default_factory=list)
    recent_negative: List[Review] = field(default_factory=list)
    category_scores: List[CategoryScore] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "average_rating": round(self.average_rating, 2),
            "sentiment_counts": self.sentiment_counts.to_dict(),
            "top_tags": [{"name": name, "count": count} for name, count in self.top_tags],
            "recent_positive": [r.to_dict() for r in self.recent_positive],
            "recent_negative": [r.to_dict() for r in self.recent_negative],
            "category_scores": [c.to_dict() for c in self.category_scores],
        }
