"""
Review data model.

Represents the canonical review produced by the normalization pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from src.utils.dates import parse_timestamp

POSITIVE = "positive"
NEUTRAL = "neutral"
NEGATIVE = "negative"
SENTIMENTS = (POSITIVE, NEUTRAL, NEGATIVE)


@dataclass(frozen=True)
class Review:
    """
    Canonical guest review.
    One record per input row that carried usable text.
    """
    id: str  # Source id, or csv-<row index>
    source: str  # Channel label ("Google", "Yelp", "CSV Upload", ...)
    date: str  # ISO-8601 UTC timestamp
    rating: float  # Raw rating, 0 when missing; not rescaled
    author: str
    text: str  # Never empty
    sentiment: str
    listing_name: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.text:
            raise ValueError(f"Review {self.id} has empty text")
        # Accept any sequence of tags but store an immutable tuple
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def timestamp(self) -> datetime:
        """Review date as a timezone-aware datetime."""
        return parse_timestamp(self.date)

    @property
    def scaled_rating(self) -> float:
        """Rating on a 1-5 scale; 10-point ratings are halved."""
        return self.rating / 2 if self.rating > 5 else self.rating

    @classmethod
    def from_dict(cls, data: dict) -> "Review":
        """Create Review from an exported dict."""
        return cls(
            id=data["id"],
            source=data["source"],
            date=data["date"],
            rating=float(data.get("rating", 0)),
            author=data.get("author", ""),
            text=data["text"],
            sentiment=data["sentiment"],
            listing_name=data.get("listingName"),
            tags=tuple(data.get("tags", [])),
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.id,
            "source": self.source,
            "date": self.date,
            "rating": self.rating,
            "author": self.author,
            "text": self.text,
            "listingName": self.listing_name,
            "sentiment": self.sentiment,
            "tags": list(self.tags),
        }


# Design Rationale and Trade-offs:
#
# 1. Why a frozen dataclass?
#    - Reviews are shared by every panel and filter
#    - Trade-off: Corrections need a new instance
#
# 2. Why keep the date as an ISO string?
#    - Exports and tables carry it unchanged; timestamp parses on demand
