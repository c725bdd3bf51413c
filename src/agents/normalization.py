"""
Review Normalization Agent.

Converts raw CSV rows with unknown column names into canonical Review
records: resolves fields, normalizes dates, and classifies sentiment and tags.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from config.lexicon import FIELD_CANDIDATES
from src.agents.sentiment import SentimentClassifier
from src.agents.tagging import TagClassifier
from src.models.review import Review
from src.utils.dates import normalize_date, utc_now_iso
from src.utils.fields import RawRow, has_value, resolve_field
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass
class NormalizationResult:
    """Normalized reviews plus the diagnostics of the run."""
    reviews: List[Review] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)
    skipped_rows: List[int] = field(default_factory=list)  # Row indexes without text


def parse_rating(value: Any) -> float:
    """Numeric rating from a cell; 0 when missing or unparseable."""
    if not has_value(value):
        return 0.0
    try:
        rating = float(str(value).strip())
    except ValueError:
        return 0.0
    if math.isnan(rating) or math.isinf(rating):
        return 0.0
    return rating


class ReviewNormalizer:
    """
    Maps raw rows onto the canonical review schema.

    Per row, in order:
    1. Rating, text, date, source, author, listing name
    2. Sentiment (explicit column, else rating or keywords)
    3. Tags (explicit column, else category keywords)
    4. Id (explicit column, else csv-<row index>)

    Rows without text are dropped.
    """

    def __init__(
        self,
        sentiment_classifier: Optional[SentimentClassifier] = None,
        tag_classifier: Optional[TagClassifier] = None,
        field_candidates: Mapping[str, Sequence[str]] = FIELD_CANDIDATES,
        default_source: str = settings.DEFAULT_SOURCE,
        default_author: str = settings.DEFAULT_AUTHOR
    ):
        """
        Initialize normalizer.

        Args:
            sentiment_classifier: Classifier for sentiment (default rules if None)
            tag_classifier: Classifier for tags (default categories if None)
            field_candidates: Candidate column names per semantic field
            default_source: Source used when no channel column resolves
            default_author: Author used when no author column resolves
        """
        self.sentiment_classifier = sentiment_classifier or SentimentClassifier(
            strict=settings.STRICT_SENTIMENT,
            positive_threshold=settings.POSITIVE_RATING_THRESHOLD,
            neutral_rating=settings.NEUTRAL_RATING,
            negative_threshold=settings.NEGATIVE_RATING_THRESHOLD
        )
        self.tag_classifier = tag_classifier or TagClassifier()
        self.field_candidates = field_candidates
        self.default_source = default_source
        self.default_author = default_author

    def normalize(
        self,
        rows: Sequence[RawRow],
        ingested_at: Optional[str] = None
    ) -> List[Review]:
        """
        Convert raw rows into canonical reviews.

        Args:
            rows: Raw rows in input order
            ingested_at: Timestamp used for rows without a usable date
                (defaults to the time of the call)

        Returns:
            Reviews for every row with text, in input order
        """
        return self.normalize_batch(rows, ingested_at).reviews

    def normalize_batch(
        self,
        rows: Sequence[RawRow],
        ingested_at: Optional[str] = None
    ) -> NormalizationResult:
        """
        Convert raw rows and keep the diagnostics of the run.

        Args:
            rows: Raw rows in input order
            ingested_at: Timestamp used for rows without a usable date

        Returns:
            NormalizationResult with reviews, diagnostics and skipped row indexes
        """
        ingested_at = ingested_at or utc_now_iso()
        result = NormalizationResult()

        result.diagnostics.append(f"Loaded {len(rows)} raw rows")
        if rows:
            result.diagnostics.append(f"Keys row 0: {', '.join(map(str, rows[0].keys()))}")

        for idx, row in enumerate(rows):
            review = self.normalize_row(row, idx, ingested_at)

            if review is None:
                result.skipped_rows.append(idx)
                if len(result.skipped_rows) <= settings.MAX_LOGGED_SKIPPED_ROWS:
                    result.diagnostics.append(
                        f"Skipped row {idx}: No text found. Data: {json.dumps(row, default=str)}"
                    )
                continue

            result.reviews.append(review)

        result.diagnostics.append(f"Mapped {len(result.reviews)} valid reviews.")

        if result.skipped_rows:
            logger.warning(f"Dropped {len(result.skipped_rows)} rows without review text")
        logger.info(f"Mapped {len(result.reviews)} reviews from {len(rows)} rows")

        return result

    def normalize_row(
        self,
        row: RawRow,
        index: int,
        ingested_at: Optional[str] = None
    ) -> Optional[Review]:
        """
        Convert one raw row.

        Args:
            row: Raw row
            index: Zero-based position of the row in its batch
            ingested_at: Fallback timestamp for missing dates

        Returns:
            Review, or None if the row has no text
        """
        rating = parse_rating(self._resolve(row, "rating"))

        raw_text = self._resolve(row, "text")
        text = str(raw_text).strip() if has_value(raw_text) else ""
        if not text:
            logger.debug(f"Row {index} has no review text")
            return None

        date = normalize_date(self._resolve(row, "date"), fallback=ingested_at)
        source = self._resolve_str(row, "source") or self.default_source
        author = self._resolve_str(row, "author") or self.default_author
        listing_name = self._resolve_str(row, "listing_name")

        sentiment = self.sentiment_classifier.classify(
            rating, text, self._resolve(row, "sentiment")
        )
        tags = self.tag_classifier.classify(text, self._resolve(row, "tags"), sentiment)

        # Only an exact "id" column counts as a source id
        raw_id = row.get("id")
        review_id = str(raw_id).strip() if has_value(raw_id) else f"{settings.ID_PREFIX}{index}"

        return Review(
            id=review_id,
            source=source,
            date=date,
            rating=rating,
            author=author,
            text=text,
            sentiment=sentiment,
            listing_name=listing_name,
            tags=tuple(tags),
        )

    def _resolve(self, row: RawRow, field_name: str) -> Optional[Any]:
        return resolve_field(row, self.field_candidates.get(field_name, ()))

    def _resolve_str(self, row: RawRow, field_name: str) -> Optional[str]:
        value = self._resolve(row, field_name)
        return str(value).strip() if has_value(value) else None


# Design Rationale and Trade-offs:
#
# 1. Why drop rows without text instead of failing the upload?
#    - Exports often contain rating-only rows
#    - Skipped rows are kept in the diagnostics for the upload screen
#    - Trade-off: Silent data loss, mitigated by the diagnostics
#
# 2. Why ids from the original row index?
#    - Ids stay stable when other rows are dropped
#    - Trade-off: Ids have gaps
#
# 3. Why inject the classifiers?
#    - Tests and callers can swap keyword sets or thresholds
#    - Trade-off: More constructor arguments
