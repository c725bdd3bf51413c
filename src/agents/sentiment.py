"""
Sentiment Classifier.

Assigns positive / neutral / negative to a review from an explicit
sentiment column, the numeric rating, or keyword heuristics.
"""

import logging
from typing import Any, Optional, Sequence

from config.lexicon import NEGATIVE_KEYWORDS, POSITIVE_KEYWORDS
from src.models.review import NEGATIVE, NEUTRAL, POSITIVE, SENTIMENTS
from src.utils.fields import has_value

logger = logging.getLogger(__name__)


class SentimentClassifier:
    """
    Deterministic rule-based sentiment classification.

    Decision order:
    1. Explicit sentiment value (lower-cased; unknown values only pass
       through when strict is off)
    2. Keyword scan of the text when the rating is missing (0)
    3. Rating thresholds otherwise
    """

    def __init__(
        self,
        strict: bool = True,
        positive_keywords: Sequence[str] = POSITIVE_KEYWORDS,
        negative_keywords: Sequence[str] = NEGATIVE_KEYWORDS,
        positive_threshold: float = 4,
        neutral_rating: float = 3,
        negative_threshold: float = 2
    ):
        """
        Initialize sentiment classifier.

        Args:
            strict: Ignore explicit values that are not positive/neutral/negative
            positive_keywords: Keywords signalling a positive review
            negative_keywords: Keywords signalling a negative review
            positive_threshold: Minimum rating counted as positive
            neutral_rating: Rating counted as neutral
            negative_threshold: Maximum rating counted as negative
        """
        self.strict = strict
        self.positive_keywords = tuple(positive_keywords)
        self.negative_keywords = tuple(negative_keywords)
        self.positive_threshold = positive_threshold
        self.neutral_rating = neutral_rating
        self.negative_threshold = negative_threshold

    def classify(
        self,
        rating: float,
        text: str,
        explicit_sentiment: Optional[Any] = None
    ) -> str:
        """
        Classify a review.

        Args:
            rating: Numeric rating (0 when missing or unparseable)
            text: Review text
            explicit_sentiment: Value of the sentiment column, if any

        Returns:
            Sentiment label
        """
        if has_value(explicit_sentiment):
            sentiment = str(explicit_sentiment).strip().lower()
            if not self.strict or sentiment in SENTIMENTS:
                return sentiment
            logger.warning(
                f"Ignoring unknown explicit sentiment '{explicit_sentiment}', "
                f"falling back to heuristics"
            )

        if rating == 0:
            return self.classify_text(text)

        return self.classify_rating(rating)

    def classify_text(self, text: str) -> str:
        """Keyword heuristic; positive keywords are checked first."""
        lower_text = (text or "").lower()

        if any(keyword in lower_text for keyword in self.positive_keywords):
            return POSITIVE
        if any(keyword in lower_text for keyword in self.negative_keywords):
            return NEGATIVE
        return NEUTRAL

    def classify_rating(self, rating: float) -> str:
        """Threshold classification on the raw rating."""
        if rating >= self.positive_threshold:
            return POSITIVE
        if rating == self.neutral_rating:
            return NEUTRAL
        if rating <= self.negative_threshold:
            return NEGATIVE
        # Fractional ratings between the thresholds (e.g. 3.5)
        return NEUTRAL
