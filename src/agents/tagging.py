"""
Tag Classifier.

Assigns topical tags to a review, either from an explicit tags column or
by matching the review text against the category keyword table.
"""

import logging
from typing import Any, List, Optional, Sequence

from config.lexicon import FALLBACK_TAG
from src.models.category import CATEGORIES, Category
from src.models.review import NEGATIVE
from src.utils.fields import has_value

logger = logging.getLogger(__name__)


def coerce_tags(value: Any) -> List[str]:
    """
    Turn an explicit tags value into an ordered list of tags.

    Sequences are kept as they are; strings are split on commas and
    each element trimmed. Empty fragments are dropped.
    """
    if not has_value(value):
        return []
    if isinstance(value, (list, tuple)):
        return [str(tag) for tag in value]
    return [tag.strip() for tag in str(value).split(",") if tag.strip()]


class TagClassifier:
    """
    Keyword-based topical tagging.

    Categories are tested independently, so one review can collect several
    tags. Tags follow category declaration order.
    """

    def __init__(
        self,
        categories: Sequence[Category] = CATEGORIES,
        fallback_tag: str = FALLBACK_TAG
    ):
        self.categories = tuple(categories)
        self.fallback_tag = fallback_tag

    def classify(
        self,
        text: str,
        explicit_tags: Optional[Any],
        sentiment: str
    ) -> List[str]:
        """
        Tag a review.

        Args:
            text: Review text
            explicit_tags: Value of the tags column (string or sequence), if any
            sentiment: Sentiment already assigned to the review

        Returns:
            Ordered list of tags (possibly empty)
        """
        if has_value(explicit_tags):
            return coerce_tags(explicit_tags)

        tags = [c.name for c in self.categories if c.matches_text(text)]

        if not tags and sentiment == NEGATIVE:
            tags.append(self.fallback_tag)

        return tags
