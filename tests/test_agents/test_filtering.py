"""
Unit tests for review filtering.
"""

import pytest
from datetime import date
from src.agents.filtering import (
    FilterCriteria,
    category_drill_down,
    default_date_range,
    filter_by_listing,
    filter_reviews,
)
from src.models.category import get_category
from src.models.review import Review


def make_review(review_id, text, sentiment="negative", date_str="2026-01-15", **kwargs):
    return Review(
        id=review_id,
        source=kwargs.get("source", "Google"),
        date=f"{date_str}T10:00:00.000Z",
        rating=kwargs.get("rating", 2),
        author=kwargs.get("author", "Guest"),
        text=text,
        sentiment=sentiment,
        listing_name=kwargs.get("listing"),
        tags=tuple(kwargs.get("tags", ()))
    )


@pytest.fixture
def reviews():
    return [
        make_review("1", "Room was dirty", "negative", "2026-01-01", listing="Villa A", tags=["Cleanliness"]),
        make_review("2", "Lovely view", "positive", "2026-01-10", listing="Villa A", source="Yelp"),
        make_review("3", "Wifi was slow", "neutral", "2026-01-20", listing="Villa B", author="Dusty"),
        make_review("4", "Check in took ages", "negative", "2026-01-31", listing="Villa B", tags=["Check-in"]),
    ]


def test_no_criteria_keeps_everything(reviews):
    """Test that default criteria are a no-op."""
    assert filter_reviews(reviews, FilterCriteria()) == reviews


def test_search_matches_text_author_and_source(reviews):
    """Test case-insensitive search over text, author and source."""
    assert [r.id for r in filter_reviews(reviews, FilterCriteria(search="DIRTY"))] == ["1"]
    assert [r.id for r in filter_reviews(reviews, FilterCriteria(search="dusty"))] == ["3"]
    assert [r.id for r in filter_reviews(reviews, FilterCriteria(search="yelp"))] == ["2"]


def test_sentiment_listing_and_channel(reviews):
    """Test equality predicates."""
    criteria = FilterCriteria(sentiment="negative", listing="Villa B")
    assert [r.id for r in filter_reviews(reviews, criteria)] == ["4"]

    criteria = FilterCriteria(channel="Google", listing="all", sentiment="all")
    assert [r.id for r in filter_reviews(reviews, criteria)] == ["1", "3", "4"]


def test_date_range_is_inclusive(reviews):
    """Test that both bounds include the whole day."""
    criteria = FilterCriteria(start_date="2026-01-10", end_date="2026-01-20")
    assert [r.id for r in filter_reviews(reviews, criteria)] == ["2", "3"]

    criteria = FilterCriteria(start_date=date(2026, 1, 31))
    assert [r.id for r in filter_reviews(reviews, criteria)] == ["4"]


def test_category_filter(reviews):
    """Test category matching on tags and text."""
    criteria = FilterCriteria(category="Cleanliness")
    assert [r.id for r in filter_reviews(reviews, criteria)] == ["1"]

    criteria = FilterCriteria(category="Facilities")
    assert [r.id for r in filter_reviews(reviews, criteria)] == ["3"]


def test_unknown_category_matches_nothing(reviews):
    """Test that a category without keywords keeps no review."""
    assert filter_reviews(reviews, FilterCriteria(category="Parking")) == []


def test_filter_preserves_order(reviews):
    """Test that results keep the input order."""
    reversed_reviews = list(reversed(reviews))
    result = filter_reviews(reversed_reviews, FilterCriteria(listing="Villa A"))
    assert [r.id for r in result] == ["2", "1"]


def test_filter_by_listing(reviews):
    """Test the listing selector."""
    assert len(filter_by_listing(reviews, "all")) == 4
    assert len(filter_by_listing(reviews, None)) == 4
    assert [r.id for r in filter_by_listing(reviews, "Villa A")] == ["1", "2"]
    assert filter_by_listing(reviews, "Villa Z") == []


def test_category_drill_down(reviews):
    """Test drill-down over negative and neutral reviews."""
    facilities = get_category("Facilities")
    assert [r.id for r in category_drill_down(reviews, facilities)] == ["3"]

    check_in = get_category("Check-in")
    assert [r.id for r in category_drill_down(reviews, check_in, query="villa b")] == ["4"]
    assert category_drill_down(reviews, check_in, query="villa a") == []


def test_drill_down_skips_positive_reviews():
    """Test that positive mentions are not drilled into."""
    reviews = [make_review("1", "Very clean room", "positive")]
    assert category_drill_down(reviews, get_category("Cleanliness")) == []


def test_default_date_range(reviews):
    """Test the date range bounds."""
    assert default_date_range(reviews) == (date(2026, 1, 1), date(2026, 1, 31))
    assert default_date_range([]) is None


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
