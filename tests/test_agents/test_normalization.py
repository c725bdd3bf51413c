"""
Unit tests for the Review Normalizer.
"""

import pytest
from src.agents.normalization import ReviewNormalizer, parse_rating
from src.agents.sentiment import SentimentClassifier
from src.models.review import SENTIMENTS

INGESTED_AT = "2026-02-01T12:00:00.000Z"


@pytest.fixture
def normalizer():
    return ReviewNormalizer(sentiment_classifier=SentimentClassifier())


@pytest.fixture
def mixed_rows():
    return [
        {"text": "Great host, would recommend", "rating": "5", "date": "2026-01-10"},
        {"rating": "4", "date": "2025-01-01", "source": "Google", "author": "Bob"},
        {"Commentaire": "Chambre sale, jamais plus", "Note": "", "Date": "25/01/2026"},
        {"review": "Key did not work at arrival", "Stars": "2", "Platform": "Airbnb"},
        {"text": "   ", "rating": "1"},
    ]


def test_end_to_end_row(normalizer):
    """Test a row with unfamiliar column names and a day-first date."""
    row = {
        "Date": "15/03/2025",
        "Review score": "9",
        "Overall review": "Amazing stay, very clean room",
    }

    reviews = normalizer.normalize([row], ingested_at=INGESTED_AT)

    assert len(reviews) == 1
    review = reviews[0]
    assert review.id == "csv-0"
    assert review.rating == 9
    assert review.sentiment == "positive"
    assert review.tags == ("Cleanliness",)
    assert review.text == "Amazing stay, very clean room"
    assert review.date.startswith("2025-03-15T")
    assert review.source == "CSV Upload"
    assert review.author == "Anonymous"
    assert review.listing_name is None


def test_rows_without_text_are_dropped(normalizer):
    """Test that ids keep the original row index after dropping rows."""
    rows = [
        {"text": "Great stay", "rating": "5"},
        {"rating": "4", "date": "2025-01-01", "source": "Google", "author": "Bob"},
        {"text": "Dirty room", "rating": "1"},
    ]

    reviews = normalizer.normalize(rows, ingested_at=INGESTED_AT)

    assert [r.id for r in reviews] == ["csv-0", "csv-2"]
    assert [r.text for r in reviews] == ["Great stay", "Dirty room"]


def test_empty_review_column_drops_row(normalizer):
    """Test that an empty text cell drops the row even with a fuzzy neighbour column."""
    rows = [
        {"Date": "15/03/2025", "Review score": "9", "Overall review": "Amazing stay, very clean room"},
        {"Date": "16/03/2025", "Review score": "2", "Overall review": ""},
    ]

    result = normalizer.normalize_batch(rows, ingested_at=INGESTED_AT)

    assert [r.id for r in result.reviews] == ["csv-0"]
    assert result.skipped_rows == [1]


def test_missing_rating_uses_text_keywords(normalizer):
    """Test keyword sentiment for rows without a rating column."""
    reviews = normalizer.normalize(
        [{"text": "The staff was terrible and the room was dirty"}],
        ingested_at=INGESTED_AT
    )

    assert reviews[0].rating == 0
    assert reviews[0].sentiment == "negative"


def test_explicit_fields(normalizer):
    """Test rows that carry id, sentiment, tags, author, source and listing."""
    row = {
        "id": "R-1",
        "source": "Yelp",
        "author": "Jane",
        "Listing Name": "Villa A",
        "text": "Fine",
        "rating": "2",
        "sentiment": "Positive",
        "tags": "view, breakfast",
    }

    review = normalizer.normalize([row], ingested_at=INGESTED_AT)[0]

    assert review.id == "R-1"
    assert review.source == "Yelp"
    assert review.author == "Jane"
    assert review.listing_name == "Villa A"
    assert review.sentiment == "positive"
    assert review.tags == ("view", "breakfast")


def test_missing_date_uses_ingestion_time(normalizer):
    """Test that every row of a batch shares the ingestion timestamp."""
    reviews = normalizer.normalize(
        [{"text": "Nice"}, {"text": "Okay", "date": "garbage"}],
        ingested_at=INGESTED_AT
    )
    assert [r.date for r in reviews] == [INGESTED_AT, INGESTED_AT]


def test_every_review_has_text_and_sentiment(normalizer, mixed_rows):
    """Test non-empty text and assigned sentiment on every review."""
    reviews = normalizer.normalize(mixed_rows, ingested_at=INGESTED_AT)

    assert [r.id for r in reviews] == ["csv-0", "csv-2", "csv-3"]
    for review in reviews:
        assert len(review.text) > 0
        assert review.sentiment in SENTIMENTS

    french = reviews[1]
    assert french.sentiment == "negative"
    assert french.date.startswith("2026-01-25")
    assert "Cleanliness" in french.tags

    check_in = reviews[2]
    assert check_in.source == "Airbnb"
    assert check_in.sentiment == "negative"
    assert "Check-in" in check_in.tags


def test_normalize_is_idempotent(normalizer, mixed_rows):
    """Test that the same input gives identical output."""
    first = normalizer.normalize(mixed_rows, ingested_at=INGESTED_AT)
    second = normalizer.normalize(mixed_rows, ingested_at=INGESTED_AT)

    assert first == second
    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]


def test_normalize_batch_diagnostics(normalizer, mixed_rows):
    """Test the diagnostics kept for an upload."""
    result = normalizer.normalize_batch(mixed_rows, ingested_at=INGESTED_AT)

    assert result.skipped_rows == [1, 4]
    assert result.diagnostics[0] == "Loaded 5 raw rows"
    assert result.diagnostics[1] == "Keys row 0: text, rating, date"
    assert result.diagnostics[2].startswith("Skipped row 1: No text found.")
    assert result.diagnostics[-1] == "Mapped 3 valid reviews."


def test_empty_input(normalizer):
    """Test an empty batch."""
    result = normalizer.normalize_batch([])

    assert result.reviews == []
    assert result.diagnostics == ["Loaded 0 raw rows", "Mapped 0 valid reviews."]


@pytest.mark.parametrize("value, expected", [
    ("4", 4.0),
    (" 8.5 ", 8.5),
    ("", 0.0),
    (None, 0.0),
    ("five", 0.0),
    ("nan", 0.0),
])
def test_parse_rating(value, expected):
    """Test rating parsing."""
    assert parse_rating(value) == expected


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
