"""
Unit tests for the Tag Classifier.
"""

import pytest
from src.agents.tagging import TagClassifier, coerce_tags
from src.models.category import CATEGORIES, get_category


@pytest.fixture
def classifier():
    return TagClassifier()


def test_coerce_tags_from_string():
    """Test splitting a comma-separated tag string."""
    assert coerce_tags("service, wait time ,food") == ["service", "wait time", "food"]
    assert coerce_tags("a,,b") == ["a", "b"]


def test_coerce_tags_from_sequence():
    """Test that sequences are kept as they are."""
    assert coerce_tags(["Noise", "Value"]) == ["Noise", "Value"]


def test_coerce_tags_empty():
    """Test empty tag values."""
    assert coerce_tags(None) == []
    assert coerce_tags("") == []


def test_explicit_tags_win(classifier):
    """Test that an explicit tags column skips keyword matching."""
    assert classifier.classify("The room was dirty", "Noise, Value", "negative") == ["Noise", "Value"]


def test_single_category(classifier):
    """Test keyword-based tagging."""
    assert classifier.classify("Amazing stay, very clean room", None, "positive") == ["Cleanliness"]


def test_multiple_categories_in_declaration_order(classifier):
    """Test that categories are matched independently."""
    text = "The room was dirty and the wifi kept dropping"
    assert classifier.classify(text, None, "negative") == ["Cleanliness", "Facilities"]


def test_negative_fallback_tag(classifier):
    """Test the fallback for negative reviews without a category."""
    assert classifier.classify("Worst stay of my life", None, "negative") == ["General Complaint"]


def test_no_fallback_for_non_negative(classifier):
    """Test that only negative reviews get the fallback tag."""
    assert classifier.classify("Worst stay of my life", None, "neutral") == []


def test_category_table():
    """Test the shared category table."""
    names = [c.name for c in CATEGORIES]
    assert names == [
        "Cleanliness", "Accuracy", "Check-in", "Communication",
        "Location", "Value", "Comfort", "Facilities",
    ]
    assert get_category("cleanliness").name == "Cleanliness"
    assert get_category("Unknown") is None
    # Keywords are deduplicated
    for category in CATEGORIES:
        assert len(set(category.keywords)) == len(category.keywords)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
