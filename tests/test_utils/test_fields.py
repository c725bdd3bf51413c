"""
Unit tests for the field resolver.
"""

import pytest
from config.lexicon import FIELD_CANDIDATES
from src.utils.fields import has_value, resolve_field


def test_exact_match_beats_substring_match():
    """Test that an exact column wins over a fuzzy one, whatever the column order."""
    row = {"Review score": "8", "rating": "4"}
    assert resolve_field(row, FIELD_CANDIDATES["rating"]) == "4"

    reordered = {"rating": "4", "Review score": "8"}
    assert resolve_field(reordered, FIELD_CANDIDATES["rating"]) == "4"


def test_exact_match_on_later_candidate_beats_earlier_substring():
    """Test that tiers are exhausted across all candidates before the next tier."""
    row = {"Overall score breakdown": "8", "rating": "4"}
    assert resolve_field(row, ["score", "rating"]) == "4"


def test_case_insensitive_match():
    """Test case-insensitive exact matching."""
    assert resolve_field({"RATING": "5"}, ["rating"]) == "5"


def test_substring_match():
    """Test matching a column that contains the candidate."""
    assert resolve_field({"Guest Review Text": "Lovely"}, ["text"]) == "Lovely"


def test_quote_stripped_match():
    """Test matching after removing quote characters from the column name."""
    assert resolve_field({"Guest's Name": "Marie"}, ["Guests Name"]) == "Marie"


def test_empty_value_moves_to_next_candidate():
    """Test that an empty matched column hands over to the next candidate."""
    row = {"text": "", "review": "Great stay"}
    assert resolve_field(row, ["text", "review"]) == "Great stay"


def test_empty_value_stops_weaker_tiers():
    """Test that an empty match is not retried in weaker tiers."""
    row = {"text": "", "Text body": "Hidden"}
    assert resolve_field(row, ["text"]) is None


def test_empty_text_column_does_not_fall_back_to_score_column():
    """Test that an empty review column never resolves to a fuzzy neighbour."""
    row = {"Date": "16/03/2025", "Review score": "2", "Overall review": ""}

    assert resolve_field(row, FIELD_CANDIDATES["text"]) is None
    assert resolve_field(row, FIELD_CANDIDATES["rating"]) == "2"


def test_empty_case_insensitive_match_stops_substring_tier():
    """Test the same rule one tier lower."""
    row = {"TEXT": " ", "Context notes": "Hidden"}
    assert resolve_field(row, ["text"]) is None


def test_no_match_returns_none():
    """Test rows without any candidate column."""
    assert resolve_field({"foo": "bar"}, FIELD_CANDIDATES["text"]) is None
    assert resolve_field({}, ["text"]) is None


@pytest.mark.parametrize("value, expected", [
    (None, False),
    ("", False),
    ("   ", False),
    (float("nan"), False),
    ([], False),
    ("x", True),
    (["a"], True),
    (5, True),
])
def test_has_value(value, expected):
    """Test what counts as a usable cell value."""
    assert has_value(value) is expected


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
