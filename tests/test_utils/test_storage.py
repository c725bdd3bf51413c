"""
Unit tests for the Export Manager.
"""

import os

import pandas as pd
import pytest
from src.models.review import Review
from src.utils.storage import REVIEW_COLUMNS, ExportManager


@pytest.fixture
def exporter(tmp_path):
    return ExportManager(str(tmp_path / "output"))


@pytest.fixture
def reviews():
    return [
        Review(
            id="csv-0",
            source="Google",
            date="2026-01-10T00:00:00.000Z",
            rating=2,
            author="Jane",
            text="Dirty room, noisy street",
            sentiment="negative",
            listing_name="Villa A",
            tags=("Cleanliness", "Location")
        ),
        Review(
            id="csv-1",
            source="CSV Upload",
            date="2026-01-11T00:00:00.000Z",
            rating=5,
            author="Anonymous",
            text="Perfect",
            sentiment="positive"
        ),
    ]


def test_creates_directories(exporter):
    """Test the export layout."""
    assert os.path.isdir(exporter.reports_dir)
    assert os.path.isdir(exporter.tables_dir)


def test_save_and_load_report(exporter):
    """Test JSON report export."""
    report = {"title": "Owner Summary", "target": "Logement Été", "total_reviews": 3}

    path = exporter.save_report(report, "external_report")

    assert path.endswith(os.path.join("reports", "external_report.json"))
    assert exporter.load_report("external_report") == report


def test_save_reviews_table(exporter, reviews):
    """Test CSV table export."""
    path = exporter.save_reviews_table(reviews, "filtered_reviews")

    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    assert list(df.columns) == REVIEW_COLUMNS
    assert len(df) == 2
    assert df.loc[0, "tags"] == "Cleanliness, Location"
    assert df.loc[0, "listingName"] == "Villa A"
    assert df.loc[1, "listingName"] == ""
    assert df.loc[1, "tags"] == ""


def test_save_empty_table(exporter):
    """Test that an empty selection still writes a header."""
    path = exporter.save_reviews_table([], "empty")

    with open(path, encoding="utf-8") as f:
        assert f.read().strip() == ",".join(REVIEW_COLUMNS)


def test_save_text(tmp_path):
    """Test writing a text file to an explicit path."""
    target = tmp_path / "nested" / "sample.csv"

    ExportManager.save_text("id,text\n1,Great\n", str(target))

    assert target.read_text(encoding="utf-8") == "id,text\n1,Great\n"


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
