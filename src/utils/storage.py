"""
Storage utility.

File output for exported reports, review tables and the sample CSV.
"""

import json
import logging
import os
from typing import Dict, List, Sequence

import pandas as pd

from src.models.review import Review

logger = logging.getLogger(__name__)

REVIEW_COLUMNS = ["id", "source", "date", "rating", "author", "listingName", "text", "sentiment", "tags"]


class ExportManager:
    """
    Writes pipeline output to an export directory.

    Handles:
    - Reports (reports/<name>.json)
    - Review tables (tables/<name>.csv)
    - The downloadable sample CSV
    """

    def __init__(self, output_root: str):
        """
        Initialize export manager.

        Args:
            output_root: Root export directory (e.g., /path/to/output)
        """
        self.output_root = output_root
        self.reports_dir = os.path.join(output_root, "reports")
        self.tables_dir = os.path.join(output_root, "tables")

        os.makedirs(self.reports_dir, exist_ok=True)
        os.makedirs(self.tables_dir, exist_ok=True)

        logger.info(f"Initialized ExportManager with output_root={output_root}")

    def save_report(self, report: Dict, name: str) -> str:
        """
        Save a report as JSON.

        Args:
            report: JSON-serializable report dict
            name: File name without extension

        Returns:
            Path of the written file
        """
        filepath = os.path.join(self.reports_dir, f"{name}.json")

        try:
            with open(filepath, 'w', encoding="utf-8") as f:
                json.dump(report, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved report to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save report {name}: {e}")
            raise

        return filepath

    def load_report(self, name: str) -> Dict:
        """Load a previously exported report."""
        filepath = os.path.join(self.reports_dir, f"{name}.json")
        with open(filepath, 'r', encoding="utf-8") as f:
            return json.load(f)

    def save_reviews_table(self, reviews: Sequence[Review], name: str) -> str:
        """
        Save reviews as a CSV table (tags joined with ", ").

        Args:
            reviews: Reviews to export, in the order given
            name: File name without extension

        Returns:
            Path of the written file
        """
        filepath = os.path.join(self.tables_dir, f"{name}.csv")

        records: List[Dict] = []
        for review in reviews:
            record = review.to_dict()
            record["tags"] = ", ".join(record["tags"])
            records.append(record)

        df = pd.DataFrame(records, columns=REVIEW_COLUMNS)

        try:
            df.to_csv(filepath, index=False)
            logger.info(f"Saved {len(df)} reviews to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save review table {name}: {e}")
            raise

        return filepath

    @staticmethod
    def save_text(content: str, filepath: str) -> str:
        """Write a text file (e.g. the sample CSV) to an explicit path."""
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(filepath, 'w', encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info(f"Wrote {filepath}")
        return filepath


# Design Rationale and Trade-offs:
#
# 1. Why JSON for reports and CSV for review tables?
#    - Reports are nested documents
#    - Review tables open directly in a spreadsheet
#    - Trade-off: Two formats to maintain
#
# 2. Why join tags with ", "?
#    - The same format the tags column is read from
#    - Trade-off: Tags containing commas do not round-trip
