"""
Ingestion Agent.

Reads guest reviews from an uploaded CSV file (or CSV text) into raw rows
for the normalizer. Also serves the bundled sample datasets.
"""

import io
import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from src.utils.fields import RawRow

logger = logging.getLogger(__name__)


# Downloadable template shown next to the upload form
SAMPLE_CSV = (
    "id,source,date,rating,author,text,sentiment,tags\n"
    "101,Google,2026-01-29,1,Jane Doe,The AC was broken and it was too hot.,negative,facilities\n"
    "102,Yelp,2026-01-28,5,John Smith,Amazing food and great atmosphere!,positive,food\n"
    "103,Facebook,2026-01-27,2,Bob,Waiter was rude.,negative,service"
)

# Built-in demo dataset (three listings over three months)
DEMO_CSV = """id,source,date,rating,author,listingName,text,sentiment,tags
1,Google,2026-01-29,2,Sarah Jenkins,Modern Downtown Loft,"The service was incredibly slow. We waited 45 minutes for our appetizers. The food was cold when it finally arrived.",negative,"service, wait time, food temp"
2,Yelp,2026-01-28,5,Mike Ross,Cozy Mountain Cabin,"Absolutely loved the ambiance! The new renovation looks stunning. Will definitely come back.",positive,"ambiance, interior"
3,Facebook,2026-01-27,1,Emily Blunt,Seaside Villa,"Worst experience ever. The manager was rude when I complained about the wrong order.",negative,"staff, manager, wrong order"
4,Google,2026-01-25,4,John Doe,Modern Downtown Loft,"Great food, but a bit pricey for the portion sizes.",neutral,"price, food quality"
5,Trustpilot,2026-01-20,2,Alice Cooper,Cozy Mountain Cabin,"Found a hair in my soup. Disgusting. The waiter just shrugged it off.",negative,"hygiene, staff attitude"
6,Google,2025-12-24,5,Santa Claus,Seaside Villa,"Best Christmas dinner spot! The turkey was moist and the pudding was divine.",positive,"food quality, holiday"
7,Yelp,2025-12-15,1,Grinch,Modern Downtown Loft,"Too loud, too crowded. My ears are still ringing. Service was non-existent.",negative,"atmosphere, noise, service"
8,Direct,2025-12-10,3,Bob Builder,Cozy Mountain Cabin,"It was okay. Nothing analyzing here. Just average food.",neutral,food quality
9,Facebook,2025-12-05,2,Karen Smith,Seaside Villa,"Bathrooms were dirty. Not what I expect from a place like this.",negative,"cleanliness, facilities"
10,Google,2025-11-28,5,Tom Hanks,Modern Downtown Loft,"A hidden gem! The pasta is handmade and you can really taste the difference.",positive,food quality
11,Yelp,2025-11-15,2,Gordon Ramsay,Cozy Mountain Cabin,"The steak was raw! It walked off the plate! Unacceptable.",negative,"food quality, undercooked"
12,Trustpilot,2025-11-10,1,Disappointed Diner,Seaside Villa,"Server spilled wine on my dress and didn't even apologize. Ruined our anniversary.",negative,"service, staff"
13,Google,2025-11-02,4,Happy Camper,Modern Downtown Loft,"Good vibes and good food. A bit of a wait, but worth it.",positive,"atmosphere, wait time"
14,Direct,2026-01-15,2,Angry Customer,Cozy Mountain Cabin,"Service is constantly slow. This is my third time here and it is always the same problem.",negative,"service, wait time"
15,Google,2026-01-30,1,Today Visitor,Seaside Villa,"Just left. The AC was broken and it was sweating hot inside.",negative,"facilities, comfort"
"""


class IngestionError(Exception):
    """Upload-level failure, carrying a message fit to show the user."""


class IngestionAgent:
    """
    Loads raw review rows.

    Rows are plain dicts keyed by the (trimmed) CSV header; every cell is a
    string. Column meaning is left to the normalizer.
    """

    def __init__(self, use_sample_data: bool = False):
        """
        Initialize ingestion agent.

        Args:
            use_sample_data: If True, load_rows() serves the built-in demo dataset
        """
        self.use_sample_data = use_sample_data

        if use_sample_data:
            logger.info("Initialized IngestionAgent in SAMPLE mode")
        else:
            logger.info("Initialized IngestionAgent in UPLOAD mode")

    def load_rows(self, path: Union[str, Path, None] = None) -> List[RawRow]:
        """
        Load rows from a CSV file, or from the demo dataset in sample mode.

        Args:
            path: CSV file to read (ignored in sample mode)

        Returns:
            Raw rows in file order

        Raises:
            IngestionError: If the file is not a CSV, unreadable or empty
        """
        if self.use_sample_data:
            return self.read_text(DEMO_CSV)

        if path is None:
            raise IngestionError("Please upload a valid CSV file.")
        return self.read_file(path)

    def read_file(self, path: Union[str, Path]) -> List[RawRow]:
        """
        Read an uploaded CSV file.

        Raises:
            IngestionError: If the file is not a CSV, unreadable or empty
        """
        path = Path(path)
        if path.suffix.lower() != ".csv":
            logger.warning(f"Rejected non-CSV upload: {path.name}")
            raise IngestionError("Please upload a valid CSV file.")

        logger.info(f"Reading reviews from {path}")
        return self._read(path, label=path.name)

    def read_text(self, csv_text: str) -> List[RawRow]:
        """
        Read CSV content held in memory.

        Raises:
            IngestionError: If the content cannot be parsed or has no rows
        """
        return self._read(io.StringIO(csv_text), label="<text>")

    def _read(self, source, label: str) -> List[RawRow]:
        try:
            df = pd.read_csv(
                source,
                dtype=str,
                index_col=False,  # Trailing delimiters must not turn the first column into an index
                keep_default_na=False,
                skip_blank_lines=True,
                on_bad_lines="warn",
                encoding="utf-8-sig" if isinstance(source, Path) else None
            )
        except pd.errors.EmptyDataError:
            raise IngestionError("No data found in CSV.")
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            logger.error(f"Failed to read {label}: {e}")
            raise IngestionError(f"Error reading file: {e}")

        df.columns = [str(column).strip() for column in df.columns]
        df = df.fillna("")
        # Lines made only of delimiters survive skip_blank_lines
        df = df[(df != "").any(axis=1)]

        if df.empty:
            raise IngestionError("No data found in CSV.")

        rows = df.to_dict(orient="records")
        logger.info(f"Loaded {len(rows)} raw rows from {label} (columns: {', '.join(df.columns)})")
        return rows


# Design Rationale and Trade-offs:
#
# 1. Why read every cell as a string?
#    - Column meaning is unknown until the normalizer resolves it
#    - Ids like 007 and values like NA survive unchanged
#    - Trade-off: Numeric parsing moves to the normalizer
#
# 2. Why index_col=False?
#    - Rows ending with a delimiter would otherwise shift every value one column left
#    - Trade-off: Extra trailing fields are discarded
#
# 3. Why ship the demo dataset as CSV text?
#    - It goes through the same ingestion path as an upload
