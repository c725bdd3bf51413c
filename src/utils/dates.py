"""
Date utilities.

Normalizes heterogeneous date strings (ISO-8601, locale formats,
European day-first exports) into canonical ISO-8601 UTC timestamps.
"""

import logging
import re
import warnings
from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)

# DD/MM/YYYY or DD-MM-YYYY (European / Excel exports)
DAY_FIRST_PATTERN = re.compile(r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})")


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def utc_now_iso() -> str:
    """Current time as a canonical timestamp."""
    return format_timestamp(datetime.now(timezone.utc))


def parse_timestamp(value: str) -> datetime:
    """
    Parse a canonical (or any ISO-8601) timestamp into an aware datetime.

    Raises:
        ValueError: If the value is not ISO-8601
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_generic(raw: str) -> Optional[datetime]:
    """Generic parse through pandas; None when pandas cannot read it."""
    try:
        with warnings.catch_warnings():
            # pandas warns when it has to guess the format
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(raw, errors="coerce")
            if pd.isna(parsed):
                return None
            return parsed.to_pydatetime()
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Generic date parse failed for '{raw}': {e}")
        return None


def _parse_day_first(raw: str) -> Optional[datetime]:
    match = DAY_FIRST_PATTERN.search(raw)
    if not match:
        return None

    day, month, year = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        logger.debug(f"Day-first pattern matched '{raw}' but is not a calendar date")
        return None


def normalize_date(raw: Any, fallback: Optional[str] = None) -> str:
    """
    Normalize a raw date value into an ISO-8601 UTC timestamp.

    Tries generic parsing first, then the day/month/year pattern. Never
    raises: unusable input yields the ingestion timestamp.

    Args:
        raw: Raw cell value (string, or None when the column is missing)
        fallback: Ingestion timestamp to use; defaults to now

    Returns:
        Canonical timestamp string, e.g. "2025-03-15T00:00:00.000Z"
    """
    ingestion_time = fallback or utc_now_iso()

    if raw is None:
        return ingestion_time

    text = str(raw).strip()
    if not text:
        return ingestion_time

    parsed = _parse_generic(text) or _parse_day_first(text)
    if parsed is None:
        logger.debug(f"Unparseable date '{text}', using ingestion time")
        return ingestion_time

    return format_timestamp(parsed)


# Design Rationale and Trade-offs:
#
# 1. Why pandas first, then a day/month/year pattern?
#    - pandas handles ISO, written-out and zoned dates
#    - Values pandas cannot read still get a day-first attempt
#    - Trade-off: 02/01/2026 is read month-first by pandas
#
# 2. Why read naive datetimes as UTC?
#    - Exports rarely carry a zone
#    - Trade-off: Reviews near midnight can land on a neighbouring day
#
# 3. Why one fallback timestamp per batch?
#    - Rows without dates get the same value, so re-running a batch is stable
