"""
Field resolver.

Fuzzy-matches the column names of an arbitrary CSV row to the semantic
fields the pipeline needs (rating, text, date, ...).
"""

import logging
import math
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

RawRow = Dict[str, Any]

_QUOTES = re.compile(r"['\"]")


def _exact(keys: List[str], candidate: str) -> Optional[str]:
    return candidate if candidate in keys else None


def _case_insensitive(keys: List[str], candidate: str) -> Optional[str]:
    lower_candidate = candidate.lower()
    return next((k for k in keys if k.lower() == lower_candidate), None)


def _substring(keys: List[str], candidate: str) -> Optional[str]:
    lower_candidate = candidate.lower()
    return next((k for k in keys if lower_candidate in k.lower()), None)


def _unquoted(keys: List[str], candidate: str) -> Optional[str]:
    lower_candidate = candidate.lower()
    return next(
        (k for k in keys if _QUOTES.sub("", k).strip().lower() == lower_candidate),
        None
    )


# Matching tiers, strongest first
_TIERS: Sequence[Callable[[List[str], str], Optional[str]]] = (
    _exact,
    _case_insensitive,
    _substring,
    _unquoted,
)


def has_value(value: Any) -> bool:
    """
    Whether a cell carries a usable value.

    None, NaN, empty or whitespace-only strings and empty sequences
    count as missing.
    """
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return bool(value)


def resolve_field(row: RawRow, candidates: Sequence[str]) -> Optional[Any]:
    """
    Resolve a semantic field from a raw row.

    Each matching tier (exact, case-insensitive, substring, quote-stripped)
    is tried for every candidate before moving to the next tier, so an
    exact hit on a later candidate beats a substring hit on an earlier one.

    A matched column that is empty hands over to the remaining candidates
    of the same tier only. Once a tier has found the field empty, weaker
    tiers are not tried: an empty "Overall review" column must not fall
    through to a substring hit on "Review score".

    Args:
        row: Raw row (column name -> cell value)
        candidates: Candidate column names in preference order

    Returns:
        The matched cell value, or None if no candidate resolves
    """
    keys = [k for k in row.keys() if isinstance(k, str)]

    for tier in _TIERS:
        found_empty = False

        for candidate in candidates:
            key = tier(keys, candidate)
            if key is None:
                continue

            value = row[key]
            if has_value(value):
                return value

            logger.debug(f"Column '{key}' matched '{candidate}' but is empty")
            found_empty = True

        if found_empty:
            return None

    return None


# Design Rationale and Trade-offs:
#
# 1. Why try every candidate at one tier before the next tier?
#    - Exports name the same field many ways ("Overall review", "Review score")
#    - A substring hit on an early candidate must not beat an exact hit on a later one
#    - Trade-off: Candidate order only matters within a tier
#
# 2. Why stop at the first tier that finds the field empty?
#    - An empty "Overall review" column means the guest left no text
#    - Weaker tiers would pick up unrelated columns ("review" in "Review score")
#    - Trade-off: A populated, loosely named duplicate column is ignored
#
# 3. Why treat whitespace-only cells as empty?
#    - Spreadsheet exports pad cells with spaces
#    - Trade-off: A review made of spaces is dropped, acceptable
