"""
Configuration settings for ReviewLens.

Centralized configuration for the normalization pipeline, analytics and reports.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_ROOT = Path(os.getenv("REVIEWLENS_OUTPUT_ROOT", str(PROJECT_ROOT / "output")))

# Normalization defaults
DEFAULT_SOURCE = "CSV Upload"
DEFAULT_AUTHOR = "Anonymous"
ID_PREFIX = "csv-"
MAX_LOGGED_SKIPPED_ROWS = 5  # Skipped rows echoed into the diagnostics

# Sentiment classification
# When True, explicit sentiment values outside positive/neutral/negative are
# ignored and the heuristics decide instead. Set to false to pass them through.
STRICT_SENTIMENT = os.getenv("REVIEWLENS_STRICT_SENTIMENT", "true").lower() in ("1", "true", "yes")
POSITIVE_RATING_THRESHOLD = 4
NEUTRAL_RATING = 3
NEGATIVE_RATING_THRESHOLD = 2

# Aggregation
RATING_SCALE_MAX = 5  # Ratings above this are read as a 10-point scale
TOP_ISSUES_LIMIT = 5
TOP_LISTINGS_LIMIT = 5
PERSISTENT_ISSUE_MIN_DAYS = 30
MAX_CATEGORY_DEDUCTION = 4
CATEGORY_DEDUCTION_WEIGHT = 0.5

# Reports
RECENT_POSITIVE_LIMIT = 3
OWNER_SUMMARY_TAG_LIMIT = 3
OWNER_SUMMARY_NEGATIVE_LIMIT = 5
REPORT_BRAND = "Premium Booking Analytics"

# Logging
LOG_LEVEL = os.getenv("REVIEWLENS_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewlens.log"


# Design Rationale and Trade-offs:
#
# 1. Why module-level constants?
#    - Imported as settings.X everywhere, easy to patch in tests
#    - Trade-off: No validation of environment overrides
#
# 2. Why validate explicit sentiment by default?
#    - Every review must carry positive, neutral or negative
#    - Trade-off: Custom labels need REVIEWLENS_STRICT_SENTIMENT=false
