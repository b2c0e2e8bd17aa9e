"""Configuration constants for Marks Scaler."""

import os

# Storage
DEFAULT_DATA_FILE = os.environ.get("MARKS_SCALER_DATA", "marks-data.json")

# Scaling methods
BELL_CURVE = "bellCurve"
LINEAR_NORMALIZATION = "linearNormalization"
MIN_MAX_NORMALIZATION = "minMaxNormalization"
PERCENTILE = "percentile"

SCALING_METHODS = (
    BELL_CURVE,
    LINEAR_NORMALIZATION,
    MIN_MAX_NORMALIZATION,
    PERCENTILE,
)

DEFAULT_SCALING_METHOD = BELL_CURVE

SCALING_METHOD_NAMES = {
    BELL_CURVE: "Bell Curve (Z-Score)",
    LINEAR_NORMALIZATION: "Linear Normalization",
    MIN_MAX_NORMALIZATION: "Min-Max Normalization",
    PERCENTILE: "Percentile-Based",
}

NOT_APPLIED = "Not Applied"

SCALING_METHOD_INFO = {
    BELL_CURVE: {
        "summary": (
            "Calculates mean and standard deviation, then normalizes using "
            "z-scores. Most marks fall within the scaled range while "
            "relative performance differences are preserved."
        ),
        "formula": "scaled = (scalingValue/2) + (z-score x scalingValue/6)",
    },
    LINEAR_NORMALIZATION: {
        "summary": (
            "Simple proportional scaling. 80/100 on raw marks with a "
            "scaling value of 50 becomes 40/50."
        ),
        "formula": "scaled = (raw / totalMarks) x scalingValue",
    },
    MIN_MAX_NORMALIZATION: {
        "summary": (
            "The lowest scorer gets 0 and the highest gets scalingValue; "
            "everyone else is placed proportionally in between."
        ),
        "formula": "scaled = ((raw - min) / (max - min)) x scalingValue",
    },
    PERCENTILE: {
        "summary": (
            "Ranks students by raw mark. The top ranker gets scalingValue, "
            "the bottom gets 0, tied students share the better rank."
        ),
        "formula": "scaled = ((total - 1 - rank) / (total - 1)) x scalingValue",
    },
}

ROUNDING_INFO = {
    "summary": "Converts scaled marks to whole numbers, 0.5 rounds away from zero.",
    "formula": "12.4 -> 12, 12.5 -> 13, 12.6 -> 13",
}

# CSV export
CSV_ID_HEADER = "Student ID"
CSV_NAME_HEADER = "Student Name"
CSV_COLUMN_SUFFIXES = ("Raw", "Scaled", "Rounded")

# Logging
LOG_FORMAT = "%(message)s"
LOG_DATE_FORMAT = "[%X]"

# Output
OUTPUT_FORMATS = ("table", "json")
