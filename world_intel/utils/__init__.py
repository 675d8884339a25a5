"""Utility functions for the world-intel project.

Re-exports the text-cleaning, datetime, grid and statistics helpers so that
imports like `from ..utils import cell_key` work as expected.
"""

from .datetime_utils import as_utc, get_current_timestamp, parse_timestamp  # noqa: F401
from .geo import CELL_SIZE, CellKey, cardinal_label, cell_centre, cell_key  # noqa: F401
from .stats import RunningStats  # noqa: F401
from .text_cleaning import sanitize_llm_text, strip_think_blocks  # noqa: F401

__all__ = [
    "as_utc",
    "get_current_timestamp",
    "parse_timestamp",
    "CELL_SIZE",
    "CellKey",
    "cardinal_label",
    "cell_centre",
    "cell_key",
    "RunningStats",
    "sanitize_llm_text",
    "strip_think_blocks",
]
