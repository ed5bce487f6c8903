"""Services for scheduling logic."""

from .constraints import SEMESTER_LOOKBACK, clashes_with_previous, find_open_slot, validate_routine_spacing
from .dates import build_date_pool, check_window_length, normalize_holidays
from .scoring import score_subject

__all__ = [
    "SEMESTER_LOOKBACK",
    "clashes_with_previous",
    "find_open_slot",
    "validate_routine_spacing",
    "build_date_pool",
    "check_window_length",
    "normalize_holidays",
    "score_subject",
]
