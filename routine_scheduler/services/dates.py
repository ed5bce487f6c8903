"""Exam date pool construction."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Mapping

import pandas as pd

from routine_scheduler.domain.entities import as_date
from routine_scheduler.errors import DatePoolExhausted

POOL_SIZE = 50
MAX_WALK_DAYS = 100


def normalize_holidays(holidays: Mapping | None) -> Dict[date, str]:
    """Normalize holiday keys (date or YYYY-MM-DD) to ``datetime.date``."""
    if not holidays:
        return {}
    return {as_date(day): reason for day, reason in holidays.items()}


def build_date_pool(
    start_date,
    holidays: Mapping | None = None,
    pool_size: int = POOL_SIZE,
    max_walk_days: int = MAX_WALK_DAYS,
) -> List[date]:
    """
    Build the ordered pool of exam dates.

    Walks forward one day at a time from ``start_date`` and admits every
    date that is not a holiday, stopping once ``pool_size`` dates are found.
    Only the first ``max_walk_days`` calendar days (start included) may be
    walked.

    Args:
        start_date: First candidate exam date
        holidays: Mapping of date -> reason to exclude
        pool_size: Number of exam dates required
        max_walk_days: Calendar days that may be walked from start_date

    Returns:
        ``pool_size`` strictly increasing dates

    Raises:
        DatePoolExhausted: If fewer than ``pool_size`` dates are admitted within the walk
    """
    start = as_date(start_date)
    blocked = set(normalize_holidays(holidays))

    window = pd.date_range(start, periods=max_walk_days, freq="D")
    pool: List[date] = []
    for ts in window:
        day = ts.date()
        if day in blocked:
            continue
        pool.append(day)
        if len(pool) == pool_size:
            return pool

    raise DatePoolExhausted(start, found=len(pool), required=pool_size, max_walk_days=max_walk_days)


def check_window_length(start_date, end_date, window_days: int = POOL_SIZE) -> None:
    """
    Check that an exam window spans exactly ``window_days`` calendar days.

    Both ends count, so a 50-day window from 2025-03-03 ends on 2025-04-21.

    Raises:
        ValueError: If the window is reversed or has a different length
    """
    start = as_date(start_date)
    end = as_date(end_date)
    if end < start:
        raise ValueError(f"End date {end} is before start date {start}")
    span = (end - start).days + 1
    if span != window_days:
        raise ValueError(
            f"Exam window {start} .. {end} spans {span} days; it must span exactly {window_days} days"
        )
