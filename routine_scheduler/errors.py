"""Errors raised while generating an exam routine.

A partially filled routine is not an error: unplaced subjects are reported
through ``Routine.shortfall`` (see ``domain.entities.PlacementShortfall``).
"""

from __future__ import annotations


class RoutineError(RuntimeError):
    """Base class for fatal routine generation failures."""


class DatePoolExhausted(RoutineError):
    """Not enough non-holiday dates within the walk limit to build the pool."""

    def __init__(self, start_date, found: int, required: int, max_walk_days: int):
        self.start_date = start_date
        self.found = found
        self.required = required
        self.max_walk_days = max_walk_days
        super().__init__(
            f"Too many holidays or short window: only {found} non-holiday days "
            f"within {max_walk_days} days of {start_date}, {required} required"
        )


class EmptyCatalog(RoutineError):
    """No subjects were supplied for the routine."""

    def __init__(self, message: str = "Subject catalog is empty; nothing to schedule"):
        super().__init__(message)
