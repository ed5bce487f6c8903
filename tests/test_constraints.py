"""Tests for the same-semester spacing constraint."""

import datetime as dt

import pytest

from routine_scheduler.domain.entities import RoutineEntry, Subject
from routine_scheduler.services.constraints import (
    clashes_with_previous,
    find_open_slot,
    find_spacing_violations,
    validate_routine_spacing,
)

SEM1 = "1st Semester"
SEM2 = "2nd Semester"


def _subject(name, semester):
    return Subject(name=name, semester=semester)


def test_clash_with_previous_slot():
    slots = [_subject("A", SEM1), None, None]
    assert clashes_with_previous(slots, 1, SEM1) is True
    assert clashes_with_previous(slots, 1, SEM2) is False


def test_clash_with_slot_two_back():
    slots = [_subject("A", SEM1), _subject("B", SEM2), None, None]
    assert clashes_with_previous(slots, 2, SEM1) is True
    assert clashes_with_previous(slots, 3, SEM1) is False


def test_first_slot_never_clashes():
    assert clashes_with_previous([None, None], 0, SEM1) is False


def test_empty_neighbours_do_not_clash():
    slots = [None, None, None]
    assert clashes_with_previous(slots, 2, SEM1) is False


def test_find_open_slot_is_first_fit():
    slots = [_subject("A", SEM1), None, None, None, None]
    assert find_open_slot(slots, SEM1) == 3
    assert find_open_slot(slots, SEM2) == 1


def test_find_open_slot_returns_none_when_full():
    slots = [_subject("A", SEM1), None, None]
    assert find_open_slot(slots, SEM1) is None


def test_spacing_violations_ignore_placeholders():
    day = dt.date(2025, 3, 3)
    entries = [
        RoutineEntry(day, "A", SEM1),
        RoutineEntry.placeholder(day + dt.timedelta(days=1)),
        RoutineEntry.placeholder(day + dt.timedelta(days=2)),
        RoutineEntry(day + dt.timedelta(days=3), "B", SEM1),
    ]
    assert find_spacing_violations(entries) == []
    validate_routine_spacing(entries)


def test_spacing_violation_detected():
    day = dt.date(2025, 3, 3)
    entries = [
        RoutineEntry(day, "A", SEM1),
        RoutineEntry(day + dt.timedelta(days=1), "C", SEM2),
        RoutineEntry(day + dt.timedelta(days=2), "B", SEM1),
    ]
    assert find_spacing_violations(entries) == [(0, 2, SEM1)]
    with pytest.raises(ValueError, match="spacing violation"):
        validate_routine_spacing(entries)
