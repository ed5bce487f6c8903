"""Same-semester spacing constraint."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

# Exams of one semester need at least this many slots between them
SEMESTER_LOOKBACK = 2


def clashes_with_previous(slots: Sequence, index: int, semester: str) -> bool:
    """
    Check whether ``semester`` clashes with the filled slots just before ``index``.

    Only slots ``index-1`` and ``index-2`` are checked; out-of-range or empty
    slots never clash.
    """
    for back in range(1, SEMESTER_LOOKBACK + 1):
        prev = index - back
        if prev < 0:
            break
        occupant = slots[prev]
        if occupant is not None and occupant.semester == semester:
            return True
    return False


def find_open_slot(slots: Sequence, semester: str) -> Optional[int]:
    """Return the first empty slot index that does not clash, or None."""
    for index, occupant in enumerate(slots):
        if occupant is None and not clashes_with_previous(slots, index, semester):
            return index
    return None


def find_spacing_violations(entries: Sequence) -> List[Tuple[int, int, str]]:
    """
    Find pairs of scheduled entries of one semester that are too close together.

    Args:
        entries: Routine entries (placeholders are ignored)

    Returns:
        List of (earlier_index, later_index, semester)
    """
    violations: List[Tuple[int, int, str]] = []
    for index, entry in enumerate(entries):
        if entry is None or getattr(entry, "is_placeholder", False):
            continue
        for back in range(1, SEMESTER_LOOKBACK + 1):
            prev = index - back
            if prev < 0:
                break
            other = entries[prev]
            if other is None or getattr(other, "is_placeholder", False):
                continue
            if other.semester == entry.semester:
                violations.append((prev, index, entry.semester))
    return violations


def validate_routine_spacing(entries: Sequence) -> None:
    """
    Validate that no two exams of one semester are within SEMESTER_LOOKBACK slots.

    Raises:
        ValueError: If any pair violates the spacing
    """
    violations = find_spacing_violations(entries)
    if violations:
        first, second, semester = violations[0]
        raise ValueError(
            f"{len(violations)} spacing violation(s); first: slots {first} and {second} "
            f"both hold {semester}"
        )
