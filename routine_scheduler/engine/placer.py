"""Randomized restart placer: best of several first-fit passes over shuffled subjects."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, List, Optional, Sequence

from routine_scheduler.domain.entities import RoutineEntry, Subject
from routine_scheduler.services.constraints import find_open_slot
from routine_scheduler.services.scoring import score_subject

ATTEMPTS = 20
UNPLACED_PENALTY = 50.0


@dataclass
class PlacementResult:
    """One candidate arrangement: slot occupants, running score and leftovers."""

    slots: List[Optional[Subject]]
    score: float = 0.0
    unplaced: List[Subject] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return sum(1 for occupant in self.slots if occupant is not None)


def first_fit(subjects: Sequence[Subject], slot_count: int, penalty: float = UNPLACED_PENALTY) -> PlacementResult:
    """
    Place subjects in the given order, each into the first slot it may take.

    A subject with no eligible slot costs ``penalty`` and stays unplaced; it
    is never retried and earlier placements are never undone.
    """
    result = PlacementResult(slots=[None] * slot_count)

    for subject in subjects:
        index = find_open_slot(result.slots, subject.semester)
        if index is None:
            result.score -= penalty
            result.unplaced.append(subject)
            continue

        result.slots[index] = subject
        result.score += score_subject(subject)

    return result


def _shuffled_attempts(
    subjects: Sequence[Subject],
    slot_count: int,
    attempts: int,
    penalty: float,
    rng: random.Random,
) -> Iterator[PlacementResult]:
    for _ in range(attempts):
        order = list(subjects)
        rng.shuffle(order)
        yield first_fit(order, slot_count, penalty)


def place_subjects(
    subjects: Sequence[Subject],
    date_pool: Sequence[date],
    attempts: int = ATTEMPTS,
    penalty: float = UNPLACED_PENALTY,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> PlacementResult:
    """
    Run independent first-fit attempts over shuffled subjects and keep the best.

    The first shuffled attempt is the starting candidate and a later attempt
    replaces it only with a strictly higher score, so the earliest shuffled
    arrangement wins ties. The pass in catalog order is checked last and is
    kept only when it scores strictly higher than every shuffled attempt.
    With ``attempts=0`` the catalog-order pass is returned.

    Args:
        subjects: Subjects to place
        date_pool: Exam dates, one slot each
        attempts: Number of shuffled attempts
        penalty: Score deducted per unplaced subject
        seed: Seed for the shuffle (ignored when ``rng`` is given)
        rng: Random source to draw permutations from

    Returns:
        Best PlacementResult (slots still contain None for empty positions)
    """
    if rng is None:
        rng = random.Random(seed)

    slot_count = len(date_pool)
    candidates = _shuffled_attempts(subjects, slot_count, attempts, penalty, rng)

    best: Optional[PlacementResult] = None
    for candidate in candidates:
        if best is None or candidate.score > best.score:
            best = candidate

    baseline = first_fit(subjects, slot_count, penalty)
    if best is None or baseline.score > best.score:
        best = baseline
    return best


def fill_gaps(slots: Sequence[Optional[Subject]], date_pool: Sequence[date]) -> List[RoutineEntry]:
    """Materialize every slot as a RoutineEntry; empty slots become "-" placeholders."""
    if len(slots) != len(date_pool):
        raise ValueError(f"Slot count {len(slots)} does not match date pool size {len(date_pool)}")

    entries: List[RoutineEntry] = []
    for day, occupant in zip(date_pool, slots):
        if occupant is None:
            entries.append(RoutineEntry.placeholder(day))
        else:
            entries.append(RoutineEntry(date=day, subject_name=occupant.name, semester=occupant.semester))
    return entries
