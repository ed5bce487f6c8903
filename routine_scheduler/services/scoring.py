"""Scoring function ranking subjects for placement."""

from __future__ import annotations

from routine_scheduler.domain.entities import Subject

CREDIT_WEIGHT = 2
THEORY_BONUS = 3
NUMERICAL_BONUS = 2
FAILURE_RATE_WEIGHT = 2


def score_subject(subject: Subject) -> float:
    """
    Score a subject for placement.

    Higher-credit and historically harder subjects score higher, so an
    arrangement that places them is preferred when slots are scarce.

    Args:
        subject: Subject to score

    Returns:
        credit*2 + (3 if Theory else 2) + past_failure_rate*2
    """
    type_score = THEORY_BONUS if subject.exam_type == "Theory" else NUMERICAL_BONUS
    return (
        subject.credit * CREDIT_WEIGHT
        + type_score
        + (subject.past_failure_rate or 0.0) * FAILURE_RATE_WEIGHT
    )
