"""In-memory entities used by the scheduling engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterator, List, Optional, Tuple

import pandas as pd

SEMESTER_LABELS = (
    "1st Semester",
    "2nd Semester",
    "3rd Semester",
    "4th Semester",
    "5th Semester",
    "6th Semester",
    "7th Semester",
    "8th Semester",
)

EXAM_TYPES = ("Theory", "Numerical")

PLACEHOLDER = "-"

# Defaults applied to catalog rows with missing metadata
DEFAULT_CREDIT = 3
DEFAULT_EXAM_TYPE = "Theory"
DEFAULT_FAILURE_RATE = 0.0


def as_date(value) -> date:
    """Coerce a date, datetime, pandas Timestamp or ISO string to ``datetime.date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


@dataclass(frozen=True)
class Subject:
    """A subject whose exam must be placed in the routine."""

    name: str
    semester: str
    credit: int = DEFAULT_CREDIT
    exam_type: str = DEFAULT_EXAM_TYPE
    past_failure_rate: float = DEFAULT_FAILURE_RATE

    def __post_init__(self) -> None:
        if not self.name or self.name == PLACEHOLDER:
            raise ValueError(f"Invalid subject name: {self.name!r}")
        if self.semester not in SEMESTER_LABELS:
            raise ValueError(f"Unknown semester {self.semester!r} for subject {self.name}")
        if isinstance(self.credit, bool) or not isinstance(self.credit, int) or self.credit <= 0:
            raise ValueError(f"Credit must be a positive integer for subject {self.name}, got {self.credit!r}")
        if self.exam_type not in EXAM_TYPES:
            raise ValueError(f"Exam type must be one of {EXAM_TYPES} for subject {self.name}, got {self.exam_type!r}")
        if not 0.0 <= self.past_failure_rate <= 1.0:
            raise ValueError(
                f"Past failure rate must be within [0, 1] for subject {self.name}, got {self.past_failure_rate!r}"
            )


@dataclass(frozen=True)
class RoutineEntry:
    """One finalized slot of the routine: a scheduled exam or a placeholder."""

    date: date
    subject_name: str
    semester: str

    @classmethod
    def placeholder(cls, day: date) -> "RoutineEntry":
        return cls(date=day, subject_name=PLACEHOLDER, semester=PLACEHOLDER)

    @property
    def is_placeholder(self) -> bool:
        return self.subject_name == PLACEHOLDER

    def to_record(self) -> Dict[str, str]:
        return {
            "date": self.date.isoformat(),
            "subjectName": self.subject_name,
            "semester": self.semester,
        }


@dataclass(frozen=True)
class PlacementShortfall:
    """Non-fatal report of subjects left out of the winning arrangement."""

    unplaced: Tuple[str, ...]
    placeholder_count: int

    def __str__(self) -> str:
        return (
            f"{len(self.unplaced)} subject(s) could not be placed; "
            f"{self.placeholder_count} slot(s) left as placeholders"
        )


@dataclass
class Routine:
    """The finalized exam routine: one entry per date pool position."""

    entries: List[RoutineEntry]
    start_date: date
    end_date: date
    score: float
    unplaced: List[Subject] = field(default_factory=list)
    holidays: Dict[date, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RoutineEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> RoutineEntry:
        return self.entries[index]

    @property
    def placeholder_count(self) -> int:
        return sum(1 for entry in self.entries if entry.is_placeholder)

    @property
    def scheduled(self) -> List[RoutineEntry]:
        return [entry for entry in self.entries if not entry.is_placeholder]

    @property
    def shortfall(self) -> Optional[PlacementShortfall]:
        """Report of unplaced subjects, or None if every subject got a slot."""
        if not self.unplaced:
            return None
        return PlacementShortfall(
            unplaced=tuple(subject.name for subject in self.unplaced),
            placeholder_count=self.placeholder_count,
        )

    def to_records(self) -> List[Dict[str, str]]:
        return [entry.to_record() for entry in self.entries]

    def to_frame(self) -> pd.DataFrame:
        """Three-column table (Date, Subject Name, Semester) for display or export."""
        return pd.DataFrame(
            [
                {"Date": entry.date.isoformat(), "Subject Name": entry.subject_name, "Semester": entry.semester}
                for entry in self.entries
            ],
            columns=["Date", "Subject Name", "Semester"],
        )
