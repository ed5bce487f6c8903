"""Domain entities, models and data access layer."""

from .entities import PLACEHOLDER, SEMESTER_LABELS, PlacementShortfall, Routine, RoutineEntry, Subject
from .models import Base, HolidayRecord, RoutineRecord, RoutineSlotRecord, SubjectRecord
from .repositories import DatabaseManager, HolidayRepository, RoutineRepository, SubjectRepository

__all__ = [
    "PLACEHOLDER",
    "SEMESTER_LABELS",
    "Subject",
    "RoutineEntry",
    "Routine",
    "PlacementShortfall",
    "Base",
    "SubjectRecord",
    "HolidayRecord",
    "RoutineRecord",
    "RoutineSlotRecord",
    "DatabaseManager",
    "SubjectRepository",
    "HolidayRepository",
    "RoutineRepository",
]
