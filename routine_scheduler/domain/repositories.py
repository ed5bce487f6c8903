"""Repository classes for data access."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .entities import (
    DEFAULT_CREDIT,
    DEFAULT_EXAM_TYPE,
    DEFAULT_FAILURE_RATE,
    SEMESTER_LABELS,
    Routine,
    RoutineEntry,
    Subject,
    as_date,
)
from .models import Base, HolidayRecord, RoutineRecord, RoutineSlotRecord, SubjectRecord


class DatabaseManager:
    """Manages database connection and session factory."""

    def __init__(self, db_url: str = "sqlite:///routine.db", echo: bool = False):
        """
        Initialize database manager.

        Args:
            db_url: SQLAlchemy database URL (default: sqlite:///routine.db)
            echo: Log emitted SQL
        """
        self.db_url = db_url
        self.engine = create_engine(db_url, echo=echo)
        self.SessionLocal = sessionmaker(bind=self.engine)

    def create_tables(self):
        """Create all tables if they don't exist."""
        Base.metadata.create_all(self.engine)
        print(f"[INFO] Database initialized: {self.db_url}")

    def reset(self):
        """Drop all tables and recreate (WARNING: deletes all data!)."""
        Base.metadata.drop_all(self.engine)
        Base.metadata.create_all(self.engine)
        print(f"[WARN] Database reset: {self.db_url}")

    def get_session(self) -> Session:
        """Get a new database session."""
        return self.SessionLocal()


def _semester_rank(semester: str) -> int:
    return SEMESTER_LABELS.index(semester)


class SubjectRepository:
    """Repository for the subject catalog."""

    @staticmethod
    def get_all(session: Session) -> List[SubjectRecord]:
        """Get all subject rows."""
        return session.query(SubjectRecord).all()

    @staticmethod
    def get_by_semester(session: Session, department: str, batch: str, semester: str) -> List[SubjectRecord]:
        """Get subject rows of one semester partition."""
        return (
            session.query(SubjectRecord)
            .filter(
                SubjectRecord.department == department,
                SubjectRecord.batch == batch,
                SubjectRecord.semester == semester,
            )
            .order_by(SubjectRecord.id)
            .all()
        )

    @staticmethod
    def get_catalog(session: Session, department: str, batch: str) -> List[Subject]:
        """
        Get the scheduling catalog for a department/batch across all 8 semesters.

        Missing credit, exam type or failure rate fall back to 3, "Theory" and 0.

        Returns:
            Subjects ordered by semester, then insertion order
        """
        rows = (
            session.query(SubjectRecord)
            .filter(
                SubjectRecord.department == department,
                SubjectRecord.batch == batch,
                SubjectRecord.semester.in_(SEMESTER_LABELS),
            )
            .order_by(SubjectRecord.id)
            .all()
        )
        rows.sort(key=lambda row: _semester_rank(row.semester))

        return [
            Subject(
                name=row.subject_name,
                semester=row.semester,
                credit=row.credit or DEFAULT_CREDIT,
                exam_type=row.exam_type or DEFAULT_EXAM_TYPE,
                past_failure_rate=row.past_failure_rate or DEFAULT_FAILURE_RATE,
            )
            for row in rows
        ]

    @staticmethod
    def create(session: Session, subject: SubjectRecord) -> SubjectRecord:
        """Create a new subject."""
        session.add(subject)
        session.commit()
        session.refresh(subject)
        return subject

    @staticmethod
    def bulk_create(session: Session, subjects: List[SubjectRecord]) -> None:
        """Create multiple subjects."""
        session.add_all(subjects)
        session.commit()


class HolidayRepository:
    """Repository for declared holidays."""

    @staticmethod
    def _query(session: Session, season_year: str, department: str, batch: str):
        return session.query(HolidayRecord).filter(
            HolidayRecord.season_year == season_year,
            HolidayRecord.department == department,
            HolidayRecord.batch == batch,
        )

    @staticmethod
    def get_by_scope(session: Session, season_year: str, department: str, batch: str) -> List[HolidayRecord]:
        """Get holiday rows for a season/department/batch, ordered by date."""
        return HolidayRepository._query(session, season_year, department, batch).order_by(HolidayRecord.date).all()

    @staticmethod
    def get_holidays(session: Session, season_year: str, department: str, batch: str) -> Dict[date, str]:
        """Get the holiday map (date -> reason) for a season/department/batch."""
        return {
            row.date: row.reason
            for row in HolidayRepository.get_by_scope(session, season_year, department, batch)
        }

    @staticmethod
    def add(
        session: Session,
        season_year: str,
        department: str,
        batch: str,
        day,
        reason: str,
        window_start=None,
        window_end=None,
    ) -> HolidayRecord:
        """
        Declare a holiday.

        Args:
            session: Database session
            season_year, department, batch: Routine scope
            day: Holiday date (date or YYYY-MM-DD)
            reason: Non-empty reason
            window_start, window_end: Optional exam window the date must fall in

        Raises:
            ValueError: Empty reason, date outside the window, or holiday already declared
        """
        day = as_date(day)
        reason = (reason or "").strip()
        if not reason:
            raise ValueError("Provide a holiday reason.")
        if window_start is not None and day < as_date(window_start):
            raise ValueError(f"Holiday {day} must be within the exam window.")
        if window_end is not None and day > as_date(window_end):
            raise ValueError(f"Holiday {day} must be within the exam window.")

        existing = (
            HolidayRepository._query(session, season_year, department, batch)
            .filter(HolidayRecord.date == day)
            .first()
        )
        if existing is not None:
            raise ValueError(f"Holiday already exists on {day} ({existing.reason}). Remove it before adding a new reason.")

        holiday = HolidayRecord(
            season_year=season_year,
            department=department,
            batch=batch,
            date=day,
            reason=reason,
        )
        session.add(holiday)
        session.commit()
        session.refresh(holiday)
        return holiday

    @staticmethod
    def remove(session: Session, season_year: str, department: str, batch: str, day) -> bool:
        """Remove a holiday. Returns True if a row was deleted."""
        count = (
            HolidayRepository._query(session, season_year, department, batch)
            .filter(HolidayRecord.date == as_date(day))
            .delete(synchronize_session=False)
        )
        session.commit()
        return count > 0


class RoutineRepository:
    """Repository for generated routines (one record per season/department/batch)."""

    @staticmethod
    def get(session: Session, season_year: str, department: str, batch: str) -> Optional[RoutineRecord]:
        """Get the stored routine record for a key."""
        return (
            session.query(RoutineRecord)
            .filter(
                RoutineRecord.season_year == season_year,
                RoutineRecord.department == department,
                RoutineRecord.batch == batch,
            )
            .first()
        )

    @staticmethod
    def save(session: Session, season_year: str, department: str, batch: str, routine: Routine) -> RoutineRecord:
        """
        Persist a routine, fully overwriting any record stored under the same key.

        Errors from the database are not caught; the caller decides whether to roll back.
        """
        record = RoutineRepository.get(session, season_year, department, batch)
        if record is None:
            record = RoutineRecord(season_year=season_year, department=department, batch=batch)
            session.add(record)

        record.start_date = routine.start_date
        record.end_date = routine.end_date
        record.created_at = routine.created_at or datetime.now(timezone.utc)
        record.score = routine.score
        record.holidays = {day.isoformat(): reason for day, reason in sorted(routine.holidays.items())}
        record.slots = [
            RoutineSlotRecord(
                position=position,
                date=entry.date,
                subject_name=entry.subject_name,
                semester=entry.semester,
            )
            for position, entry in enumerate(routine.entries)
        ]

        session.commit()
        session.refresh(record)
        return record

    @staticmethod
    def load_routine(session: Session, season_year: str, department: str, batch: str) -> Optional[Routine]:
        """Rebuild a Routine from its stored record (unplaced subjects are not stored)."""
        record = RoutineRepository.get(session, season_year, department, batch)
        if record is None:
            return None

        return Routine(
            entries=[
                RoutineEntry(date=slot.date, subject_name=slot.subject_name, semester=slot.semester)
                for slot in record.slots
            ],
            start_date=record.start_date,
            end_date=record.end_date,
            score=record.score,
            holidays={date.fromisoformat(day): reason for day, reason in (record.holidays or {}).items()},
            created_at=record.created_at,
        )

    @staticmethod
    def delete(session: Session, season_year: str, department: str, batch: str) -> bool:
        """Delete the stored routine for a key. Returns True if one existed."""
        record = RoutineRepository.get(session, season_year, department, batch)
        if record is None:
            return False
        session.delete(record)
        session.commit()
        return True
