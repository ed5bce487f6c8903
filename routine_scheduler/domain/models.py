"""SQLAlchemy models for the exam routine system."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class SubjectRecord(Base):
    """Subject in a department/batch catalog, partitioned by semester."""

    __tablename__ = "subjects"
    __table_args__ = (
        UniqueConstraint("department", "batch", "semester", "subject_name", name="uq_subject_per_semester"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    department = Column(String(100), nullable=False)
    batch = Column(String(50), nullable=False)
    semester = Column(String(20), nullable=False)  # "1st Semester" .. "8th Semester"
    subject_name = Column(String(200), nullable=False)

    # Scheduling metadata (nullable; defaults applied when the catalog is read)
    credit = Column(Integer, nullable=True)
    exam_type = Column(String(20), nullable=True)  # Theory, Numerical
    past_failure_rate = Column(Float, nullable=True)  # 0-1

    def __repr__(self) -> str:
        return f"<SubjectRecord(id={self.id}, name='{self.subject_name}', semester='{self.semester}')>"


class HolidayRecord(Base):
    """Declared holiday excluded from the exam date pool."""

    __tablename__ = "holidays"
    __table_args__ = (
        UniqueConstraint("season_year", "department", "batch", "date", name="uq_holiday_per_scope"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    season_year = Column(String(50), nullable=False)  # e.g. "Spring 2025"
    department = Column(String(100), nullable=False)
    batch = Column(String(50), nullable=False)
    date = Column(Date, nullable=False)
    reason = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<HolidayRecord(date={self.date}, reason='{self.reason}')>"


class RoutineRecord(Base):
    """Generated routine for one (season_year, department, batch) key."""

    __tablename__ = "routines"
    __table_args__ = (
        UniqueConstraint("season_year", "department", "batch", name="uq_routine_per_scope"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    season_year = Column(String(50), nullable=False)
    department = Column(String(100), nullable=False)
    batch = Column(String(50), nullable=False)

    # Meta
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    score = Column(Float, nullable=True)

    holidays = Column(JSON, nullable=False, default=dict)  # ISO date -> reason

    # Relationships
    slots = relationship(
        "RoutineSlotRecord",
        back_populates="routine",
        order_by="RoutineSlotRecord.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<RoutineRecord(id={self.id}, key='{self.season_year}/{self.department}/{self.batch}', "
            f"{self.start_date}..{self.end_date})>"
        )


class RoutineSlotRecord(Base):
    """One slot of a stored routine (subject_name/semester are "-" for placeholders)."""

    __tablename__ = "routine_slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    routine_id = Column(Integer, ForeignKey("routines.id"), nullable=False)
    position = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    subject_name = Column(String(200), nullable=False)
    semester = Column(String(20), nullable=False)

    # Relationships
    routine = relationship("RoutineRecord", back_populates="slots")

    def __repr__(self) -> str:
        return f"<RoutineSlotRecord(pos={self.position}, date={self.date}, subject='{self.subject_name}')>"
