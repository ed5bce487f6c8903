"""Tests for catalog, holiday and routine repositories."""

import datetime as dt

import pytest

from routine_scheduler.domain.entities import Routine, RoutineEntry, Subject
from routine_scheduler.domain.models import SubjectRecord
from routine_scheduler.domain.repositories import (
    DatabaseManager,
    HolidayRepository,
    RoutineRepository,
    SubjectRepository,
)


def test_catalog_applies_defaults_and_semester_order(db_session):
    SubjectRepository.bulk_create(
        db_session,
        [
            SubjectRecord(department="EEE", batch="2022", semester="3rd Semester", subject_name="Signals",
                          credit=4, exam_type="Numerical", past_failure_rate=0.3),
            SubjectRecord(department="EEE", batch="2022", semester="1st Semester", subject_name="English"),
            SubjectRecord(department="EEE", batch="2022", semester="1st Semester", subject_name="Physics", credit=2),
            SubjectRecord(department="CSE", batch="2022", semester="1st Semester", subject_name="Programming"),
        ],
    )

    catalog = SubjectRepository.get_catalog(db_session, "EEE", "2022")

    assert [s.name for s in catalog] == ["English", "Physics", "Signals"]
    assert catalog[0] == Subject(name="English", semester="1st Semester", credit=3, exam_type="Theory", past_failure_rate=0.0)
    assert catalog[1].credit == 2
    assert catalog[2].exam_type == "Numerical"
    assert catalog[2].past_failure_rate == pytest.approx(0.3)


def test_catalog_ignores_unknown_semester_partitions(db_session):
    SubjectRepository.create(
        db_session, SubjectRecord(department="EEE", batch="2022", semester="Summer", subject_name="Internship")
    )
    assert SubjectRepository.get_catalog(db_session, "EEE", "2022") == []


def test_get_by_semester(db_session):
    SubjectRepository.bulk_create(
        db_session,
        [
            SubjectRecord(department="ME", batch="2020", semester="2nd Semester", subject_name="Drawing"),
            SubjectRecord(department="ME", batch="2020", semester="4th Semester", subject_name="Dynamics"),
        ],
    )
    rows = SubjectRepository.get_by_semester(db_session, "ME", "2020", "2nd Semester")
    assert [row.subject_name for row in rows] == ["Drawing"]
    assert len(SubjectRepository.get_all(db_session)) == 2


def test_add_and_list_holidays(db_session):
    HolidayRepository.add(db_session, "Spring 2025", "CSE", "2021", "2025-03-14", "Holi")
    HolidayRepository.add(db_session, "Spring 2025", "CSE", "2021", dt.date(2025, 3, 8), "Women's Day")
    HolidayRepository.add(db_session, "Spring 2025", "EEE", "2021", dt.date(2025, 3, 9), "Other scope")

    holidays = HolidayRepository.get_holidays(db_session, "Spring 2025", "CSE", "2021")

    assert holidays == {dt.date(2025, 3, 8): "Women's Day", dt.date(2025, 3, 14): "Holi"}


def test_add_holiday_requires_reason(db_session):
    with pytest.raises(ValueError, match="reason"):
        HolidayRepository.add(db_session, "Spring 2025", "CSE", "2021", "2025-03-14", "   ")


def test_add_holiday_rejects_duplicate(db_session):
    HolidayRepository.add(db_session, "Spring 2025", "CSE", "2021", "2025-03-14", "Holi")
    with pytest.raises(ValueError, match="already exists"):
        HolidayRepository.add(db_session, "Spring 2025", "CSE", "2021", "2025-03-14", "Dol Jatra")


def test_add_holiday_must_fall_inside_window(db_session):
    with pytest.raises(ValueError, match="within the exam window"):
        HolidayRepository.add(
            db_session, "Spring 2025", "CSE", "2021", "2025-02-01", "Too early",
            window_start="2025-03-01", window_end="2025-04-30",
        )
    with pytest.raises(ValueError, match="within the exam window"):
        HolidayRepository.add(
            db_session, "Spring 2025", "CSE", "2021", "2025-05-01", "Too late",
            window_start="2025-03-01", window_end="2025-04-30",
        )


def test_remove_holiday(db_session):
    HolidayRepository.add(db_session, "Spring 2025", "CSE", "2021", "2025-03-14", "Holi")

    assert HolidayRepository.remove(db_session, "Spring 2025", "CSE", "2021", "2025-03-14") is True
    assert HolidayRepository.remove(db_session, "Spring 2025", "CSE", "2021", "2025-03-14") is False
    assert HolidayRepository.get_holidays(db_session, "Spring 2025", "CSE", "2021") == {}


def _routine(start, names):
    entries = [
        RoutineEntry(start + dt.timedelta(days=i), name, "1st Semester") if name != "-"
        else RoutineEntry.placeholder(start + dt.timedelta(days=i))
        for i, name in enumerate(names)
    ]
    return Routine(
        entries=entries,
        start_date=start,
        end_date=entries[-1].date,
        score=12.5,
        holidays={dt.date(2025, 2, 21): "Language Day"},
        created_at=dt.datetime(2025, 2, 1, 9, 30),
    )


def test_save_and_load_routine(db_session):
    routine = _routine(dt.date(2025, 3, 3), ["Math", "-", "-", "Physics"])

    record = RoutineRepository.save(db_session, "Spring 2025", "CSE", "2021", routine)
    loaded = RoutineRepository.load_routine(db_session, "Spring 2025", "CSE", "2021")

    assert record.start_date == dt.date(2025, 3, 3)
    assert record.end_date == dt.date(2025, 3, 6)
    assert record.holidays == {"2025-02-21": "Language Day"}
    assert loaded.to_records() == routine.to_records()
    assert loaded.placeholder_count == 2
    assert loaded.score == pytest.approx(12.5)
    assert loaded.holidays == routine.holidays


def test_save_overwrites_existing_routine(db_session):
    RoutineRepository.save(db_session, "Spring 2025", "CSE", "2021", _routine(dt.date(2025, 3, 3), ["Math", "-", "-", "Physics"]))
    RoutineRepository.save(db_session, "Spring 2025", "CSE", "2021", _routine(dt.date(2025, 4, 1), ["Chemistry", "-"]))

    loaded = RoutineRepository.load_routine(db_session, "Spring 2025", "CSE", "2021")

    assert [entry.subject_name for entry in loaded] == ["Chemistry", "-"]
    assert loaded.start_date == dt.date(2025, 4, 1)


def test_load_missing_routine_returns_none(db_session):
    assert RoutineRepository.load_routine(db_session, "Fall 2030", "CSE", "2021") is None


def test_delete_routine(db_session):
    RoutineRepository.save(db_session, "Spring 2025", "CSE", "2021", _routine(dt.date(2025, 3, 3), ["Math"]))

    assert RoutineRepository.delete(db_session, "Spring 2025", "CSE", "2021") is True
    assert RoutineRepository.delete(db_session, "Spring 2025", "CSE", "2021") is False


def test_database_manager_creates_tables(tmp_path):
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'routine.db'}")
    manager.create_tables()
    session = manager.get_session()
    try:
        assert SubjectRepository.get_all(session) == []
    finally:
        session.close()
