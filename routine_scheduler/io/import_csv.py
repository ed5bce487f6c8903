"""CSV import utilities to load data into database."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from routine_scheduler.domain.entities import EXAM_TYPES, SEMESTER_LABELS
from routine_scheduler.domain.models import HolidayRecord, SubjectRecord


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    df.columns = df.columns.str.lower().str.strip().str.replace(" ", "_")
    return df


def _require_columns(df: pd.DataFrame, required: list, csv_path) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{csv_path} is missing required column(s): {', '.join(missing)}")


def import_subjects_csv(
    session: Session,
    csv_path: str | Path,
    department: str | None = None,
    batch: str | None = None,
) -> int:
    """
    Import a subject catalog from CSV into database.

    Args:
        session: Database session
        csv_path: Path to subjects CSV
            (department, batch, semester, subject_name[, credit, exam_type, past_failure_rate])
        department: Optional department to filter
        batch: Optional batch to filter

    Returns:
        Number of subjects imported
    """
    df = pd.read_csv(csv_path, dtype=str)

    # Normalize column names
    df = _normalize_columns(df)
    _require_columns(df, ["department", "batch", "semester", "subject_name"], csv_path)

    # Filter by scope if specified
    if department is not None:
        df = df[df["department"] == department].copy()
    if batch is not None:
        df = df[df["batch"] == batch].copy()

    df["semester"] = df["semester"].str.strip()
    df["subject_name"] = df["subject_name"].str.strip()

    unknown = sorted(set(df["semester"].fillna("")) - set(SEMESTER_LABELS))
    if unknown:
        raise ValueError(f"Unknown semester label(s) in {csv_path}: {', '.join(unknown)}")

    # Normalize exam type capitalization (theory -> Theory)
    if "exam_type" in df.columns:
        df["exam_type"] = df["exam_type"].str.strip().str.capitalize()
        bad_types = sorted(set(df["exam_type"].dropna()) - set(EXAM_TYPES))
        if bad_types:
            raise ValueError(f"Unknown exam type(s) in {csv_path}: {', '.join(bad_types)}")

    if "credit" in df.columns:
        credit = pd.to_numeric(df["credit"], errors="coerce")
        bad = df.loc[
            df["credit"].notna() & (credit.isna() | (credit <= 0) | (credit % 1 != 0)), "subject_name"
        ]
        if not bad.empty:
            raise ValueError(f"Credit must be a positive whole number in {csv_path}: {', '.join(bad.astype(str))}")
        df["credit"] = credit

    if "past_failure_rate" in df.columns:
        rate = pd.to_numeric(df["past_failure_rate"], errors="coerce")
        bad = df.loc[
            df["past_failure_rate"].notna() & (rate.isna() | (rate < 0) | (rate > 1)), "subject_name"
        ]
        if not bad.empty:
            raise ValueError(f"Past failure rate must be within [0, 1] in {csv_path}: {', '.join(bad.astype(str))}")
        df["past_failure_rate"] = rate

    # Deduplicate: a later row for the same subject replaces the earlier one
    df = df.drop_duplicates(subset=["department", "batch", "semester", "subject_name"], keep="last")

    # Create SubjectRecord objects
    subjects = []
    for _, row in df.iterrows():
        subject = SubjectRecord(
            department=str(row["department"]),
            batch=str(row["batch"]),
            semester=str(row["semester"]),
            subject_name=str(row["subject_name"]),
            credit=int(row["credit"]) if pd.notna(row.get("credit")) else None,
            exam_type=str(row["exam_type"]) if pd.notna(row.get("exam_type")) else None,
            past_failure_rate=float(row["past_failure_rate"]) if pd.notna(row.get("past_failure_rate")) else None,
        )
        subjects.append(subject)

    # Bulk insert
    session.add_all(subjects)
    session.commit()

    print(f"[INFO] Imported {len(subjects)} subjects from {csv_path}")
    return len(subjects)


def import_holidays_csv(session: Session, csv_path: str | Path, season_year: str | None = None) -> int:
    """
    Import declared holidays from CSV into database.

    Args:
        session: Database session
        csv_path: Path to holidays CSV (season_year, department, batch, date, reason)
        season_year: Optional season to filter

    Returns:
        Number of holidays imported
    """
    df = pd.read_csv(csv_path, dtype=str)

    # Normalize column names
    df = _normalize_columns(df)
    _require_columns(df, ["season_year", "department", "batch", "date", "reason"], csv_path)

    # Filter by season if specified
    if season_year is not None:
        df = df[df["season_year"] == season_year].copy()

    # Convert date
    df["date"] = pd.to_datetime(df["date"]).dt.date

    # Deduplicate: keep the last reason given for a date
    df = df.drop_duplicates(subset=["season_year", "department", "batch", "date"], keep="last")

    # Create HolidayRecord objects
    holidays = []
    for _, row in df.iterrows():
        holiday = HolidayRecord(
            season_year=str(row["season_year"]),
            department=str(row["department"]),
            batch=str(row["batch"]),
            date=row["date"],
            reason=str(row["reason"]).strip(),
        )
        holidays.append(holiday)

    # Bulk insert
    session.add_all(holidays)
    session.commit()

    print(f"[INFO] Imported {len(holidays)} holidays from {csv_path}")
    return len(holidays)
