"""CSV export of generated routines."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.orm import Session

from routine_scheduler.domain.repositories import RoutineRepository


def export_routine_csv(
    session: Session,
    csv_path: str | Path,
    season_year: str,
    department: str,
    batch: str,
) -> int:
    """
    Export a stored routine as a three-column (Date, Subject Name, Semester) CSV.

    Returns:
        Number of rows written

    Raises:
        LookupError: If no routine is stored for the key
    """
    routine = RoutineRepository.load_routine(session, season_year, department, batch)
    if routine is None:
        raise LookupError(f"No routine stored for {season_year} / {department} / {batch}")

    df = routine.to_frame()
    df.to_csv(csv_path, index=False)

    print(f"[INFO] Exported {len(df)} routine rows to {csv_path}")
    return len(df)
