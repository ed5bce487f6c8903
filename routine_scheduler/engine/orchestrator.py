"""Orchestrator - builds the date pool, places subjects and finalizes the routine."""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from routine_scheduler.config import RoutineConfig
from routine_scheduler.domain.entities import Routine, Subject, as_date
from routine_scheduler.domain.repositories import HolidayRepository, RoutineRepository, SubjectRepository
from routine_scheduler.errors import EmptyCatalog
from routine_scheduler.services.constraints import validate_routine_spacing
from routine_scheduler.services.dates import build_date_pool, check_window_length, normalize_holidays

from .placer import fill_gaps, place_subjects


class RoutineGenerator:
    """
    Generates an exam routine from a subject catalog.

    The generator performs no I/O of its own; a ``store`` callable may be
    passed to hand the finished routine to a persistence layer.
    """

    def __init__(self, cfg: RoutineConfig | None = None):
        """
        Initialize generator.

        Args:
            cfg: RoutineConfig (default: built-in constants)
        """
        self.cfg = cfg or RoutineConfig()

    def generate(
        self,
        subjects: Sequence[Subject],
        start_date,
        end_date=None,
        holidays: Mapping | None = None,
        seed: Optional[int] = None,
        store: Optional[Callable[[Routine], object]] = None,
    ) -> Routine:
        """
        Generate a routine.

        Args:
            subjects: Subject catalog
            start_date: First candidate exam date
            end_date: Requested end of the exam window (informational)
            holidays: Mapping of date -> reason to skip
            seed: Shuffle seed (falls back to cfg.seed)
            store: Optional callable receiving the finished Routine

        Returns:
            Routine with one entry per date pool position

        Raises:
            EmptyCatalog: If no subjects are given
            DatePoolExhausted: If the date pool cannot be filled
            ValueError: If end_date is before start_date, or if the
                placement breaks same-semester spacing
        """
        subjects = list(subjects)
        if not subjects:
            raise EmptyCatalog()

        start = as_date(start_date)
        requested_end = as_date(end_date) if end_date is not None else None
        if requested_end is not None and requested_end < start:
            raise ValueError(f"End date {requested_end} is before start date {start}")

        holiday_map = normalize_holidays(holidays)

        date_pool = build_date_pool(
            start,
            holiday_map,
            pool_size=self.cfg.pool_size,
            max_walk_days=self.cfg.max_walk_days,
        )
        print(f"[INFO] Date pool: {date_pool[0]} .. {date_pool[-1]} ({len(date_pool)} days, {len(holiday_map)} holidays)")
        if requested_end is not None and date_pool[-1] > requested_end:
            print(f"[WARN] Routine runs past requested end date {requested_end} (last exam on {date_pool[-1]})")

        seed = self.cfg.seed if seed is None else seed
        best = place_subjects(
            subjects,
            date_pool,
            attempts=self.cfg.attempts,
            penalty=self.cfg.unplaced_penalty,
            rng=random.Random(seed),
        )

        routine = Routine(
            entries=fill_gaps(best.slots, date_pool),
            start_date=start,
            end_date=date_pool[-1],
            score=best.score,
            unplaced=list(best.unplaced),
            holidays=holiday_map,
            created_at=datetime.now(timezone.utc),
        )
        validate_routine_spacing(routine.entries)
        print(f"[OK] Placed {best.placed_count}/{len(subjects)} subjects (score {routine.score:.1f})")

        shortfall = routine.shortfall
        if shortfall is not None:
            print(f"[WARN] {shortfall}: {', '.join(shortfall.unplaced)}")

        if store is not None:
            store(routine)

        return routine


def generate_routine(
    subjects: Sequence[Subject],
    start_date,
    end_date=None,
    holidays: Mapping | None = None,
    cfg: RoutineConfig | None = None,
    seed: Optional[int] = None,
    store: Optional[Callable[[Routine], object]] = None,
) -> Routine:
    """Convenience function to generate a routine with a RoutineGenerator."""
    return RoutineGenerator(cfg).generate(
        subjects,
        start_date,
        end_date=end_date,
        holidays=holidays,
        seed=seed,
        store=store,
    )


def build_routine(
    session: Session,
    season_year: str,
    department: str,
    batch: str,
    start_date,
    end_date,
    cfg: RoutineConfig | None = None,
    persist: bool = True,
    seed: Optional[int] = None,
) -> Routine:
    """
    Generate the routine for a department/batch from stored catalog and holidays.

    Args:
        session: Database session
        season_year: Exam season key (e.g. "Spring 2025")
        department: Department key
        batch: Batch key
        start_date: First candidate exam date
        end_date: Requested end of the exam window; when given, the window
            must span exactly ``cfg.pool_size`` days, both ends included
        cfg: RoutineConfig
        persist: If True, overwrite the stored routine for this key
        seed: Optional shuffle seed

    Returns:
        Generated Routine

    Raises:
        ValueError: If the requested window has the wrong length
    """
    cfg = cfg or RoutineConfig()
    if end_date is not None:
        check_window_length(start_date, end_date, cfg.pool_size)

    print(f"[INFO] Building routine for {season_year} / {department} / {batch}")

    subjects: List[Subject] = SubjectRepository.get_catalog(session, department, batch)
    holidays = HolidayRepository.get_holidays(session, season_year, department, batch)
    print(f"[INFO] Loaded {len(subjects)} subjects and {len(holidays)} holidays")

    def _persist(routine: Routine) -> None:
        try:
            RoutineRepository.save(session, season_year, department, batch, routine)
        except Exception:
            session.rollback()
            raise
        print(f"[INFO] Persisted routine ({len(routine)} slots) for {season_year} / {department} / {batch}")

    return generate_routine(
        subjects,
        start_date,
        end_date=end_date,
        holidays=holidays,
        cfg=cfg,
        seed=seed,
        store=_persist if persist else None,
    )
