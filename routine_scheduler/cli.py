"""Command-line interface for the exam routine scheduler."""

from __future__ import annotations

import argparse

from routine_scheduler.config import load_config
from routine_scheduler.domain.repositories import DatabaseManager, HolidayRepository
from routine_scheduler.engine.orchestrator import build_routine
from routine_scheduler.io.export_csv import export_routine_csv
from routine_scheduler.io.import_csv import import_holidays_csv, import_subjects_csv


def _db(args: argparse.Namespace) -> DatabaseManager:
    if args.db:
        return DatabaseManager(args.db)
    return DatabaseManager(load_config(getattr(args, "config", None)).db_url)


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    _db(args).create_tables()


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    session = _db(args).get_session()

    try:
        if args.subjects:
            count = import_subjects_csv(session, args.subjects, department=args.department, batch=args.batch)
            print(f"[OK] Imported {count} subjects")

        if args.holidays:
            count = import_holidays_csv(session, args.holidays, season_year=args.season)
            print(f"[OK] Imported {count} holidays")

        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        print(f"[ERROR] Import failed: {e}")
        raise
    finally:
        session.close()


def _cmd_add_holiday(args: argparse.Namespace) -> None:
    """Declare a holiday for a routine scope."""
    session = _db(args).get_session()

    try:
        holiday = HolidayRepository.add(
            session,
            args.season,
            args.department,
            args.batch,
            args.date,
            args.reason,
            window_start=args.start,
            window_end=args.end,
        )
        print(f"[OK] Holiday added: {holiday.date} ({holiday.reason})")

    except Exception as e:
        session.rollback()
        print(f"[ERROR] Could not add holiday: {e}")
        raise
    finally:
        session.close()


def _cmd_remove_holiday(args: argparse.Namespace) -> None:
    """Remove a declared holiday."""
    session = _db(args).get_session()

    try:
        if HolidayRepository.remove(session, args.season, args.department, args.batch, args.date):
            print(f"[OK] Holiday removed: {args.date}")
        else:
            print(f"[WARN] No holiday declared on {args.date}")

    except Exception as e:
        session.rollback()
        print(f"[ERROR] Could not remove holiday: {e}")
        raise
    finally:
        session.close()


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate the exam routine for a department/batch."""
    cfg = load_config(args.config)
    session = _db(args).get_session()

    try:
        routine = build_routine(
            session,
            args.season,
            args.department,
            args.batch,
            args.start,
            args.end,
            cfg,
            persist=not args.no_persist,
            seed=args.seed,
        )

        print(routine.to_frame().to_string(index=False))

        # Export to CSV if requested
        if args.out:
            routine.to_frame().to_csv(args.out, index=False)
            print(f"[INFO] Routine written to {args.out}")

        print(f"[OK] Generated routine {routine.start_date} .. {routine.end_date} "
              f"({len(routine) - routine.placeholder_count} exams, {routine.placeholder_count} placeholders)")

    except Exception as e:
        session.rollback()
        print(f"[ERROR] Generation failed: {e}")
        raise
    finally:
        session.close()


def _cmd_export(args: argparse.Namespace) -> None:
    """Export a stored routine to CSV."""
    session = _db(args).get_session()

    try:
        count = export_routine_csv(session, args.out, args.season, args.department, args.batch)
        print(f"[OK] Exported {count} rows to {args.out}")

    except Exception as e:
        print(f"[ERROR] Export failed: {e}")
        raise
    finally:
        session.close()


def _add_scope_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--season", required=True, help="Season/year key (e.g., 'Spring 2025')")
    parser.add_argument("--department", required=True, help="Department key")
    parser.add_argument("--batch", required=True, help="Batch key")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="routine-scheduler",
        description="Exam routine generator",
    )

    # Global options
    parser.add_argument("--db", help="Database URL (default: db_url from config, sqlite:///routine.db)")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--subjects", help="Path to subjects CSV")
    imp.add_argument("--holidays", help="Path to holidays CSV")
    imp.add_argument("--department", help="Department to filter subjects (optional)")
    imp.add_argument("--batch", help="Batch to filter subjects (optional)")
    imp.add_argument("--season", help="Season to filter holidays (optional)")
    imp.set_defaults(func=_cmd_import_csv)

    # add-holiday command
    add = sub.add_parser("add-holiday", help="Declare a holiday")
    _add_scope_args(add)
    add.add_argument("--date", required=True, help="Holiday date (YYYY-MM-DD)")
    add.add_argument("--reason", required=True, help="Reason for the holiday")
    add.add_argument("--start", help="Exam window start; holiday must fall inside")
    add.add_argument("--end", help="Exam window end; holiday must fall inside")
    add.set_defaults(func=_cmd_add_holiday)

    # remove-holiday command
    rem = sub.add_parser("remove-holiday", help="Remove a declared holiday")
    _add_scope_args(rem)
    rem.add_argument("--date", required=True, help="Holiday date (YYYY-MM-DD)")
    rem.set_defaults(func=_cmd_remove_holiday)

    # generate command
    gen = sub.add_parser("generate", help="Generate the exam routine")
    _add_scope_args(gen)
    gen.add_argument("--start", required=True, help="First exam date (YYYY-MM-DD)")
    gen.add_argument("--end", required=True, help="Requested last exam date (YYYY-MM-DD)")
    gen.add_argument("--config", help="Path to config YAML")
    gen.add_argument("--seed", type=int, help="Shuffle seed for a reproducible routine")
    gen.add_argument("--out", help="Optional: write routine to CSV")
    gen.add_argument("--no-persist", action="store_true", help="Do not store the routine")
    gen.set_defaults(func=_cmd_generate)

    # export command
    exp = sub.add_parser("export", help="Export a stored routine to CSV")
    _add_scope_args(exp)
    exp.add_argument("--out", required=True, help="Path to export routine CSV")
    exp.set_defaults(func=_cmd_export)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
