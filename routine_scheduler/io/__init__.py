"""I/O utilities for CSV import/export."""

from .export_csv import export_routine_csv
from .import_csv import import_holidays_csv, import_subjects_csv

__all__ = [
    "import_subjects_csv",
    "import_holidays_csv",
    "export_routine_csv",
]
