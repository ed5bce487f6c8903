"""Scheduling engine: randomized restart placement and routine orchestration."""

from .orchestrator import RoutineGenerator, build_routine, generate_routine
from .placer import PlacementResult, fill_gaps, first_fit, place_subjects

__all__ = [
    "PlacementResult",
    "first_fit",
    "place_subjects",
    "fill_gaps",
    "RoutineGenerator",
    "generate_routine",
    "build_routine",
]
