"""Configuration loading for the routine scheduler."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class RoutineConfig:
    """Tunable constants of the placement heuristic and storage settings."""

    attempts: int = 20  # Number of randomized restarts
    unplaced_penalty: float = 50.0  # Subtracted per subject that finds no slot
    pool_size: int = 50  # Exam days in the date pool
    max_walk_days: int = 100  # Calendar days walked from start before giving up
    seed: Optional[int] = None
    db_url: str = "sqlite:///routine.db"

    def __post_init__(self) -> None:
        for name in ("attempts", "pool_size", "max_walk_days"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.pool_size > self.max_walk_days:
            raise ValueError(
                f"pool_size ({self.pool_size}) cannot exceed max_walk_days ({self.max_walk_days})"
            )
        if self.unplaced_penalty < 0:
            raise ValueError(f"unplaced_penalty must be >= 0, got {self.unplaced_penalty!r}")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError(f"seed must be an integer or null, got {self.seed!r}")


def load_config(path: str | Path | None = None) -> RoutineConfig:
    """
    Load configuration from a YAML (or JSON) file.

    Args:
        path: Path to the config file. None returns the defaults.

    Returns:
        RoutineConfig

    Raises:
        ValueError: On unknown keys or invalid values
    """
    if path is None:
        return RoutineConfig()

    with open(path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(RoutineConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    if "unplaced_penalty" in raw:
        raw["unplaced_penalty"] = float(raw["unplaced_penalty"])

    return RoutineConfig(**raw)
