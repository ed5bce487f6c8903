"""Exam routine scheduler.

Modules:
- config: load and validate configuration (YAML or JSON)
- errors: fatal scheduling errors
- domain: subject/routine entities, SQLAlchemy models and repositories
- services: subject scoring, date pool construction, spacing constraints
- engine: randomized restart placer and routine orchestration
- io: CSV import/export
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "errors",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
