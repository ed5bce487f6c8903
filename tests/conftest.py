"""Pytest configuration and shared fixtures."""

import datetime as dt

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from routine_scheduler.domain.entities import SEMESTER_LABELS, Subject
from routine_scheduler.domain.models import Base


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def start_date():
    return dt.date(2025, 3, 3)


def make_catalog(count: int) -> list:
    """Build ``count`` subjects spread round-robin over all 8 semesters."""
    subjects = []
    for i in range(count):
        subjects.append(
            Subject(
                name=f"Subject {i:03d}",
                semester=SEMESTER_LABELS[i % len(SEMESTER_LABELS)],
                credit=1 + i % 4,
                exam_type="Theory" if i % 3 else "Numerical",
                past_failure_rate=(i % 10) / 10,
            )
        )
    return subjects


@pytest.fixture
def catalog_100():
    """100 subjects across all 8 semesters."""
    return make_catalog(100)


@pytest.fixture
def catalog_factory():
    """Factory building N subjects spread over all 8 semesters."""
    return make_catalog
