"""
Pytest Configuration and Shared Fixtures for SGIU Analytics Tests.

This module provides fixtures shared by all analytics tests:
- Labeled row builders and the 10-row equipment scenario
- Incident histories spanning several students and months
- Active student counts per month
- A FastAPI TestClient bound to the application

Dependencies:
- pytest
- httpx (required by fastapi.testclient)
"""

from datetime import datetime, timezone
from typing import Callable, Generator, List

import pytest
from fastapi.testclient import TestClient

from sgiu_analytics.core.config import get_settings
from sgiu_analytics.models import (
    ActiveStudentsMonth,
    IncidentRecord,
    LabeledRow,
)


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Register custom markers.

    - parity: checks that results match the dashboard's reference loops
    """
    config.addinivalue_line(
        'markers',
        'parity: marks tests checking results against the row-by-row reference loops'
    )


# ============================================================
# LABELED ROW FIXTURES
# ============================================================

@pytest.fixture
def make_row() -> Callable[..., LabeledRow]:
    """
    Factory for LabeledRow with sensible defaults.

    Example:
        row = make_row(category='services', prior_count=3)
    """
    def _make(
        category: str = 'equipment',
        previous_category: str = 'none',
        prior_count: int = 0,
        ordinal_level: int = 3,
        label: int = 0,
    ) -> LabeledRow:
        return LabeledRow(
            category=category,
            previous_category=previous_category,
            prior_count=prior_count,
            ordinal_level=ordinal_level,
            label=label,
        )
    return _make


@pytest.fixture
def equipment_scenario(make_row) -> List[LabeledRow]:
    """
    Ten rows: six equipment incidents (label=1) and four others (label=0).

    All rows share ordinal level 3. Equipment reports come from repeat
    reporters whose previous report was also equipment; the others are first
    reports (previous 'none') with few or no earlier incidents.
    """
    positives = [
        make_row('equipment', 'equipment', prior, 3, 1)
        for prior in (3, 4, 5, 3, 4, 5)
    ]
    negatives = [
        make_row(category, 'none', prior, 3, 0)
        for category, prior in (
            ('services', 0),
            ('infrastructure', 1),
            ('other', 0),
            ('services', 1),
        )
    ]
    return positives + negatives


# ============================================================
# INCIDENT FIXTURES
# ============================================================

def _ts(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def incident_history() -> List[IncidentRecord]:
    """
    Six incidents from three students across January-March 2025.

    Listed out of chronological order on purpose.

    Chronological order:
        2025-01-05 user 1 equipment      sat 4   year2
        2025-01-10 user 2 equipment      sat -   year5
        2025-01-20 user 1 services       sat 2   year2
        2025-02-03 user 3 other          sat -   (no level)
        2025-03-01 user 1 equipment      sat 5   year2
        2025-03-15 user 2 infrastructure sat 5   year5
    """
    return [
        IncidentRecord(id=5, user_id=1, category='equipment', created_at=_ts(2025, 3, 1),
                       satisfaction=5, education_level='year2'),
        IncidentRecord(id=1, user_id=1, category='equipment', created_at=_ts(2025, 1, 5),
                       satisfaction=4, education_level='year2'),
        IncidentRecord(id=3, user_id=1, category='services', created_at=_ts(2025, 1, 20),
                       satisfaction=2, education_level='year2'),
        IncidentRecord(id=2, user_id=2, category='equipment', created_at=_ts(2025, 1, 10),
                       satisfaction=None, education_level='year5'),
        IncidentRecord(id=6, user_id=2, category='infrastructure', created_at=_ts(2025, 3, 15),
                       satisfaction=5, education_level='year5'),
        IncidentRecord(id=4, user_id=3, category='other', created_at=_ts(2025, 2, 3),
                       satisfaction=None, education_level=None),
    ]


@pytest.fixture
def active_students() -> List[ActiveStudentsMonth]:
    """Active students for January-April 2025 (April has no incidents)."""
    return [
        ActiveStudentsMonth(month='2025-02', active_students=1200),
        ActiveStudentsMonth(month='2025-01', active_students=1000),
        ActiveStudentsMonth(month='2025-04', active_students=900),
        ActiveStudentsMonth(month='2025-03', active_students=1500),
    ]


# ============================================================
# API CLIENT FIXTURE
# ============================================================

@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient for the application, with fresh settings."""
    get_settings.cache_clear()
    from sgiu_analytics.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
