from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from core.domain import PackageType, Student, StudentStatus
from core.models import Base

NOW = datetime(2024, 6, 10, 15, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_student():
    counter = {"n": 0}

    def _make(**overrides) -> Student:
        counter["n"] += 1
        values = dict(
            id=f"s{counter['n']}",
            name=f"Student {counter['n']}",
            package=PackageType.GOLD,
            start_date=NOW - timedelta(days=20),
            end_date=NOW + timedelta(days=40),
            coach_id="coach-1",
            lessons_done=2,
            total_lessons=16,
            last_contact_date=NOW - timedelta(hours=1),
            status=StudentStatus.ACTIVE,
        )
        values.update(overrides)
        return Student(**values)

    return _make


@pytest.fixture
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    with Session(engine) as s:
        yield s
    engine.dispose()
