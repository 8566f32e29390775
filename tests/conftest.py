from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

import punch_api.models  # noqa: F401  register tables
from punch_api.core.database import Base, create_db_engine, create_session_factory
from punch_api.main import app
from punch_api.models import AttendanceRecord, Employee


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'punch.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    # Lifespan is not entered; the app gets the test database directly
    app.state.session_factory = session_factory
    return TestClient(app, raise_server_exceptions=False)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def add_punch(db):
    """Insert a punch row with an explicit time, registering the employee if needed."""

    def _add(employee_id, punch_type, punch_time, image_data=None, latitude=None, longitude=None):
        if db.get(Employee, employee_id) is None:
            db.add(Employee(employee_id=employee_id, is_punched_in=False))
        db.add(AttendanceRecord(
            employee_id=employee_id,
            punch_type=punch_type,
            punch_time=punch_time,
            image_data=image_data,
            latitude=latitude,
            longitude=longitude,
        ))
        db.commit()

    return _add
