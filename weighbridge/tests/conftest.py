from collections.abc import Generator
from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel

from weighbridge.api.deps import get_db
from weighbridge.domain.settlement.entities.trip_settlement import TripSettlement
from weighbridge.domain.weighing.entities.weighing_process import WeighingProcess
from weighbridge.infrastructure.database.db import build_engine
from weighbridge.main import app


@pytest.fixture
def trip_id() -> UUID:
    return uuid4()


@pytest.fixture
def base_time() -> datetime:
    return datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def new_process(trip_id: UUID) -> WeighingProcess:
    """Weighing process in PENDING status with its creation event cleared."""
    process = WeighingProcess.create(trip_id)
    process.clear_domain_events()
    return process


@pytest.fixture
def weighed_process(new_process: WeighingProcess) -> WeighingProcess:
    """Weighing process with gross 100 kg and tare 20 kg (net 80 kg)."""
    new_process.record_gross_weight(100)
    new_process.record_tare_weight(20)
    new_process.clear_domain_events()
    return new_process


@pytest.fixture
def settlement() -> TripSettlement:
    """Settlement with a physical net weight of 80 kg and no loads."""
    settlement = TripSettlement.create(uuid4(), 80)
    settlement.clear_domain_events()
    return settlement


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with all tables created."""
    test_engine = build_engine("sqlite://", echo=False)
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """Test client whose requests use the in-memory database."""

    def get_test_db() -> Generator[Session, None, None]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = get_test_db
    # Not entered as a context manager so the lifespan does not touch the
    # configured database.
    yield TestClient(app)
    app.dependency_overrides.clear()
