from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from garden_management.application.garden.service import GardenApplicationService
from garden_management.config import reset_config_manager
from garden_management.domain.garden import Garden, UserId
from garden_management.infrastructure.messaging import (
    GardenIntegrationEventPublisher,
    InMemoryMessageTransport,
)
from garden_management.infrastructure.persistence import InMemoryGardenStore, InMemoryUnitOfWork

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture(autouse=True)
def reset_configuration():
    reset_config_manager()
    yield
    reset_config_manager()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def user_id():
    return UserId(uuid4())


@pytest.fixture
def garden(user_id, now):
    """A 10 m2 garden at 50% target humidity with an empty event buffer."""
    garden = Garden.create(user_id, "Backyard", Decimal("10"), 50, now).unwrap()
    garden.clear_pending_events()
    return garden


@pytest.fixture
def plant_args(now):
    return {
        "name": "Tomato",
        "species": "Solanum lycopersicum",
        "plant_type": "Vegetable",
        "plantation_date": now - timedelta(days=30),
        "surface_area_required": Decimal("2"),
        "ideal_humidity_level": 60,
    }


@pytest.fixture
def add_plant(now, plant_args):
    """Plant into a garden with default arguments, returning the plant."""
    def _add(garden, **overrides):
        args = {**plant_args, **overrides}
        return garden.add_plant(now=now, **args).unwrap()
    return _add


@pytest.fixture
def store():
    return InMemoryGardenStore()


@pytest.fixture
def transport():
    return InMemoryMessageTransport()


@pytest.fixture
def garden_service(store, transport, now):
    return GardenApplicationService(
        unit_of_work_factory=lambda: InMemoryUnitOfWork(store),
        publisher=GardenIntegrationEventPublisher(transport),
        clock=lambda: now,
    )
