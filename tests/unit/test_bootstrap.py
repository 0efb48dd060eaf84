"""Tests for application wiring."""

import asyncio

from garden_management.application.garden import CreateGardenCommand, GardenApplicationService
from garden_management.bootstrap import Application
from garden_management.config import ConfigurationLoader, ConfigurationManager
from garden_management.infrastructure.messaging import InMemoryMessageTransport


def make_manager(environ):
    return ConfigurationManager(loader=ConfigurationLoader(environ=environ))


def test_transport_follows_configuration(user_id):
    app = Application(config_manager=make_manager({"GARDEN_MESSAGING_TRANSPORT": "memory"}))

    service = app.initialize()

    assert isinstance(service, GardenApplicationService)
    assert isinstance(app.transport, InMemoryMessageTransport)
    assert app.garden_service is service


def test_created_garden_reaches_transport(user_id, now):
    transport = InMemoryMessageTransport()
    app = Application(config_manager=make_manager({}), transport=transport, clock=lambda: now)

    result = asyncio.run(app.garden_service.create_garden(CreateGardenCommand(
        user_id=user_id.value, name="Backyard", total_surface_area=10, target_humidity_level=50,
    )))

    assert result.is_success
    assert [m.message_type for m in transport.published] == ["GardenCreated"]
