import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from garden_management.application.garden import (
    AddPlantCommand,
    AdjustIdealHumidityCommand,
    ChangeGardenSurfaceAreaCommand,
    ChangeTargetHumidityCommand,
    CreateGardenCommand,
    DefineSurfaceAreaRequirementCommand,
    DeleteGardenCommand,
    GardenApplicationService,
    ReclassifyPlantCommand,
    RemovePlantCommand,
    RenameGardenCommand,
    RenamePlantCommand,
    SetPlantationDateCommand,
    UpdateGardenCommand,
    UpdatePlantCommand,
)
from garden_management.domain.garden import ErrorCodes, GardenId
from garden_management.infrastructure.exceptions import MessageTransportError
from garden_management.infrastructure.messaging import (
    GardenIntegrationEventPublisher,
    MessageTransport,
)
from garden_management.infrastructure.persistence import InMemoryUnitOfWork


class BrokenTransport(MessageTransport):
    async def publish(self, message):
        raise MessageTransportError("broker unreachable")


def run(coro):
    return asyncio.run(coro)


def stored(store, garden_id):
    with InMemoryUnitOfWork(store) as uow:
        return uow.gardens.get_by_id_with_plants(GardenId.from_value(garden_id), include_deleted=True)


@pytest.fixture
def created(garden_service, transport, user_id):
    """A committed 10 m2 garden; the transport is emptied afterwards."""
    result = run(garden_service.create_garden(CreateGardenCommand(
        user_id=user_id.value, name="Backyard", total_surface_area=Decimal("10"),
        target_humidity_level=50,
    )))
    transport.clear()
    return result.value


@pytest.fixture
def plant_command(created, now):
    def _command(**overrides):
        fields = {
            "garden_id": created.id,
            "name": "Tomato",
            "species": "Solanum lycopersicum",
            "type": "Vegetable",
            "plantation_date": now - timedelta(days=30),
            "surface_area_required": Decimal("2"),
            "ideal_humidity_level": 60,
        }
        fields.update(overrides)
        return AddPlantCommand(**fields)
    return _command


@pytest.fixture
def planted(garden_service, transport, plant_command):
    plant = run(garden_service.add_plant(plant_command(surface_area_required=Decimal("6")))).value
    transport.clear()
    return plant


class TestCreateGarden:
    def test_commits_then_publishes(self, garden_service, store, transport, user_id):
        # Arrange
        command = CreateGardenCommand(
            user_id=user_id.value, name=" Backyard ", total_surface_area="10.5",
            target_humidity_level=50, correlation_id="req-1",
        )

        # Act
        result = run(garden_service.create_garden(command))

        # Assert
        assert result.is_success
        garden = result.value
        assert garden.name == "Backyard"
        assert garden.total_surface_area == Decimal("10.5")
        assert garden.plants == []
        assert stored(store, garden.id).name == "Backyard"
        assert [m.message_type for m in transport.published] == ["GardenCreated"]
        message = transport.published[0]
        assert message.garden_id == garden.id
        assert message.correlation_id == "req-1"
        assert message.causation_id == command.command_id

    def test_invalid_garden_is_neither_committed_nor_published(
            self, garden_service, store, transport, user_id):
        result = run(garden_service.create_garden(CreateGardenCommand(
            user_id=user_id.value, name="", total_surface_area=0, target_humidity_level=120,
        )))

        assert result.error.code == ErrorCodes.GARDEN_VALIDATION_FAILED
        assert len(result.error.validation_errors) == 3
        assert len(store) == 0
        assert transport.published == []


class TestGardenQueries:
    def test_get_garden(self, garden_service, created, planted):
        result = run(garden_service.get_garden(created.id))

        assert result.value.id == created.id
        assert [p.id for p in result.value.plants] == [planted.id]

    def test_get_garden_without_plants(self, garden_service, created, planted):
        assert run(garden_service.get_garden(created.id, include_plants=False)).value.plants is None

    def test_unknown_garden_is_not_found(self, garden_service):
        result = run(garden_service.get_garden(uuid4()))

        assert result.error.code == ErrorCodes.GARDEN_NOT_FOUND

    def test_list_gardens_orders_by_name(self, garden_service, user_id):
        for name in ["Patio", "Allotment"]:
            run(garden_service.create_garden(CreateGardenCommand(
                user_id=user_id.value, name=name, total_surface_area=4, target_humidity_level=30,
            )))

        gardens = run(garden_service.list_gardens(user_id.value))

        assert [g.name for g in gardens] == ["Allotment", "Patio"]

    def test_plant_queries(self, garden_service, created, planted):
        assert [p.id for p in run(garden_service.list_plants(created.id)).value] == [planted.id]
        plant = run(garden_service.get_plant(created.id, planted.id)).value
        assert plant.garden_id == created.id
        assert plant.surface_area_required == Decimal("6")
        missing = run(garden_service.get_plant(created.id, uuid4()))
        assert missing.error.code == ErrorCodes.PLANT_NOT_FOUND


class TestGardenCommands:
    def test_rename_publishes_renamed(self, garden_service, store, transport, created):
        result = run(garden_service.rename_garden(RenameGardenCommand(
            garden_id=created.id, name="Allotment")))

        assert result.value.name == "Allotment"
        assert stored(store, created.id).name == "Allotment"
        assert [m.message_type for m in transport.published] == ["GardenRenamed"]

    def test_no_op_is_not_published(self, garden_service, store, transport, created):
        result = run(garden_service.rename_garden(RenameGardenCommand(
            garden_id=created.id, name="Backyard")))

        assert result.is_success
        assert transport.published == []
        assert store.version_of(GardenId.from_value(created.id)) == 1

    def test_change_surface_area_and_humidity(self, garden_service, transport, created):
        run(garden_service.change_surface_area(ChangeGardenSurfaceAreaCommand(
            garden_id=created.id, total_surface_area=20)))
        result = run(garden_service.change_target_humidity(ChangeTargetHumidityCommand(
            garden_id=created.id, target_humidity_level=35)))

        assert result.value.total_surface_area == Decimal("20")
        assert result.value.target_humidity_level == 35
        assert [m.message_type for m in transport.published] == [
            "GardenSurfaceAreaChanged", "GardenTargetHumidityChanged",
        ]

    def test_update_garden_applies_changes_in_one_commit(self, garden_service, store, transport, created):
        result = run(garden_service.update_garden(UpdateGardenCommand(
            garden_id=created.id, name="Allotment", total_surface_area=12, target_humidity_level=50)))

        assert result.value.name == "Allotment"
        assert [m.message_type for m in transport.published] == [
            "GardenRenamed", "GardenSurfaceAreaChanged",
        ]
        assert store.version_of(GardenId.from_value(created.id)) == 2

    def test_update_garden_stops_at_first_failure(self, garden_service, store, transport, created):
        result = run(garden_service.update_garden(UpdateGardenCommand(
            garden_id=created.id, name="Allotment", total_surface_area=-1, target_humidity_level=50)))

        assert list(result.error.validation_errors) == ["totalSurfaceArea"]
        assert stored(store, created.id).name == "Backyard"
        assert transport.published == []

    def test_unknown_garden_is_not_found(self, garden_service):
        result = run(garden_service.rename_garden(RenameGardenCommand(garden_id=uuid4(), name="X")))

        assert result.error.code == ErrorCodes.GARDEN_NOT_FOUND

    def test_delete_garden(self, garden_service, store, transport, created):
        command = DeleteGardenCommand(garden_id=created.id)

        assert run(garden_service.delete_garden(command)).is_success
        second = run(garden_service.delete_garden(DeleteGardenCommand(garden_id=created.id)))

        assert second.error.code == ErrorCodes.GARDEN_NOT_FOUND
        assert run(garden_service.get_garden(created.id)).error.code == ErrorCodes.GARDEN_NOT_FOUND
        assert stored(store, created.id).is_deleted
        assert [m.message_type for m in transport.published] == ["GardenDeleted"]


class TestPlantCommands:
    def test_add_plant(self, garden_service, store, transport, created, plant_command):
        result = run(garden_service.add_plant(plant_command()))

        plant = result.value
        assert plant.name == "Tomato"
        assert plant.type == "Vegetable"
        assert plant.garden_id == created.id
        assert len(stored(store, created.id).plants) == 1
        message = transport.published[0]
        assert message.message_type == "PlantAddedToGarden"
        assert message.plant_id == plant.id

    def test_add_plant_from_wire_payload_with_offset(self, garden_service, store, created):
        command = AddPlantCommand.model_validate({
            "garden_id": str(created.id),
            "name": "Tomato",
            "species": "Solanum lycopersicum",
            "type": "vegetable",
            "plantation_date": "2025-01-01T00:00:00+00:00",
            "surface_area_required": "2",
            "ideal_humidity_level": 60,
        })

        result = run(garden_service.add_plant(command))

        assert result.is_success
        assert result.value.plantation_date == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert len(stored(store, created.id).plants) == 1

    @pytest.mark.parametrize("command_class, extra", [
        (AddPlantCommand, {"name": "Tomato", "species": "Solanum lycopersicum",
                           "surface_area_required": "2"}),
        (SetPlantationDateCommand, {"plant_id": str(uuid4())}),
        (UpdatePlantCommand, {"plant_id": str(uuid4()), "surface_area_required": "2"}),
    ])
    def test_commands_reject_plantation_date_without_offset(self, created, command_class, extra):
        payload = {
            "garden_id": str(created.id),
            "type": "Vegetable",
            "plantation_date": "2025-01-01T00:00:00",
            "ideal_humidity_level": 60,
            **extra,
        }

        with pytest.raises(ValidationError) as exc_info:
            command_class.model_validate(payload)

        assert exc_info.value.errors()[0]["loc"] == ("plantation_date",)

    def test_capacity_failure_is_neither_committed_nor_published(
            self, garden_service, store, transport, created, planted, plant_command):
        result = run(garden_service.add_plant(plant_command(surface_area_required=Decimal("5"))))

        assert result.error.code == ErrorCodes.GARDEN_VALIDATION_FAILED
        assert list(result.error.validation_errors) == ["surfaceAreaRequired"]
        assert len(stored(store, created.id).plants) == 1
        assert transport.published == []

    def test_plant_mutators(self, garden_service, transport, created, planted, now):
        gid, pid = created.id, planted.id

        run(garden_service.rename_plant(RenamePlantCommand(garden_id=gid, plant_id=pid, name="Roma")))
        run(garden_service.reclassify_plant(ReclassifyPlantCommand(
            garden_id=gid, plant_id=pid, species="Fragaria", type="fruit")))
        run(garden_service.define_surface_area_requirement(DefineSurfaceAreaRequirementCommand(
            garden_id=gid, plant_id=pid, surface_area_required=8)))
        run(garden_service.adjust_ideal_humidity(AdjustIdealHumidityCommand(
            garden_id=gid, plant_id=pid, ideal_humidity_level=75)))
        result = run(garden_service.set_plantation_date(SetPlantationDateCommand(
            garden_id=gid, plant_id=pid, plantation_date=now - timedelta(days=3))))

        plant = result.value
        assert (plant.name, plant.species, plant.type) == ("Roma", "Fragaria", "Fruit")
        assert plant.surface_area_required == Decimal("8")
        assert plant.ideal_humidity_level == 75
        assert plant.plantation_date == now - timedelta(days=3)
        assert [m.message_type for m in transport.published] == [
            "PlantRenamed",
            "PlantReclassified",
            "PlantSurfaceAreaRequirementChanged",
            "PlantIdealHumidityLevelChanged",
            "PlantPlantationDateChanged",
        ]

    def test_unknown_plant_is_not_found(self, garden_service, created):
        result = run(garden_service.rename_plant(RenamePlantCommand(
            garden_id=created.id, plant_id=uuid4(), name="Roma")))

        assert result.error.code == ErrorCodes.PLANT_NOT_FOUND

    def test_update_plant_publishes_only_changed_fields(self, garden_service, transport, created, planted, now):
        result = run(garden_service.update_plant(UpdatePlantCommand(
            garden_id=created.id, plant_id=planted.id, name="Roma", species=None, type="Vegetable",
            plantation_date=now - timedelta(days=30), surface_area_required=6, ideal_humidity_level=40,
        )))

        assert result.value.name == "Roma"
        assert result.value.species == "Solanum lycopersicum"
        assert [m.message_type for m in transport.published] == [
            "PlantRenamed", "PlantIdealHumidityLevelChanged",
        ]

    def test_update_plant_rejects_unknown_type_before_any_change(
            self, garden_service, store, transport, created, planted, now):
        result = run(garden_service.update_plant(UpdatePlantCommand(
            garden_id=created.id, plant_id=planted.id, name="Roma", type="Tree",
            plantation_date=now - timedelta(days=30), surface_area_required=6, ideal_humidity_level=60,
        )))

        assert result.error.code == ErrorCodes.PLANT_VALIDATION_FAILED
        assert list(result.error.validation_errors) == ["type"]
        assert stored(store, created.id).plants[0].name == "Tomato"
        assert transport.published == []

    def test_remove_plant(self, garden_service, store, transport, created, planted):
        result = run(garden_service.remove_plant(RemovePlantCommand(
            garden_id=created.id, plant_id=planted.id)))

        assert result.is_success
        assert stored(store, created.id).plants == []
        assert [m.message_type for m in transport.published] == ["PlantRemovedFromGarden"]


class ConflictingUnitOfWork(InMemoryUnitOfWork):
    """Lets another request commit a rename just before this one commits."""

    def commit(self):
        with InMemoryUnitOfWork(self._store) as other:
            garden = other.gardens.get_by_id_with_plants(self.target)
            garden.rename("Renamed elsewhere", garden.updated_at)
            other.gardens.save(garden)
            other.commit()
        super().commit()


def test_concurrent_write_is_reported_as_conflict(store, transport, now, created):
    # Arrange
    target = GardenId.from_value(created.id)

    def factory():
        uow = ConflictingUnitOfWork(store)
        uow.target = target
        return uow

    service = GardenApplicationService(factory, GardenIntegrationEventPublisher(transport), clock=lambda: now)

    # Act
    result = run(service.change_target_humidity(ChangeTargetHumidityCommand(
        garden_id=created.id, target_humidity_level=80)))

    # Assert
    assert result.error.code == ErrorCodes.GARDEN_CONCURRENCY_CONFLICT
    assert stored(store, created.id).target_humidity_level.value == 50
    assert transport.published == []


def test_transport_failure_happens_after_commit(store, now, created):
    service = GardenApplicationService(
        lambda: InMemoryUnitOfWork(store),
        GardenIntegrationEventPublisher(BrokenTransport()),
        clock=lambda: now,
    )

    with pytest.raises(MessageTransportError):
        run(service.rename_garden(RenameGardenCommand(garden_id=created.id, name="Allotment")))

    assert stored(store, created.id).name == "Allotment"
