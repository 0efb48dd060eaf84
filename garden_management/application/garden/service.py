"""Garden application service - load, mutate, commit, publish."""
from datetime import datetime, timezone
from typing import Any, Callable, List, NamedTuple, Optional
from uuid import UUID

from garden_management.application.dto.base import BaseCommand
from garden_management.domain.base.result import Result
from garden_management.domain.garden.aggregate import Garden
from garden_management.domain.garden.exceptions import ErrorCodes
from garden_management.domain.garden.plant import TYPE_INVALID, parse_plant_type
from garden_management.domain.garden.repository import GardenUnitOfWork
from garden_management.domain.garden.value_objects import GardenId, UserId
from garden_management.infrastructure.logging.logger import get_logger
from garden_management.infrastructure.messaging.publisher import GardenIntegrationEventPublisher
from garden_management.infrastructure.messaging.translation import MessageContext
from garden_management.infrastructure.persistence.exceptions import ConcurrencyError

from .commands import (
    AddPlantCommand,
    AdjustIdealHumidityCommand,
    ChangeGardenSurfaceAreaCommand,
    ChangeTargetHumidityCommand,
    CreateGardenCommand,
    DefineSurfaceAreaRequirementCommand,
    DeleteGardenCommand,
    GardenCommand,
    PlantCommand,
    ReclassifyPlantCommand,
    RemovePlantCommand,
    RenameGardenCommand,
    RenamePlantCommand,
    SetPlantationDateCommand,
    UpdateGardenCommand,
    UpdatePlantCommand,
)
from .dto import GardenDTO, PlantDTO

Clock = Callable[[], datetime]
UnitOfWorkFactory = Callable[[], GardenUnitOfWork]
Operation = Callable[[Garden, datetime], Result[Any]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _Outcome(NamedTuple):
    garden: Garden
    value: Any


class GardenApplicationService:
    """
    Use cases for gardens and their plants.

    Every mutating use case runs in a fresh unit of work:

    1. load the garden with its plants
    2. apply one or more aggregate operations
    3. on failure return the failure unchanged; nothing is committed or published
    4. otherwise commit, then publish the garden's pending events

    A stale write detected at commit is reported as
    ``Garden.ConcurrencyConflict`` so the caller can retry. A transport
    failure while publishing propagates; the commit has already happened and
    the unpublished events stay pending on the garden.
    """

    def __init__(self,
                 unit_of_work_factory: UnitOfWorkFactory,
                 publisher: GardenIntegrationEventPublisher,
                 clock: Optional[Clock] = None):
        self._unit_of_work_factory = unit_of_work_factory
        self._publisher = publisher
        self._clock = clock or utc_now
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_garden(self, garden_id: UUID, include_plants: bool = True) -> Result[GardenDTO]:
        with self._unit_of_work_factory() as uow:
            gid = GardenId.from_value(garden_id)
            garden = (uow.gardens.get_by_id_with_plants(gid) if include_plants
                      else uow.gardens.get_by_id(gid))
        if garden is None:
            return self._garden_not_found(garden_id)
        return Result.success(GardenDTO.from_domain(garden, include_plants))

    async def list_gardens(self, user_id: UUID) -> List[GardenDTO]:
        """List a user's gardens ordered by name, without their plants."""
        with self._unit_of_work_factory() as uow:
            gardens = uow.gardens.list_by_user(UserId.from_value(user_id))
        return [GardenDTO.from_domain(garden, include_plants=False) for garden in gardens]

    async def list_plants(self, garden_id: UUID) -> Result[List[PlantDTO]]:
        with self._unit_of_work_factory() as uow:
            garden = uow.gardens.get_by_id_with_plants(GardenId.from_value(garden_id))
        if garden is None:
            return self._garden_not_found(garden_id)
        return Result.success([PlantDTO.from_domain(garden, plant) for plant in garden.plants])

    async def get_plant(self, garden_id: UUID, plant_id: UUID) -> Result[PlantDTO]:
        with self._unit_of_work_factory() as uow:
            garden = uow.gardens.get_by_id_with_plants(GardenId.from_value(garden_id))
        if garden is None:
            return self._garden_not_found(garden_id)
        plant = garden.find_plant(plant_id)
        if plant is None:
            return self._plant_not_found(plant_id)
        return Result.success(PlantDTO.from_domain(garden, plant))

    # ------------------------------------------------------------------
    # Garden commands
    # ------------------------------------------------------------------

    async def create_garden(self, command: CreateGardenCommand) -> Result[GardenDTO]:
        now = self._clock()
        created = Garden.create(
            UserId.from_value(command.user_id),
            command.name,
            command.total_surface_area,
            command.target_humidity_level,
            now,
        )
        if created.is_failure:
            self._log_rejected("create_garden", created)
            return created

        garden = created.value
        with self._unit_of_work_factory() as uow:
            uow.gardens.add(garden)
            conflict = self._commit(uow, garden)
        if conflict is not None:
            return conflict

        await self._publish(garden, command)
        self._logger.info("Garden created", garden_id=str(garden.id), user_id=str(garden.user_id))
        return Result.success(GardenDTO.from_domain(garden))

    async def rename_garden(self, command: RenameGardenCommand) -> Result[GardenDTO]:
        return await self._garden_command(
            "rename_garden", command,
            lambda garden, now: garden.rename(command.name, now),
        )

    async def change_surface_area(self, command: ChangeGardenSurfaceAreaCommand) -> Result[GardenDTO]:
        return await self._garden_command(
            "change_surface_area", command,
            lambda garden, now: garden.change_surface_area(command.total_surface_area, now),
        )

    async def change_target_humidity(self, command: ChangeTargetHumidityCommand) -> Result[GardenDTO]:
        return await self._garden_command(
            "change_target_humidity", command,
            lambda garden, now: garden.change_target_humidity(command.target_humidity_level, now),
        )

    async def update_garden(self, command: UpdateGardenCommand) -> Result[GardenDTO]:
        """Apply a full set of garden details; the first rejected field stops the update."""
        def update(garden: Garden, now: datetime) -> Result[None]:
            for result_of in (
                lambda: garden.rename(command.name, now),
                lambda: garden.change_surface_area(command.total_surface_area, now),
                lambda: garden.change_target_humidity(command.target_humidity_level, now),
            ):
                result = result_of()
                if result.is_failure:
                    return result
            return Result.success()

        return await self._garden_command("update_garden", command, update)

    async def delete_garden(self, command: DeleteGardenCommand) -> Result[None]:
        result = await self._execute(
            "delete_garden", command,
            lambda garden, now: garden.mark_deleted(now),
            delete=True,
        )
        if result.is_failure:
            return result
        return Result.success()

    # ------------------------------------------------------------------
    # Plant commands
    # ------------------------------------------------------------------

    async def add_plant(self, command: AddPlantCommand) -> Result[PlantDTO]:
        result = await self._execute(
            "add_plant", command,
            lambda garden, now: garden.add_plant(
                command.name,
                command.species,
                command.type,
                command.plantation_date,
                command.surface_area_required,
                command.ideal_humidity_level,
                now,
            ),
        )
        if result.is_failure:
            return result
        garden, plant = result.value
        return Result.success(PlantDTO.from_domain(garden, plant))

    async def rename_plant(self, command: RenamePlantCommand) -> Result[PlantDTO]:
        return await self._plant_command(
            "rename_plant", command,
            lambda garden, now: garden.rename_plant(command.plant_id, command.name, now),
        )

    async def reclassify_plant(self, command: ReclassifyPlantCommand) -> Result[PlantDTO]:
        return await self._plant_command(
            "reclassify_plant", command,
            lambda garden, now: garden.reclassify_plant(
                command.plant_id, command.species, command.type, now),
        )

    async def define_surface_area_requirement(
            self, command: DefineSurfaceAreaRequirementCommand) -> Result[PlantDTO]:
        return await self._plant_command(
            "define_surface_area_requirement", command,
            lambda garden, now: garden.define_surface_area_requirement(
                command.plant_id, command.surface_area_required, now),
        )

    async def adjust_ideal_humidity(self, command: AdjustIdealHumidityCommand) -> Result[PlantDTO]:
        return await self._plant_command(
            "adjust_ideal_humidity", command,
            lambda garden, now: garden.adjust_ideal_humidity(
                command.plant_id, command.ideal_humidity_level, now),
        )

    async def set_plantation_date(self, command: SetPlantationDateCommand) -> Result[PlantDTO]:
        return await self._plant_command(
            "set_plantation_date", command,
            lambda garden, now: garden.set_plantation_date(
                command.plant_id, command.plantation_date, now),
        )

    async def update_plant(self, command: UpdatePlantCommand) -> Result[PlantDTO]:
        """
        Apply a full set of plant details.

        The type is checked before anything is touched. Fields are then applied
        in order (name, classification, surface area, humidity, plantation
        date) and the first rejected field stops the update.
        """
        if parse_plant_type(command.type) is None:
            result = Result.failure(
                ErrorCodes.PLANT_VALIDATION_FAILED,
                "One or more validation errors occurred while updating a plant in a garden.",
                {"type": [TYPE_INVALID]},
            )
            self._log_rejected("update_plant", result)
            return result

        def update(garden: Garden, now: datetime) -> Result[None]:
            plant = garden.find_plant(command.plant_id)
            steps = []
            if command.name is not None:
                steps.append(lambda: garden.rename_plant(plant.id, command.name, now))
            steps.extend([
                lambda: garden.reclassify_plant(
                    plant.id,
                    command.species if command.species is not None else plant.species,
                    command.type,
                    now,
                ),
                lambda: garden.define_surface_area_requirement(
                    plant.id, command.surface_area_required, now),
                lambda: garden.adjust_ideal_humidity(plant.id, command.ideal_humidity_level, now),
                lambda: garden.set_plantation_date(plant.id, command.plantation_date, now),
            ])
            for step in steps:
                result = step()
                if result.is_failure:
                    return result
            return Result.success()

        return await self._plant_command("update_plant", command, update)

    async def remove_plant(self, command: RemovePlantCommand) -> Result[None]:
        result = await self._execute(
            "remove_plant", command,
            lambda garden, now: garden.remove_plant(command.plant_id, now),
        )
        if result.is_failure:
            return result
        return Result.success()

    # ------------------------------------------------------------------

    async def _garden_command(self, action: str, command: GardenCommand,
                              operation: Operation) -> Result[GardenDTO]:
        result = await self._execute(action, command, operation)
        if result.is_failure:
            return result
        return Result.success(GardenDTO.from_domain(result.value.garden))

    async def _plant_command(self, action: str, command: PlantCommand,
                             operation: Operation) -> Result[PlantDTO]:
        result = await self._execute(action, command, operation)
        if result.is_failure:
            return result
        garden = result.value.garden
        return Result.success(PlantDTO.from_domain(garden, garden.find_plant(command.plant_id)))

    async def _execute(self, action: str, command: GardenCommand, operation: Operation,
                       delete: bool = False) -> Result[_Outcome]:
        now = self._clock()
        with self._unit_of_work_factory() as uow:
            garden = uow.gardens.get_by_id_with_plants(GardenId.from_value(command.garden_id))
            if garden is None:
                return self._garden_not_found(command.garden_id)

            if isinstance(command, PlantCommand) and garden.find_plant(command.plant_id) is None:
                return self._plant_not_found(command.plant_id)

            result = operation(garden, now)
            if result.is_failure:
                uow.rollback()
                self._log_rejected(action, result, garden_id=str(garden.id))
                return result

            if not garden.pending_events:
                uow.rollback()
                self._logger.debug("Garden unchanged", action=action, garden_id=str(garden.id))
                return Result.success(_Outcome(garden, result.value))

            if delete:
                uow.gardens.remove(garden)
            else:
                uow.gardens.save(garden)
            conflict = self._commit(uow, garden)

        if conflict is not None:
            return conflict

        await self._publish(garden, command)
        self._logger.info("Garden updated", action=action, garden_id=str(garden.id))
        return Result.success(_Outcome(garden, result.value))

    def _commit(self, uow: GardenUnitOfWork, garden: Garden) -> Optional[Result[Any]]:
        try:
            uow.commit()
        except ConcurrencyError as e:
            self._logger.warning("Concurrent modification detected",
                                 garden_id=str(garden.id), error=e.message)
            return Result.failure(
                ErrorCodes.GARDEN_CONCURRENCY_CONFLICT,
                "The garden was modified by another request. Reload it and try again.",
            )
        return None

    async def _publish(self, garden: Garden, command: BaseCommand) -> None:
        context = MessageContext(
            correlation_id=command.correlation_id,
            causation_id=command.command_id,
        )
        await self._publisher.publish(garden.pending_events, context)

    def _log_rejected(self, action: str, result: Result[Any], **fields: Any) -> None:
        self._logger.info("Garden command rejected", action=action,
                          error_code=result.error.code,
                          fields=sorted(result.error.validation_errors), **fields)

    @staticmethod
    def _garden_not_found(garden_id: Any) -> Result[Any]:
        return Result.failure(ErrorCodes.GARDEN_NOT_FOUND, f"Garden {garden_id} was not found.")

    @staticmethod
    def _plant_not_found(plant_id: Any) -> Result[Any]:
        return Result.failure(ErrorCodes.PLANT_NOT_FOUND, f"Plant {plant_id} was not found.")
