"""Garden aggregate root - the consistency boundary for a garden and its plants."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from pydantic import Field

from garden_management.domain.base.entity import AggregateRoot
from garden_management.domain.base.result import Result

from .events import (
    GardenCreatedEvent,
    GardenDeletedEvent,
    GardenRenamedEvent,
    GardenSurfaceAreaChangedEvent,
    GardenTargetHumidityChangedEvent,
    PlantAddedToGardenEvent,
    PlantIdealHumidityLevelChangedEvent,
    PlantPlantationDateChangedEvent,
    PlantReclassifiedEvent,
    PlantRemovedFromGardenEvent,
    PlantRenamedEvent,
    PlantSurfaceAreaRequirementChangedEvent,
)
from .exceptions import ErrorCodes
from .plant import (
    IDEAL_HUMIDITY_OUT_OF_RANGE,
    NAME_REQUIRED,
    PLANTATION_DATE_NOT_IN_PAST,
    SPECIES_REQUIRED,
    SURFACE_AREA_REQUIRED_POSITIVE,
    TYPE_INVALID,
    Plant,
    is_blank,
    parse_plant_type,
)
from .value_objects import (
    GardenId,
    HumidityLevel,
    PlantId,
    SurfaceArea,
    UserId,
    is_before,
    is_positive_number,
    is_valid_humidity,
    to_decimal,
)

TOTAL_SURFACE_AREA_POSITIVE = "Total surface area must be greater than zero."
TARGET_HUMIDITY_OUT_OF_RANGE = "Target humidity level must be between 0 and 100."


class Garden(AggregateRoot):
    """Garden aggregate root.

    Every operation either returns a failed ``Result`` and leaves the garden
    untouched, or applies the change, stamps ``updated_at`` and records one
    domain event. Re-applying a value that is already in effect, or targeting
    a plant the garden does not contain, succeeds without recording anything.

    Invariant: the plants' combined ``surface_area_required`` never exceeds
    ``total_surface_area``.
    """

    id: GardenId
    user_id: UserId
    name: str
    total_surface_area: SurfaceArea
    target_humidity_level: HumidityLevel
    created_at: datetime
    updated_at: datetime
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    plants: List[Plant] = Field(default_factory=list)

    def get_id(self) -> GardenId:
        return self.id

    @classmethod
    def create(cls,
               user_id: UserId,
               name: str,
               total_surface_area: Any,
               target_humidity_level: Any,
               now: datetime) -> Result[Garden]:
        """Create a garden, reporting every invalid field at once."""
        errors: Dict[str, List[str]] = {}

        if is_blank(name):
            errors["name"] = [NAME_REQUIRED]

        if not is_positive_number(total_surface_area):
            errors["totalSurfaceArea"] = [TOTAL_SURFACE_AREA_POSITIVE]

        if not is_valid_humidity(target_humidity_level):
            errors["targetHumidityLevel"] = [TARGET_HUMIDITY_OUT_OF_RANGE]

        if errors:
            return Result.failure(
                ErrorCodes.GARDEN_VALIDATION_FAILED,
                "One or more validation errors occurred while creating a garden.",
                errors,
            )

        garden = cls(
            id=GardenId.new(),
            user_id=user_id,
            name=name.strip(),
            total_surface_area=SurfaceArea(total_surface_area),
            target_humidity_level=HumidityLevel(target_humidity_level),
            created_at=now,
            updated_at=now,
        )
        garden.raise_domain_event(GardenCreatedEvent(garden=garden, occurred_at=now))
        return Result.success(garden)

    @classmethod
    def from_persistence(cls,
                         id: GardenId,
                         user_id: UserId,
                         name: str,
                         total_surface_area: Any,
                         target_humidity_level: int,
                         created_at: datetime,
                         updated_at: datetime,
                         is_deleted: bool = False,
                         deleted_at: Optional[datetime] = None,
                         plants: Optional[Iterable[Plant]] = None) -> Garden:
        """Rehydrate a stored garden. No event is raised."""
        return cls(
            id=id,
            user_id=user_id,
            name=name,
            total_surface_area=SurfaceArea(total_surface_area),
            target_humidity_level=HumidityLevel(target_humidity_level),
            created_at=created_at,
            updated_at=updated_at,
            is_deleted=is_deleted,
            deleted_at=deleted_at,
            plants=list(plants or []),
        )

    @property
    def allocated_surface_area(self) -> Decimal:
        """Combined surface area required by all plants."""
        return sum((p.surface_area_required.value for p in self.plants), Decimal(0))

    @property
    def available_surface_area(self) -> Decimal:
        return self.total_surface_area.value - self.allocated_surface_area

    def find_plant(self, plant_id: Any) -> Optional[Plant]:
        target = PlantId.from_value(plant_id)
        for plant in self.plants:
            if plant.id == target:
                return plant
        return None

    # ------------------------------------------------------------------
    # Garden operations
    # ------------------------------------------------------------------

    def rename(self, name: str, now: datetime) -> Result[None]:
        if is_blank(name):
            return Result.failure(
                ErrorCodes.GARDEN_VALIDATION_FAILED,
                "One or more validation errors occurred while renaming a garden.",
                {"name": [NAME_REQUIRED]},
            )

        trimmed = name.strip()
        if trimmed == self.name:
            return Result.success()

        self.name = trimmed
        self.updated_at = now
        self.raise_domain_event(GardenRenamedEvent(garden=self, occurred_at=now))
        return Result.success()

    def change_surface_area(self, total_surface_area: Any, now: datetime) -> Result[None]:
        """Change the garden's total area.

        A total smaller than the area already allocated to plants is rejected
        as a capacity violation on ``totalSurfaceArea``.
        """
        if not is_positive_number(total_surface_area):
            return Result.failure(
                ErrorCodes.GARDEN_VALIDATION_FAILED,
                "One or more validation errors occurred while changing a garden's surface area.",
                {"totalSurfaceArea": [TOTAL_SURFACE_AREA_POSITIVE]},
            )

        amount = to_decimal(total_surface_area)
        if amount == self.total_surface_area.value:
            return Result.success()

        allocated = self.allocated_surface_area
        if amount < allocated:
            return Result.failure(
                ErrorCodes.GARDEN_VALIDATION_FAILED,
                "The garden's plants do not fit in the new surface area.",
                {"totalSurfaceArea": [
                    f"Total surface area cannot be smaller than the {allocated} already allocated to plants."
                ]},
            )

        self.total_surface_area = SurfaceArea(amount)
        self.updated_at = now
        self.raise_domain_event(GardenSurfaceAreaChangedEvent(garden=self, occurred_at=now))
        return Result.success()

    def change_target_humidity(self, target_humidity_level: Any, now: datetime) -> Result[None]:
        if not is_valid_humidity(target_humidity_level):
            return Result.failure(
                ErrorCodes.GARDEN_VALIDATION_FAILED,
                "One or more validation errors occurred while changing a garden's target humidity.",
                {"targetHumidityLevel": [TARGET_HUMIDITY_OUT_OF_RANGE]},
            )

        if target_humidity_level == self.target_humidity_level.value:
            return Result.success()

        self.target_humidity_level = HumidityLevel(target_humidity_level)
        self.updated_at = now
        self.raise_domain_event(GardenTargetHumidityChangedEvent(garden=self, occurred_at=now))
        return Result.success()

    def mark_deleted(self, now: datetime) -> Result[None]:
        """Soft-delete the garden. Only the first call has any effect."""
        if self.is_deleted:
            return Result.success()

        self.is_deleted = True
        self.deleted_at = now
        self.updated_at = now
        self.raise_domain_event(GardenDeletedEvent(garden=self, occurred_at=now))
        return Result.success()

    # ------------------------------------------------------------------
    # Plant operations
    # ------------------------------------------------------------------

    def add_plant(self,
                  name: str,
                  species: str,
                  plant_type: Any,
                  plantation_date: datetime,
                  surface_area_required: Any,
                  ideal_humidity_level: Any,
                  now: datetime) -> Result[Plant]:
        """Plant something new in the garden.

        Field validation failures are reported together under
        ``Plant.ValidationFailed``. Only a plant with valid fields is then
        checked against the remaining capacity; exceeding it fails with a
        single ``surfaceAreaRequired`` entry under ``Garden.ValidationFailed``.
        """
        created = Plant.create(
            name, species, plant_type, plantation_date,
            surface_area_required, ideal_humidity_level, now,
        )
        if created.is_failure:
            return created

        plant = created.value
        if plant.surface_area_required.value > self.available_surface_area:
            return self._capacity_failure(
                "The plant does not fit in the garden's remaining surface area."
            )

        self.plants.append(plant)
        self.updated_at = now
        self.raise_domain_event(PlantAddedToGardenEvent(garden=self, plant=plant, occurred_at=now))
        return Result.success(plant)

    def rename_plant(self, plant_id: Any, name: str, now: datetime) -> Result[None]:
        plant = self.find_plant(plant_id)
        if plant is None:
            return Result.success()

        if is_blank(name):
            return self._plant_failure("renaming a plant", {"name": [NAME_REQUIRED]})

        trimmed = name.strip()
        if trimmed == plant.name:
            return Result.success()

        plant.name = trimmed
        self._touch_plant(PlantRenamedEvent, plant, now)
        return Result.success()

    def reclassify_plant(self, plant_id: Any, species: str, plant_type: Any,
                         now: datetime) -> Result[None]:
        plant = self.find_plant(plant_id)
        if plant is None:
            return Result.success()

        errors: Dict[str, List[str]] = {}
        if is_blank(species):
            errors["species"] = [SPECIES_REQUIRED]
        parsed_type = parse_plant_type(plant_type)
        if parsed_type is None:
            errors["type"] = [TYPE_INVALID]
        if errors:
            return self._plant_failure("reclassifying a plant", errors)

        trimmed = species.strip()
        if trimmed == plant.species and parsed_type == plant.plant_type:
            return Result.success()

        plant.species = trimmed
        plant.plant_type = parsed_type
        self._touch_plant(PlantReclassifiedEvent, plant, now)
        return Result.success()

    def define_surface_area_requirement(self, plant_id: Any, surface_area_required: Any,
                                        now: datetime) -> Result[None]:
        plant = self.find_plant(plant_id)
        if plant is None:
            return Result.success()

        if not is_positive_number(surface_area_required):
            return self._plant_failure(
                "changing a plant's surface area requirement",
                {"surfaceAreaRequired": [SURFACE_AREA_REQUIRED_POSITIVE]},
            )

        amount = to_decimal(surface_area_required)
        current = plant.surface_area_required.value
        if amount == current:
            return Result.success()

        if self.allocated_surface_area - current + amount > self.total_surface_area.value:
            return self._capacity_failure(
                "The new surface area requirement does not fit in the garden."
            )

        plant.surface_area_required = SurfaceArea(amount)
        self._touch_plant(PlantSurfaceAreaRequirementChangedEvent, plant, now)
        return Result.success()

    def adjust_ideal_humidity(self, plant_id: Any, ideal_humidity_level: Any,
                              now: datetime) -> Result[None]:
        plant = self.find_plant(plant_id)
        if plant is None:
            return Result.success()

        if not is_valid_humidity(ideal_humidity_level):
            return self._plant_failure(
                "adjusting a plant's ideal humidity",
                {"idealHumidityLevel": [IDEAL_HUMIDITY_OUT_OF_RANGE]},
            )

        if ideal_humidity_level == plant.ideal_humidity_level.value:
            return Result.success()

        plant.ideal_humidity_level = HumidityLevel(ideal_humidity_level)
        self._touch_plant(PlantIdealHumidityLevelChangedEvent, plant, now)
        return Result.success()

    def set_plantation_date(self, plant_id: Any, plantation_date: datetime,
                            now: datetime) -> Result[None]:
        plant = self.find_plant(plant_id)
        if plant is None:
            return Result.success()

        if not is_before(plantation_date, now):
            return self._plant_failure(
                "setting a plant's plantation date",
                {"plantationDate": [PLANTATION_DATE_NOT_IN_PAST]},
            )

        if plantation_date == plant.plantation_date:
            return Result.success()

        plant.plantation_date = plantation_date
        self._touch_plant(PlantPlantationDateChangedEvent, plant, now)
        return Result.success()

    def remove_plant(self, plant_id: Any, now: datetime) -> Result[None]:
        plant = self.find_plant(plant_id)
        if plant is None:
            return Result.success()

        self.plants.remove(plant)
        self._touch_plant(PlantRemovedFromGardenEvent, plant, now)
        return Result.success()

    # ------------------------------------------------------------------

    def _touch_plant(self, event_class, plant: Plant, now: datetime) -> None:
        self.updated_at = now
        self.raise_domain_event(event_class(garden=self, plant=plant, occurred_at=now))

    @staticmethod
    def _plant_failure(action: str, errors: Dict[str, List[str]]) -> Result[None]:
        return Result.failure(
            ErrorCodes.PLANT_VALIDATION_FAILED,
            f"One or more validation errors occurred while {action}.",
            errors,
        )

    @staticmethod
    def _capacity_failure(message: str) -> Result[Any]:
        return Result.failure(
            ErrorCodes.GARDEN_VALIDATION_FAILED,
            message,
            {"surfaceAreaRequired": [
                "Surface area required exceeds the garden's available surface area."
            ]},
        )

    def __str__(self) -> str:
        return (f"Garden(id={self.id}, name={self.name}, "
                f"area={self.total_surface_area}, plants={len(self.plants)})")
