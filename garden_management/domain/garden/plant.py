"""Plant entity - owned exclusively by its garden."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from garden_management.domain.base.entity import Entity
from garden_management.domain.base.result import Result

from .exceptions import ErrorCodes
from .value_objects import (
    HumidityLevel,
    PlantId,
    PlantType,
    SurfaceArea,
    is_before,
    is_positive_number,
    is_valid_humidity,
)

NAME_REQUIRED = "Name is required."
SPECIES_REQUIRED = "Species is required."
TYPE_INVALID = "Type must be one of: " + ", ".join(t.value for t in PlantType) + "."
SURFACE_AREA_REQUIRED_POSITIVE = "Surface area required must be greater than zero."
IDEAL_HUMIDITY_OUT_OF_RANGE = "Ideal humidity level must be between 0 and 100."
PLANTATION_DATE_NOT_IN_PAST = "Plantation date must be in the past."


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def parse_plant_type(value: Any) -> Optional[PlantType]:
    try:
        return PlantType(value)
    except ValueError:
        return None


class Plant(Entity):
    """A plant growing in a garden.

    Plants are created by ``Garden.add_plant`` and changed only through the
    garden's plant operations, which keep the garden's invariants intact.
    """

    id: PlantId
    name: str
    species: str
    plant_type: PlantType
    plantation_date: datetime
    surface_area_required: SurfaceArea
    ideal_humidity_level: HumidityLevel

    @classmethod
    def create(cls,
               name: str,
               species: str,
               plant_type: Any,
               plantation_date: datetime,
               surface_area_required: Any,
               ideal_humidity_level: Any,
               now: datetime) -> Result[Plant]:
        """Validate every field and build a new plant with a fresh identifier.

        All violations are reported together. Capacity is not checked here;
        that is the garden's concern.
        """
        errors: Dict[str, List[str]] = {}

        if is_blank(name):
            errors["name"] = [NAME_REQUIRED]

        if is_blank(species):
            errors["species"] = [SPECIES_REQUIRED]

        parsed_type = parse_plant_type(plant_type)
        if parsed_type is None:
            errors["type"] = [TYPE_INVALID]

        if not is_before(plantation_date, now):
            errors["plantationDate"] = [PLANTATION_DATE_NOT_IN_PAST]

        if not is_positive_number(surface_area_required):
            errors["surfaceAreaRequired"] = [SURFACE_AREA_REQUIRED_POSITIVE]

        if not is_valid_humidity(ideal_humidity_level):
            errors["idealHumidityLevel"] = [IDEAL_HUMIDITY_OUT_OF_RANGE]

        if errors:
            return Result.failure(
                ErrorCodes.PLANT_VALIDATION_FAILED,
                "One or more validation errors occurred while creating a plant.",
                errors,
            )

        return Result.success(cls(
            id=PlantId.new(),
            name=name.strip(),
            species=species.strip(),
            plant_type=parsed_type,
            plantation_date=plantation_date,
            surface_area_required=SurfaceArea(surface_area_required),
            ideal_humidity_level=HumidityLevel(ideal_humidity_level),
        ))

    def __str__(self) -> str:
        return f"Plant(id={self.id}, name={self.name}, type={self.plant_type.value})"
