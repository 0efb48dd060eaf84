"""Garden and plant commands.

Commands only coerce wire types. Business rules such as humidity bounds or
capacity are left to the garden aggregate so every rule lives in one place.
"""
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import AwareDatetime

from garden_management.application.dto.base import BaseCommand


class CreateGardenCommand(BaseCommand):
    """Command to create a garden for a user."""

    user_id: UUID
    name: str
    total_surface_area: Decimal
    target_humidity_level: int


class GardenCommand(BaseCommand):
    """Base class for commands addressed to an existing garden."""

    garden_id: UUID


class RenameGardenCommand(GardenCommand):
    name: str


class ChangeGardenSurfaceAreaCommand(GardenCommand):
    total_surface_area: Decimal


class ChangeTargetHumidityCommand(GardenCommand):
    target_humidity_level: int


class UpdateGardenCommand(GardenCommand):
    """Replace a garden's details; only the fields that differ are applied."""

    name: str
    total_surface_area: Decimal
    target_humidity_level: int


class DeleteGardenCommand(GardenCommand):
    pass


class AddPlantCommand(GardenCommand):
    """Command to plant something in a garden."""

    name: str
    species: str
    type: str
    plantation_date: AwareDatetime
    surface_area_required: Decimal
    ideal_humidity_level: int


class PlantCommand(GardenCommand):
    """Base class for commands addressed to a plant of a garden."""

    plant_id: UUID


class RenamePlantCommand(PlantCommand):
    name: str


class ReclassifyPlantCommand(PlantCommand):
    species: str
    type: str


class DefineSurfaceAreaRequirementCommand(PlantCommand):
    surface_area_required: Decimal


class AdjustIdealHumidityCommand(PlantCommand):
    ideal_humidity_level: int


class SetPlantationDateCommand(PlantCommand):
    plantation_date: AwareDatetime


class UpdatePlantCommand(PlantCommand):
    """Replace a plant's details; only the fields that differ are applied.

    A ``None`` name or species keeps the current value.
    """

    name: Optional[str] = None
    species: Optional[str] = None
    type: str
    plantation_date: AwareDatetime
    surface_area_required: Decimal
    ideal_humidity_level: int


class RemovePlantCommand(PlantCommand):
    pass
