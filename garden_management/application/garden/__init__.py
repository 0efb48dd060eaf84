"""Garden use cases."""

from .commands import (
    AddPlantCommand,
    AdjustIdealHumidityCommand,
    ChangeGardenSurfaceAreaCommand,
    ChangeTargetHumidityCommand,
    CreateGardenCommand,
    DefineSurfaceAreaRequirementCommand,
    DeleteGardenCommand,
    ReclassifyPlantCommand,
    RemovePlantCommand,
    RenameGardenCommand,
    RenamePlantCommand,
    SetPlantationDateCommand,
    UpdateGardenCommand,
    UpdatePlantCommand,
)
from .dto import GardenDTO, PlantDTO
from .service import GardenApplicationService

__all__ = [
    "GardenApplicationService",
    "GardenDTO",
    "PlantDTO",
    "CreateGardenCommand",
    "RenameGardenCommand",
    "ChangeGardenSurfaceAreaCommand",
    "ChangeTargetHumidityCommand",
    "UpdateGardenCommand",
    "DeleteGardenCommand",
    "AddPlantCommand",
    "RenamePlantCommand",
    "ReclassifyPlantCommand",
    "DefineSurfaceAreaRequirementCommand",
    "AdjustIdealHumidityCommand",
    "SetPlantationDateCommand",
    "UpdatePlantCommand",
    "RemovePlantCommand",
]
