"""Garden bounded context - garden aggregate and its plants."""

from .aggregate import Garden
from .events import (
    GardenCreatedEvent,
    GardenDeletedEvent,
    GardenDomainEvent,
    GardenEvent,
    GardenRenamedEvent,
    GardenSurfaceAreaChangedEvent,
    GardenTargetHumidityChangedEvent,
    PlantAddedToGardenEvent,
    PlantDomainEvent,
    PlantIdealHumidityLevelChangedEvent,
    PlantPlantationDateChangedEvent,
    PlantReclassifiedEvent,
    PlantRemovedFromGardenEvent,
    PlantRenamedEvent,
    PlantSurfaceAreaRequirementChangedEvent,
)
from .exceptions import ErrorCodes, GardenNotFoundError
from .plant import Plant
from .repository import GardenRepository, GardenUnitOfWork
from .value_objects import (
    GardenId,
    HumidityLevel,
    PlantId,
    PlantType,
    SurfaceArea,
    UserId,
)

__all__ = [
    # Aggregate
    "Garden",
    "Plant",
    "GardenRepository",
    "GardenUnitOfWork",
    # Value objects
    "GardenId",
    "PlantId",
    "UserId",
    "SurfaceArea",
    "HumidityLevel",
    "PlantType",
    # Errors
    "ErrorCodes",
    "GardenNotFoundError",
    # Events
    "GardenEvent",
    "GardenDomainEvent",
    "PlantDomainEvent",
    "GardenCreatedEvent",
    "GardenRenamedEvent",
    "GardenSurfaceAreaChangedEvent",
    "GardenTargetHumidityChangedEvent",
    "GardenDeletedEvent",
    "PlantAddedToGardenEvent",
    "PlantRemovedFromGardenEvent",
    "PlantRenamedEvent",
    "PlantReclassifiedEvent",
    "PlantSurfaceAreaRequirementChangedEvent",
    "PlantIdealHumidityLevelChangedEvent",
    "PlantPlantationDateChangedEvent",
]
