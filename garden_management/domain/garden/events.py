"""Garden domain events.

Events hold references to the garden (and plant) they concern rather than
copies of their fields, so whoever translates them later reads the state the
aggregate has at that moment.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Union

from garden_management.domain.base.events import DomainEvent

if TYPE_CHECKING:
    from .aggregate import Garden
    from .plant import Plant


@dataclass(frozen=True, kw_only=True)
class GardenDomainEvent(DomainEvent):
    """Base class for events raised by a garden about itself."""
    event_type: ClassVar[str] = "GardenDomainEvent"

    garden: Garden


@dataclass(frozen=True, kw_only=True)
class PlantDomainEvent(GardenDomainEvent):
    """Base class for events raised by a garden about one of its plants."""
    event_type: ClassVar[str] = "PlantDomainEvent"

    plant: Plant


@dataclass(frozen=True, kw_only=True)
class GardenCreatedEvent(GardenDomainEvent):
    event_type: ClassVar[str] = "GardenCreated"


@dataclass(frozen=True, kw_only=True)
class GardenRenamedEvent(GardenDomainEvent):
    event_type: ClassVar[str] = "GardenRenamed"


@dataclass(frozen=True, kw_only=True)
class GardenSurfaceAreaChangedEvent(GardenDomainEvent):
    event_type: ClassVar[str] = "GardenSurfaceAreaChanged"


@dataclass(frozen=True, kw_only=True)
class GardenTargetHumidityChangedEvent(GardenDomainEvent):
    event_type: ClassVar[str] = "GardenTargetHumidityChanged"


@dataclass(frozen=True, kw_only=True)
class GardenDeletedEvent(GardenDomainEvent):
    event_type: ClassVar[str] = "GardenDeleted"


@dataclass(frozen=True, kw_only=True)
class PlantAddedToGardenEvent(PlantDomainEvent):
    event_type: ClassVar[str] = "PlantAddedToGarden"


@dataclass(frozen=True, kw_only=True)
class PlantRemovedFromGardenEvent(PlantDomainEvent):
    event_type: ClassVar[str] = "PlantRemovedFromGarden"


@dataclass(frozen=True, kw_only=True)
class PlantRenamedEvent(PlantDomainEvent):
    event_type: ClassVar[str] = "PlantRenamed"


@dataclass(frozen=True, kw_only=True)
class PlantReclassifiedEvent(PlantDomainEvent):
    event_type: ClassVar[str] = "PlantReclassified"


@dataclass(frozen=True, kw_only=True)
class PlantSurfaceAreaRequirementChangedEvent(PlantDomainEvent):
    event_type: ClassVar[str] = "PlantSurfaceAreaRequirementChanged"


@dataclass(frozen=True, kw_only=True)
class PlantIdealHumidityLevelChangedEvent(PlantDomainEvent):
    event_type: ClassVar[str] = "PlantIdealHumidityLevelChanged"


@dataclass(frozen=True, kw_only=True)
class PlantPlantationDateChangedEvent(PlantDomainEvent):
    event_type: ClassVar[str] = "PlantPlantationDateChanged"


# Type alias for all garden event variants
GardenEvent = Union[
    GardenCreatedEvent,
    GardenRenamedEvent,
    GardenSurfaceAreaChangedEvent,
    GardenTargetHumidityChangedEvent,
    GardenDeletedEvent,
    PlantAddedToGardenEvent,
    PlantRemovedFromGardenEvent,
    PlantRenamedEvent,
    PlantReclassifiedEvent,
    PlantSurfaceAreaRequirementChangedEvent,
    PlantIdealHumidityLevelChangedEvent,
    PlantPlantationDateChangedEvent,
]
