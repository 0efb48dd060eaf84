"""Translation of garden domain events into integration messages.

Fields are read from the garden and plant the event refers to at translation
time, so a message reflects the aggregate after every mutation of the call.
"""
from dataclasses import dataclass
from typing import Any, Optional

from garden_management.domain.garden.aggregate import Garden
from garden_management.domain.garden.events import (
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
from garden_management.domain.garden.plant import Plant

from . import contracts


@dataclass(frozen=True)
class MessageContext:
    """Request-scoped identifiers copied onto every message of one publish call."""
    correlation_id: Optional[str] = None
    causation_id: Optional[str] = None


def translate_event(event: Any,
                    context: Optional[MessageContext] = None) -> Optional[contracts.IntegrationMessage]:
    """Map a domain event to its integration message.

    Returns ``None`` for event kinds without a mapping so newer event types
    can be raised before any consumer knows about them.
    """
    context = context or MessageContext()

    match event:
        case GardenCreatedEvent(garden=garden):
            return contracts.GardenCreated(
                **_garden_fields(garden, event, context),
                name=garden.name,
                total_surface_area=garden.total_surface_area.value,
                target_humidity_level=garden.target_humidity_level.value,
            )
        case GardenRenamedEvent(garden=garden):
            return contracts.GardenRenamed(
                **_garden_fields(garden, event, context),
                name=garden.name,
            )
        case GardenSurfaceAreaChangedEvent(garden=garden):
            return contracts.GardenSurfaceAreaChanged(
                **_garden_fields(garden, event, context),
                total_surface_area=garden.total_surface_area.value,
            )
        case GardenTargetHumidityChangedEvent(garden=garden):
            return contracts.GardenTargetHumidityChanged(
                **_garden_fields(garden, event, context),
                target_humidity_level=garden.target_humidity_level.value,
            )
        case GardenDeletedEvent(garden=garden):
            return contracts.GardenDeleted(**_garden_fields(garden, event, context))
        case PlantAddedToGardenEvent(garden=garden, plant=plant):
            return contracts.PlantAddedToGarden(
                **_plant_fields(garden, plant, event, context),
                name=plant.name,
                species=plant.species,
                type=plant.plant_type.value,
                surface_area_required=plant.surface_area_required.value,
                ideal_humidity_level=plant.ideal_humidity_level.value,
                plantation_date=plant.plantation_date,
            )
        case PlantRemovedFromGardenEvent(garden=garden, plant=plant):
            return contracts.PlantRemovedFromGarden(**_plant_fields(garden, plant, event, context))
        case PlantRenamedEvent(garden=garden, plant=plant):
            return contracts.PlantRenamed(
                **_plant_fields(garden, plant, event, context),
                name=plant.name,
            )
        case PlantReclassifiedEvent(garden=garden, plant=plant):
            return contracts.PlantReclassified(
                **_plant_fields(garden, plant, event, context),
                species=plant.species,
                type=plant.plant_type.value,
            )
        case PlantSurfaceAreaRequirementChangedEvent(garden=garden, plant=plant):
            return contracts.PlantSurfaceAreaRequirementChanged(
                **_plant_fields(garden, plant, event, context),
                surface_area_required=plant.surface_area_required.value,
            )
        case PlantIdealHumidityLevelChangedEvent(garden=garden, plant=plant):
            return contracts.PlantIdealHumidityLevelChanged(
                **_plant_fields(garden, plant, event, context),
                ideal_humidity_level=plant.ideal_humidity_level.value,
            )
        case PlantPlantationDateChangedEvent(garden=garden, plant=plant):
            return contracts.PlantPlantationDateChanged(
                **_plant_fields(garden, plant, event, context),
                plantation_date=plant.plantation_date,
            )
        case _:
            return None


def _garden_fields(garden: Garden, event: Any, context: MessageContext) -> dict:
    return {
        "garden_id": garden.id.value,
        "user_id": garden.user_id.value,
        "occurred_at": event.occurred_at,
        "correlation_id": context.correlation_id,
        "causation_id": context.causation_id,
    }


def _plant_fields(garden: Garden, plant: Plant, event: Any, context: MessageContext) -> dict:
    return {
        "garden_id": garden.id.value,
        "plant_id": plant.id.value,
        "occurred_at": event.occurred_at,
        "correlation_id": context.correlation_id,
        "causation_id": context.causation_id,
    }
