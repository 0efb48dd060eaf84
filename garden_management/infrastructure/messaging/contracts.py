"""Integration message contracts published for consumers outside this service.

One message type per garden event kind. Messages are immutable; their JSON
wire form uses camelCase keys.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class IntegrationMessage(BaseModel):
    """Base class for all integration messages."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
    )

    message_type: ClassVar[str] = "IntegrationMessage"

    garden_id: UUID
    occurred_at: datetime
    correlation_id: Optional[str] = None
    causation_id: Optional[str] = None

    def to_wire(self) -> str:
        """Serialize to the JSON body handed to the transport."""
        return self.model_dump_json(by_alias=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class GardenMessage(IntegrationMessage):
    """Base class for messages about a garden itself."""
    user_id: UUID


class PlantMessage(IntegrationMessage):
    """Base class for messages about a plant in a garden."""
    plant_id: UUID


class GardenCreated(GardenMessage):
    message_type: ClassVar[str] = "GardenCreated"

    name: str
    total_surface_area: Decimal
    target_humidity_level: int


class GardenRenamed(GardenMessage):
    message_type: ClassVar[str] = "GardenRenamed"

    name: str


class GardenSurfaceAreaChanged(GardenMessage):
    message_type: ClassVar[str] = "GardenSurfaceAreaChanged"

    total_surface_area: Decimal


class GardenTargetHumidityChanged(GardenMessage):
    message_type: ClassVar[str] = "GardenTargetHumidityChanged"

    target_humidity_level: int


class GardenDeleted(GardenMessage):
    message_type: ClassVar[str] = "GardenDeleted"


class PlantAddedToGarden(PlantMessage):
    message_type: ClassVar[str] = "PlantAddedToGarden"

    name: str
    species: str
    type: str
    surface_area_required: Decimal
    ideal_humidity_level: int
    plantation_date: datetime


class PlantRemovedFromGarden(PlantMessage):
    message_type: ClassVar[str] = "PlantRemovedFromGarden"


class PlantRenamed(PlantMessage):
    message_type: ClassVar[str] = "PlantRenamed"

    name: str


class PlantReclassified(PlantMessage):
    message_type: ClassVar[str] = "PlantReclassified"

    species: str
    type: str


class PlantSurfaceAreaRequirementChanged(PlantMessage):
    message_type: ClassVar[str] = "PlantSurfaceAreaRequirementChanged"

    surface_area_required: Decimal


class PlantIdealHumidityLevelChanged(PlantMessage):
    message_type: ClassVar[str] = "PlantIdealHumidityLevelChanged"

    ideal_humidity_level: int


class PlantPlantationDateChanged(PlantMessage):
    message_type: ClassVar[str] = "PlantPlantationDateChanged"

    plantation_date: datetime
