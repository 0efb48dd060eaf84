"""Read models returned by the garden application service."""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from garden_management.application.dto.base import BaseDTO
from garden_management.domain.garden.aggregate import Garden
from garden_management.domain.garden.plant import Plant


class PlantDTO(BaseDTO):
    """Plant details."""

    id: UUID
    garden_id: UUID
    name: str
    species: str
    type: str
    plantation_date: datetime
    surface_area_required: Decimal
    ideal_humidity_level: int

    @classmethod
    def from_domain(cls, garden: Garden, plant: Plant) -> "PlantDTO":
        return cls(
            id=plant.id.value,
            garden_id=garden.id.value,
            name=plant.name,
            species=plant.species,
            type=plant.plant_type.value,
            plantation_date=plant.plantation_date,
            surface_area_required=plant.surface_area_required.value,
            ideal_humidity_level=plant.ideal_humidity_level.value,
        )


class GardenDTO(BaseDTO):
    """Garden details; ``plants`` is ``None`` when they were not loaded."""

    id: UUID
    user_id: UUID
    name: str
    total_surface_area: Decimal
    target_humidity_level: int
    created_at: datetime
    updated_at: datetime
    plants: Optional[List[PlantDTO]] = None

    @classmethod
    def from_domain(cls, garden: Garden, include_plants: bool = True) -> "GardenDTO":
        return cls(
            id=garden.id.value,
            user_id=garden.user_id.value,
            name=garden.name,
            total_surface_area=garden.total_surface_area.value,
            target_humidity_level=garden.target_humidity_level.value,
            created_at=garden.created_at,
            updated_at=garden.updated_at,
            plants=[PlantDTO.from_domain(garden, p) for p in garden.plants] if include_plants else None,
        )
