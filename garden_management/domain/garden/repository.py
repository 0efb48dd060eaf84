"""Garden repository interface - contract for garden data access."""
from abc import abstractmethod
from typing import List, Optional

from garden_management.domain.base.domain_interfaces import AggregateRepository, UnitOfWork

from .aggregate import Garden
from .value_objects import GardenId, UserId


class GardenRepository(AggregateRepository[Garden]):
    """Repository interface for garden aggregates.

    Soft-deleted gardens are excluded from reads unless explicitly requested.
    """

    @abstractmethod
    def get_by_id(self, garden_id: GardenId, include_deleted: bool = False) -> Optional[Garden]:
        """Load a garden without its plants."""

    @abstractmethod
    def get_by_id_with_plants(self, garden_id: GardenId,
                              include_deleted: bool = False) -> Optional[Garden]:
        """Load a garden together with its plants."""

    @abstractmethod
    def list_by_user(self, user_id: UserId) -> List[Garden]:
        """List a user's gardens ordered by name, without plants."""

    @abstractmethod
    def remove(self, garden: Garden) -> None:
        """Record the garden's deletion marker without discarding its history."""


class GardenUnitOfWork(UnitOfWork):
    """Unit of work exposing the garden repository it stages writes through."""

    gardens: GardenRepository
