"""Base domain entities - foundation for all domain objects."""
from abc import ABC, abstractmethod
from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, PrivateAttr


class Entity(BaseModel, ABC):
    """Base class for all domain entities."""
    model_config = ConfigDict(
        frozen=False,  # Entities are mutable
        validate_assignment=True,
        arbitrary_types_allowed=True
    )

    id: Any

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        return hash((self.__class__, self.id))


class AggregateRoot(Entity):
    """Base class for aggregate roots.

    Holds the buffer of domain events raised by the current unit of work.
    The buffer is append-only from inside the aggregate and is emptied by
    whoever publishes the events.
    """

    _domain_events: List[Any] = PrivateAttr(default_factory=list)

    def raise_domain_event(self, event: Any) -> None:
        """Append a domain event to the pending buffer."""
        self._domain_events.append(event)

    @property
    def pending_events(self) -> Tuple[Any, ...]:
        """Read-only view of the events raised since the last clear."""
        return tuple(self._domain_events)

    def clear_pending_events(self) -> None:
        """Clear all pending domain events."""
        self._domain_events.clear()

    @abstractmethod
    def get_id(self) -> Any:
        """Get the aggregate root identifier."""
