"""Domain interfaces - contracts the persistence collaborator must honour."""
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from .entity import AggregateRoot

T = TypeVar("T", bound=AggregateRoot)


class AggregateRepository(ABC, Generic[T]):
    """Base repository contract for aggregate roots."""

    @abstractmethod
    def get_by_id(self, aggregate_id: Any) -> Optional[T]:
        """Load an aggregate by its identifier, or ``None`` if it does not exist."""

    @abstractmethod
    def add(self, aggregate: T) -> None:
        """Stage a new aggregate for insertion."""

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """Stage the current state of a loaded aggregate."""


class UnitOfWork(ABC):
    """Atomic commit boundary for one logical request.

    Usable as a context manager; leaving the block with an exception rolls
    back whatever was staged.
    """

    @abstractmethod
    def commit(self) -> None:
        """Durably apply every staged change, or none of them."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every staged change."""

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            self.rollback()
