"""Persistence infrastructure - garden storage and the unit of work."""

from .exceptions import ConcurrencyError, PersistenceError
from .memory import (
    InMemoryGardenRepository,
    InMemoryGardenStore,
    InMemoryUnitOfWork,
    TransactionState,
)

__all__ = [
    "ConcurrencyError",
    "PersistenceError",
    "InMemoryGardenRepository",
    "InMemoryGardenStore",
    "InMemoryUnitOfWork",
    "TransactionState",
]
