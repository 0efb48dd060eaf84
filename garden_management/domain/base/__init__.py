"""Base domain layer - shared kernel for the garden bounded context."""

from .domain_interfaces import AggregateRepository, UnitOfWork
from .entity import AggregateRoot, Entity
from .events import DomainEvent
from .exceptions import (
    DomainException,
    EntityNotFoundError,
    ResultError,
    ValidationError,
)
from .result import Error, Result

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    # Events
    "DomainEvent",
    # Results
    "Result",
    "Error",
    # Repository
    "AggregateRepository",
    "UnitOfWork",
    # Exceptions
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "ResultError",
]
