"""Persistence exceptions."""
from garden_management.infrastructure.exceptions import InfrastructureError


class PersistenceError(InfrastructureError):
    """Raised when the store cannot honour a persistence request."""


class ConcurrencyError(PersistenceError):
    """Raised when a commit would overwrite a change made by another unit of work."""
