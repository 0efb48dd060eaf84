"""Garden domain error codes and exceptions."""
from garden_management.domain.base.exceptions import EntityNotFoundError


class ErrorCodes:
    """Stable error codes carried by failed results."""
    GARDEN_VALIDATION_FAILED = "Garden.ValidationFailed"
    PLANT_VALIDATION_FAILED = "Plant.ValidationFailed"
    GARDEN_NOT_FOUND = "Garden.NotFound"
    GARDEN_CONCURRENCY_CONFLICT = "Garden.ConcurrencyConflict"
    PLANT_NOT_FOUND = "Plant.NotFound"


class GardenNotFoundError(EntityNotFoundError):
    """Raised when a garden is not found."""

    def __init__(self, garden_id: str):
        super().__init__("Garden", garden_id)
