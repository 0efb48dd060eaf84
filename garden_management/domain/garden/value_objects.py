"""Garden value objects - identifiers and bounded quantities."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from garden_management.domain.base.exceptions import ValidationError

MIN_HUMIDITY_LEVEL = 0
MAX_HUMIDITY_LEVEL = 100


def to_decimal(value: Any) -> Decimal:
    """Convert a numeric input to ``Decimal`` without binary float artefacts."""
    if isinstance(value, bool):
        raise ValidationError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError(f"Expected a number, got {value!r}") from None
    if not result.is_finite():
        raise ValidationError(f"Expected a finite number, got {value!r}")
    return result


def is_positive_number(value: Any) -> bool:
    """True when ``value`` is a finite number greater than zero."""
    try:
        return to_decimal(value) > 0
    except ValidationError:
        return False


def is_before(moment: Any, now: datetime) -> bool:
    """True when ``moment`` is a datetime strictly earlier than ``now``.

    Naive and aware datetimes cannot be ordered; such pairs are not before.
    """
    if not isinstance(moment, datetime):
        return False
    try:
        return moment < now
    except TypeError:
        return False


def is_valid_humidity(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_HUMIDITY_LEVEL <= value <= MAX_HUMIDITY_LEVEL
    )


def _to_uuid(value: Any, kind: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {kind}: {value!r}") from None


@dataclass(frozen=True)
class GardenId:
    """Garden identifier."""
    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValidationError("Garden ID must be a UUID")

    @classmethod
    def new(cls) -> GardenId:
        return cls(uuid4())

    @classmethod
    def from_value(cls, value: Any) -> GardenId:
        if isinstance(value, cls):
            return value
        return cls(_to_uuid(value, "garden ID"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PlantId:
    """Plant identifier, unique within its garden."""
    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValidationError("Plant ID must be a UUID")

    @classmethod
    def new(cls) -> PlantId:
        return cls(uuid4())

    @classmethod
    def from_value(cls, value: Any) -> PlantId:
        if isinstance(value, cls):
            return value
        return cls(_to_uuid(value, "plant ID"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Opaque reference to the garden's owner."""
    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValidationError("User ID must be a UUID")

    @classmethod
    def from_value(cls, value: Any) -> UserId:
        if isinstance(value, cls):
            return value
        return cls(_to_uuid(value, "user ID"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SurfaceArea:
    """Strictly positive surface area."""
    value: Decimal

    def __post_init__(self):
        amount = to_decimal(self.value)
        if amount <= 0:
            raise ValidationError(f"Surface area must be positive: {self.value}")
        object.__setattr__(self, "value", amount)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class HumidityLevel:
    """Relative humidity percentage in [0, 100]."""
    value: int

    def __post_init__(self):
        if not is_valid_humidity(self.value):
            raise ValidationError(
                f"Humidity level must be between {MIN_HUMIDITY_LEVEL} and "
                f"{MAX_HUMIDITY_LEVEL}: {self.value!r}"
            )

    def __str__(self) -> str:
        return f"{self.value}%"


class PlantType(str, Enum):
    """Plant classification."""
    VEGETABLE = "Vegetable"
    FRUIT = "Fruit"
    FLOWER = "Flower"

    @classmethod
    def _missing_(cls, value: object):
        # Case-insensitive lookup by value or member name
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if lowered in (member.value.lower(), member.name.lower()):
                    return member
        return None
