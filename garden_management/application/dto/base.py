"""Base DTO classes with a stable snake_case API."""
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class BaseDTO(BaseModel):
    """
    Base class for all DTOs.

    Field names stay snake_case; the camelCase wire form belongs to the
    integration contracts, not here.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseDTO":
        return cls.model_validate(data)


class BaseCommand(BaseDTO):
    """Base class for command DTOs.

    ``command_id`` becomes the causation id of every integration message the
    command produces; ``correlation_id`` is passed through unchanged.
    """
    command_id: str = Field(default_factory=lambda: str(uuid4()))
    correlation_id: Optional[str] = None
