"""Base domain event - immutable record of an accepted state transition."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar
from uuid import uuid4


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for all domain events."""
    event_type: ClassVar[str] = "DomainEvent"

    occurred_at: datetime
    event_id: str = field(default_factory=lambda: str(uuid4()))
