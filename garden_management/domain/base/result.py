"""Operation results - success or structured failure, never an exception."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, List, Mapping, Optional, TypeVar

from .exceptions import ResultError

T = TypeVar("T")

ValidationErrors = Mapping[str, List[str]]


@dataclass(frozen=True)
class Error:
    """Structured failure: stable code, human-readable message, per-field messages."""
    code: str
    message: str
    validation_errors: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "code": self.code,
            "message": self.message,
            "validation_errors": {k: list(v) for k, v in self.validation_errors.items()},
        }


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an aggregate operation.

    A successful result may carry a value; a failed one always carries an
    ``Error``.
    """
    is_success: bool
    value: Optional[T] = None
    error: Optional[Error] = None

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @classmethod
    def success(cls, value: Optional[T] = None) -> Result[T]:
        return cls(True, value, None)

    @classmethod
    def failure(cls, code: str, message: str,
                validation_errors: Optional[ValidationErrors] = None) -> Result[T]:
        errors = {key: list(messages) for key, messages in (validation_errors or {}).items()}
        return cls(False, None, Error(code, message, errors))

    def unwrap(self) -> T:
        """Return the value, raising ``ResultError`` if the result is a failure."""
        if self.is_failure:
            assert self.error is not None
            raise ResultError(self.error.message, self.error.code,
                              {"validation_errors": self.error.validation_errors})
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.is_success
