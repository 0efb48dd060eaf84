"""Infrastructure exceptions - failures of collaborators outside the domain."""
from typing import Any, Dict, Optional


class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigurationError(InfrastructureError):
    """Raised when configuration cannot be loaded or is invalid."""


class MessageTransportError(InfrastructureError):
    """Raised when a message cannot be handed off to the transport."""
