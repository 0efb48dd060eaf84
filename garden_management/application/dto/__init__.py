"""Application DTOs."""

from .base import BaseCommand, BaseDTO

__all__ = ["BaseDTO", "BaseCommand"]
