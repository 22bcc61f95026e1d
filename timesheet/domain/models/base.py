"""
Base entity and exceptions for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime
from typing import Optional, Any
from abc import ABC
from dataclasses import dataclass, field
import uuid


@dataclass(eq=False)
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Entities are identified by their UUID, not by their values.
    """

    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        return hash((self.__class__.__name__, self.id))

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class ParseError(DomainException):
    """Exception raised when a window selector or token from the outside is malformed."""

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message, "PARSE_ERROR")
        self.parameter = parameter


class InvalidWindow(DomainException):
    """Exception raised when a time window is built in violation of its invariants."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_WINDOW")


class InvalidInterval(DomainException):
    """Exception raised when a duration is requested for an interval ending before it starts."""

    def __init__(self, start: datetime, end: datetime):
        super().__init__(
            f"Interval end {end.isoformat()} lies before its start {start.isoformat()}",
            "INVALID_INTERVAL"
        )
        self.start = start
        self.end = end


class StoreError(DomainException):
    """Exception raised when the activity or project store cannot answer a query."""

    def __init__(self, message: str = "Store unavailable"):
        super().__init__(message, "STORE_ERROR")
