"""
Base entity and exceptions for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime
from typing import Optional, Any, Dict
from abc import ABC
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum


def _serialize(value: Any) -> Any:
    """Convert nested domain values into plain Python structures."""
    # datetime and date
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseEntity):
        return value.to_dict()
    if is_dataclass(value):
        return {f.name: _serialize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    return value


@dataclass
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Entities carry a business-assigned string identifier.
    """

    id: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if not self.id or not other.id:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if not self.id:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()

    @property
    def is_new(self) -> bool:
        """Check if entity has no identifier yet."""
        return not self.id

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary representation."""
        data = {}
        for key, value in self.__dict__.items():
            if not key.startswith('_'):
                data[key] = _serialize(value)
        return data


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


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DocumentCompositionError(DomainException):
    """
    Exception raised when a document cannot be composed.
    Financial documents are never emitted from partial data.
    """

    def __init__(self, message: str, job_id: Optional[str] = None):
        super().__init__(message, "DOCUMENT_COMPOSITION_FAILED")
        self.job_id = job_id
