"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        # Validate assignment
        validate_assignment=True,
        extra="forbid",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs. Non-finite numbers are rejected."""

    model_config = ConfigDict(allow_inf_nan=False)


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    model_config = ConfigDict(extra="ignore")


class NotesMixin(BaseModel):
    """Mixin for notes field."""

    notes: Optional[str] = Field(default=None, max_length=2000, description="Notes")
