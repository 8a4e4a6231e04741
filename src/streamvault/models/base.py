"""
Base models for API responses.
"""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        validate_assignment=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class UUIDMixin(BaseSchema):
    """Mixin for models with UUID primary key."""
    id: UUID = Field(description="Unique identifier")


class TimestampMixin(BaseSchema):
    """Mixin for models with timestamps."""
    created_at: datetime = Field(alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(alias="updatedAt", description="Last update timestamp")
