"""Base model classes for Vito MCP."""

from datetime import datetime, UTC
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class VitoBaseModel(BaseModel):
    """Base model with common configuration for all Vito MCP models."""

    model_config = ConfigDict(
        # Keep enum objects in memory, serialize values only when needed
        use_enum_values=False,
        # Allow population by field name or alias
        populate_by_name=True,
        # Validate assignment after model creation
        validate_assignment=True,
        extra="forbid",
    )


class IdentifiedModel(VitoBaseModel):
    """Base model for entities with a generated ID."""

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique identifier")
