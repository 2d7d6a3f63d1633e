"""
Restaurants API — Shared Schema Pieces
=======================================

What:  The camelCase base model used by every API schema, plus the error and
       health response shapes shared across routes.

Wire format:
    Fields are snake_case in Python and camelCase in JSON (`category_id` ↔
    `categoryId`). Request bodies accept both spellings; responses are
    serialized by alias, which is FastAPI's default.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API schemas: camelCase aliases, construction from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response raised by the app.

    Example:
        {
            "error": "validation_error",
            "message": "Invalid categoryId. Category not found.",
            "details": {"field": "categoryId"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
