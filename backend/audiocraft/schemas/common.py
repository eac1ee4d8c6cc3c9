"""
AudioCraft Backend: Shared Schemas
==================================

What:  The camelCase base model used by every API schema, plus the error and
       health response shapes.
How:   `CamelModel` generates camelCase aliases (free_tracks_left →
       freeTracksLeft). FastAPI serializes response models by alias, and
       `populate_by_name` lets Python code build them with snake_case names.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "credits_exhausted",
            "message": "No credits remaining",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(default="OK", description="Always 'OK' while the process serves requests")
    timestamp: datetime = Field(description="Server time (UTC)")
    environment: str = Field(description="Runtime environment label")
