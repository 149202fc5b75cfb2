"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Separated from endpoints to keep concerns separated and enable reuse.

Design Principles:
- Fields are snake_case in Python and camelCase on the wire
- The URL is kept as a plain string so it is stored exactly as sent;
  format and length checks happen in the service layer
- Response models are built directly from the registry's snapshot views
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase field names in JSON."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ShortenRequest(CamelModel):
    """Request model for URL shortening endpoint."""
    url: str = Field(..., description="The long URL to shorten")
    short_code: Optional[str] = Field(
        default=None,
        description="Optional custom short code"
    )


class ShortenResponse(CamelModel):
    """Response model for URL shortening endpoint."""
    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The short code")
    original_url: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="When the short URL was created")


class StatsResponse(CamelModel):
    """Response model for statistics endpoints."""
    short_code: str
    original_url: str
    created_at: datetime
    visit_count: int
    expiry_time: datetime


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""
    error: str
