"""
Aviary Backend: Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract of the birds resource.
Why:   Strict input validation, automatic serialization, and OpenAPI doc generation.
How:   FastAPI decodes the JSON body into BirdCreate before the handler runs
       and serializes Bird entities through BirdResponse.

Design Decision:
    Schemas are separate from the SQLAlchemy model so the API contract can
    change independently of the table, and so a request body can never carry
    id or timestamp values into the database.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BirdCreate(BaseModel):
    """
    What:  Typed input record for POST /birds.

    Both fields are optional: an absent key becomes None.
    Unknown keys (including id, created_at, updated_at) are dropped.
    A non-string value fails validation; pydantic does not coerce numbers
    or booleans into str.
    Strings longer than the 255-character columns are rejected with 422.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, max_length=255, description="Common name of the bird")
    species: Optional[str] = Field(default=None, max_length=255, description="Scientific species name")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BirdResponse(BaseModel):
    """
    What:  Full representation of a persisted bird.
    Who:   Returned by POST /birds (201), GET /birds/{id} and GET /birds.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="System-assigned identifier")
    name: Optional[str] = Field(default=None, description="Common name of the bird")
    species: Optional[str] = Field(default=None, description="Scientific species name")
    created_at: datetime = Field(description="Creation timestamp (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC ISO 8601)")


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by every failing request.

    Fields:
        error:   Human-readable description, e.g. "Bird not found"
        details: Optional extra context (which fields failed, parser position)

    `details` is omitted when empty, so a not-found response is exactly
    {"error": "Bird not found"}. The request ID travels in the X-Request-ID header.
    """

    error: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
