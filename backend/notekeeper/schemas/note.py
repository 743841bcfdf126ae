"""
NoteKeeper Backend — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the API contract with the editor front end.
Why:   Serialization and OpenAPI documentation are generated from these.
How:   Request models are deliberately permissive (every field optional):
       business rules such as "title is required" live in
       notekeeper.validation so they produce the API's own 400 errors
       rather than FastAPI's generic 422.

JSON field names follow the front end's camelCase (createdAt, updatedAt);
Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /notes."""
    title: Optional[str] = Field(default=None, description="Note title; trimmed, must not be blank")
    content: Optional[str] = Field(
        default=None,
        description="Text or HTML body; stored as an empty string when omitted",
    )


class NoteUpdate(BaseModel):
    """
    Body of PUT /notes/{id}.

    At least one field must be supplied. A blank title is ignored; an empty
    content string clears the body.
    """
    title: Optional[str] = Field(default=None, description="New title (ignored when blank)")
    content: Optional[str] = Field(default=None, description="New body, may be empty")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note, as returned by every notes endpoint."""
    id: str = Field(description="Unique note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Text or HTML body")
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
        description="When the note was created (UTC ISO 8601)",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
        description="When the note was last changed (UTC ISO 8601)",
    )

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Title is required",
            "details": {"field": "title"},
            "request_id": "1f0c9a2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
