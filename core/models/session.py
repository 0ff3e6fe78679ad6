# =============================================================================
# core/models/session.py - Session Note Schema
# =============================================================================
# A session is a dated note about an artist with thematic tags.
# An artist can have several; the admin edits the first one.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Session(BaseModel):
    """
    Schema for a `sessions` row.

    Example:
        {
            "id": "770e8400-e29b-41d4-a716-446655440002",
            "artist_id": "550e8400-e29b-41d4-a716-446655440000",
            "summary": "Talked through the EP artwork",
            "date": "2024-01-15T10:30:00Z",
            "themes": ["artwork", "ocean"]
        }
    """

    # None for a session that hasn't been stored yet
    id: UUID | None = Field(
        default=None,
        description="Unique session identifier"
    )

    artist_id: UUID = Field(
        ...,
        description="Artist this session belongs to"
    )

    summary: str = Field(
        default="",
        description="Session notes"
    )

    date: datetime = Field(
        ...,
        description="When the session took place"
    )

    themes: list[str] = Field(
        default_factory=list,
        description="Thematic tags used for correlation"
    )
