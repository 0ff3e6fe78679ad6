# =============================================================================
# core/models/artist.py - Artist Schemas
# =============================================================================
# These models define the API contract for artist records:
# - ArtistStage: Enum of the four campaign stages
# - Artist: A row of the `artists` table
# - ArtistCard: The trimmed-down record shown on the wall
# - ArtistListPage: One page of the admin list
#
# An artist is the root record; frameworks, sessions and media all point
# at it and are removed with it by the database's ON DELETE CASCADE.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class ArtistStage(str, Enum):
    """
    Campaign stage an artist is currently in.

    Flow: ideation -> branding -> production -> launch
    """
    IDEATION = "Ideation"
    BRANDING = "Branding"
    PRODUCTION = "Production"
    LAUNCH = "Launch"


class Artist(BaseModel):
    """
    Schema for an artist row.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Nova Reyes",
            "avatar_url": "https://xxx.supabase.co/storage/v1/object/public/lab-upload/avatars/.../nova.jpg",
            "project_name": "Tidal",
            "project_description": "A debut EP about coastlines",
            "campaign_statement": "Music for the in-between",
            "current_stage": "Branding",
            "created_at": "2024-01-15T10:30:00Z",
            "updated_at": "2024-01-16T08:00:00Z"
        }
    """

    id: UUID = Field(
        ...,
        description="Unique artist identifier"
    )

    name: str = Field(
        ...,
        description="Artist name"
    )

    # Empty string when no avatar was uploaded
    avatar_url: str = Field(
        default="",
        description="Public URL of the avatar in storage"
    )

    project_name: str = Field(
        ...,
        description="Name of the artist's current project"
    )

    project_description: str = Field(
        ...,
        description="Free-text description of the project"
    )

    campaign_statement: str = Field(
        ...,
        description="Campaign statement shown on the profile"
    )

    current_stage: ArtistStage = Field(
        ...,
        description="Current campaign stage"
    )

    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the artist was created"
    )

    updated_at: datetime | None = Field(
        default=None,
        description="Timestamp of the last edit"
    )

    model_config = {"from_attributes": True}


class ArtistCard(BaseModel):
    """Summary shown for each artist on the wall."""
    id: UUID
    name: str
    project_name: str
    avatar_url: str = ""
    current_stage: ArtistStage

    @classmethod
    def from_artist(cls, artist: Artist) -> "ArtistCard":
        return cls(
            id=artist.id,
            name=artist.name,
            project_name=artist.project_name,
            avatar_url=artist.avatar_url,
            current_stage=artist.current_stage,
        )


class ArtistListPage(BaseModel):
    """
    Schema for one page of the admin artist list.

    Example:
        {
            "artists": [...],
            "total": 12,
            "filtered_total": 3,
            "page": 1,
            "page_size": 8,
            "total_pages": 1
        }
    """

    artists: list[Artist] = Field(
        default_factory=list,
        description="Artists on this page"
    )

    # Count of every artist, regardless of the search term
    total: int = Field(
        default=0,
        ge=0,
        description="Total number of artists"
    )

    filtered_total: int = Field(
        default=0,
        ge=0,
        description="Number of artists matching the search term"
    )

    page: int = Field(
        default=1,
        ge=1,
        description="Current page number (1-indexed)"
    )

    page_size: int = Field(
        default=8,
        ge=1,
        description="Number of artists per page"
    )

    total_pages: int = Field(
        default=0,
        ge=0,
        description="Number of pages for the filtered list"
    )
