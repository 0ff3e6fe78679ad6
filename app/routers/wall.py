# =============================================================================
# app/routers/wall.py - Public Artist Wall
# =============================================================================
# The public gallery: every artist as a card, and a full profile per artist
# with MAS framework, session notes and a grouped media gallery.
# =============================================================================

import asyncio
import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path
from pydantic import BaseModel, Field

from core.models import (
    Artist,
    ArtistCard,
    MASFramework,
    MediaGallery,
    Session,
)
from core.services.artist_service import ArtistService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class WallResponse(BaseModel):
    """All artists shown on the wall."""
    artists: list[ArtistCard]
    total: int = Field(..., json_schema_extra={"example": 12})


class ProfileResponse(BaseModel):
    """Everything the profile view renders for one artist."""
    artist: Artist
    framework: MASFramework | None = None
    sessions: list[Session] = Field(default_factory=list)
    gallery: MediaGallery


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=WallResponse)
async def list_wall():
    """
    List every artist for the public wall.
    """
    artists = await asyncio.to_thread(ArtistService.all_artists)
    return WallResponse(
        artists=[ArtistCard.from_artist(a) for a in artists],
        total=len(artists),
    )


@router.get("/{artist_id}", response_model=ProfileResponse)
async def get_profile(
    artist_id: Annotated[UUID, Path(description="Artist UUID")],
):
    """
    Get an artist's full profile.

    The framework, sessions and media are fetched concurrently.
    Returns 404 if the artist doesn't exist.
    """
    details = await ArtistService.get_artist_details(str(artist_id))

    return ProfileResponse(
        artist=details.artist,
        framework=details.framework,
        sessions=details.sessions,
        gallery=details.gallery(),
    )
