# =============================================================================
# app/routers/artists.py - Admin Artist Endpoints
# =============================================================================
# Backs the admin dashboard's two tabs:
# - "Create User": POST multipart form -> creation workflow
# - "View Users": list/search/paginate, load for editing, save edits, delete
#
# Forms are multipart because they carry an avatar and media files.
# =============================================================================

import asyncio
import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, Path, Query, UploadFile
from pydantic import BaseModel, Field

from app.dependencies import read_upload, read_uploads
from core.models import (
    ArtistDetails,
    ArtistEdit,
    ArtistForm,
    ArtistListPage,
    ArtistStage,
    CreateArtistResult,
    Notification,
    UpdateArtistResult,
)
from core.services.artist_service import ArtistService
from core.services.profile_workflow import create_artist_profile, update_artist_profile

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class DeleteArtistResponse(BaseModel):
    """Response when deleting an artist."""
    artist_id: str = Field(..., json_schema_extra={"example": "550e8400-e29b-41d4-a716-446655440000"})
    files_removed: int = Field(..., json_schema_extra={"example": 3})
    notifications: list[Notification] = Field(default_factory=list)


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", response_model=CreateArtistResult, status_code=201)
async def create_artist(
    name: Annotated[str, Form()],
    project_name: Annotated[str, Form()],
    project_description: Annotated[str, Form()],
    campaign_statement: Annotated[str, Form()],
    current_stage: Annotated[ArtistStage, Form()] = ArtistStage.IDEATION,
    values: Annotated[str, Form()] = "",
    goals: Annotated[str, Form()] = "",
    brand: Annotated[str, Form()] = "",
    session_summary: Annotated[str, Form()] = "",
    themes: Annotated[str, Form()] = "",
    avatar: Annotated[UploadFile | None, File(description="Avatar image")] = None,
    media: Annotated[list[UploadFile] | None, File(description="Media files")] = None,
):
    """
    Create an artist profile.

    Runs avatar upload, artist insert, framework insert, session insert and
    then uploads each media file. A failing media file is reported in
    `notifications` and skipped; any earlier failure aborts with an error.
    """
    form = ArtistForm(
        name=name,
        project_name=project_name,
        project_description=project_description,
        campaign_statement=campaign_statement,
        current_stage=current_stage,
        values=values,
        goals=goals,
        brand=brand,
        session_summary=session_summary,
        themes=themes,
        avatar=await read_upload(avatar),
        media=await read_uploads(media),
    )

    logger.info(f"Creating artist {name!r} with {len(form.media)} media files")
    return await asyncio.to_thread(create_artist_profile, form)


@router.get("", response_model=ArtistListPage)
async def list_artists(
    search: Annotated[str | None, Query(description="Match on name or project name")] = None,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
):
    """
    List artists with search and pagination.
    """
    return await asyncio.to_thread(ArtistService.list_artists, search, page)


@router.get("/{artist_id}", response_model=ArtistDetails)
async def get_artist(
    artist_id: Annotated[UUID, Path(description="Artist UUID")],
):
    """
    Load an artist with framework, sessions and media for the edit form.
    """
    return await ArtistService.get_artist_details(str(artist_id))


@router.put("/{artist_id}", response_model=UpdateArtistResult)
async def update_artist(
    artist_id: Annotated[UUID, Path(description="Artist UUID")],
    name: Annotated[str, Form()] = "",
    project_name: Annotated[str, Form()] = "",
    project_description: Annotated[str, Form()] = "",
    campaign_statement: Annotated[str, Form()] = "",
    current_stage: Annotated[ArtistStage | None, Form()] = None,
    values: Annotated[str, Form()] = "",
    goals: Annotated[str, Form()] = "",
    brand: Annotated[str, Form()] = "",
    session_summary: Annotated[str, Form()] = "",
    themes: Annotated[str, Form()] = "",
    media_to_delete: Annotated[list[str] | None, Form(description="Ids of media to remove")] = None,
    avatar: Annotated[UploadFile | None, File(description="Replacement avatar")] = None,
    media: Annotated[list[UploadFile] | None, File(description="Media files to add")] = None,
):
    """
    Save edits to an artist.

    The whole edit is rejected if a required field is empty. Invalid new
    files are reported one by one and skipped. The response carries the
    updated artist so the caller can refresh its list.
    """
    edit = ArtistEdit(
        name=name,
        project_name=project_name,
        project_description=project_description,
        campaign_statement=campaign_statement,
        current_stage=current_stage,
        values=values,
        goals=goals,
        brand=brand,
        session_summary=session_summary,
        themes=themes,
        media_to_delete=media_to_delete or [],
        avatar=await read_upload(avatar),
        new_media=await read_uploads(media),
    )

    return await update_artist_profile(str(artist_id), edit)


@router.delete("/{artist_id}", response_model=DeleteArtistResponse)
async def delete_artist(
    artist_id: Annotated[UUID, Path(description="Artist UUID")],
):
    """
    Delete an artist and all associated data.

    Media files are removed from storage first; the database cascades the
    artist delete to its framework, sessions and media rows.
    """
    artist_id_str = str(artist_id)
    removed = await asyncio.to_thread(ArtistService.delete_artist, artist_id_str)

    return DeleteArtistResponse(
        artist_id=artist_id_str,
        files_removed=removed,
        notifications=[Notification.success("Artist deleted successfully.")],
    )
