# =============================================================================
# core/services/artist_service.py - Artist Table Operations
# =============================================================================
# Handles reads and writes on the artists, mas_frameworks, sessions and
# media tables. Cascading deletes are configured in the database, so
# deleting an artist row removes its framework, sessions and media rows.
# =============================================================================

import asyncio
import logging
import math
from datetime import datetime, timezone
from typing import Any

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models import (
    Artist,
    ArtistDetails,
    ArtistListPage,
    MASFramework,
    Media,
    MediaType,
    Session,
)
from core.services.storage_service import StorageService
from app.config import settings
from app.exceptions import (
    ArtistNotFoundError,
    PermissionDeniedError,
    RecordDeleteError,
    RecordInsertError,
    StorageDeleteError,
)

logger = logging.getLogger(__name__)

# PostgREST / Postgres error codes surfaced on delete
INSUFFICIENT_PRIVILEGE = "42501"
RAISE_EXCEPTION = "P0001"


def _error_message(error: Exception) -> str:
    """Raw backend message of a PostgREST error, or str() of anything else."""
    return getattr(error, "message", None) or str(error)


def _error_code(error: Exception) -> str | None:
    return getattr(error, "code", None)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ArtistService:
    """
    Service for artist records and their dependent rows.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def all_artists() -> list[Artist]:
        """Every artist, in the order the backend returns them."""
        return [Artist.model_validate(row) for row in SupabaseClient.fetch_artists()]

    @staticmethod
    def list_artists(
        search: str | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> ArtistListPage:
        """
        List artists for the admin view.

        Search is a case-insensitive substring match on name or project name.

        Args:
            search: Optional search term
            page: Page number (1-indexed)
            page_size: Items per page (defaults to ADMIN_PAGE_SIZE)

        Returns:
            ArtistListPage with the requested page
        """
        page_size = page_size or settings.ADMIN_PAGE_SIZE
        artists = ArtistService.all_artists()

        term = (search or "").strip().lower()
        if term:
            filtered = [
                a for a in artists
                if term in a.name.lower() or term in a.project_name.lower()
            ]
        else:
            filtered = artists

        offset = (page - 1) * page_size

        return ArtistListPage(
            artists=filtered[offset:offset + page_size],
            total=len(artists),
            filtered_total=len(filtered),
            page=page,
            page_size=page_size,
            total_pages=math.ceil(len(filtered) / page_size),
        )

    @staticmethod
    def get_artist(artist_id: str) -> Artist:
        """
        Get an artist by ID.

        Raises:
            ArtistNotFoundError: If the artist doesn't exist
        """
        row = SupabaseClient.fetch_artist(artist_id)
        if not row:
            raise ArtistNotFoundError(str(artist_id))
        return Artist.model_validate(row)

    @staticmethod
    async def get_artist_details(artist_id: str) -> ArtistDetails:
        """
        Load an artist with its framework, sessions and media.

        The three detail queries run concurrently once the artist is known.

        Raises:
            ArtistNotFoundError: If the artist doesn't exist
        """
        artist = await asyncio.to_thread(ArtistService.get_artist, artist_id)
        artist_id_str = str(artist.id)

        framework, sessions, media = await asyncio.gather(
            asyncio.to_thread(SupabaseClient.fetch_framework, artist_id_str),
            asyncio.to_thread(SupabaseClient.fetch_sessions, artist_id_str),
            asyncio.to_thread(SupabaseClient.fetch_media, artist_id_str),
        )

        return ArtistDetails(
            artist=artist,
            framework=MASFramework.model_validate(framework) if framework else None,
            sessions=[Session.model_validate(s) for s in sessions],
            media=[Media.model_validate(m) for m in media],
        )

    # -------------------------------------------------------------------------
    # Inserts
    # -------------------------------------------------------------------------

    @staticmethod
    def _insert(table: str, data: dict[str, Any], label: str) -> dict[str, Any]:
        client = SupabaseClient.get_client()

        try:
            response = client.table(table).insert(data).execute()
        except Exception as e:
            logger.error(f"{label} insert error: {_error_message(e)}")
            raise RecordInsertError(f"{label} insert error: {_error_message(e)}", table=table)

        if not response.data:
            raise RecordInsertError(f"{label} insert error: insert returned no data", table=table)

        return response.data[0]

    @staticmethod
    def insert_artist(
        name: str,
        project_name: str,
        project_description: str,
        campaign_statement: str,
        current_stage: str,
        avatar_url: str = "",
    ) -> Artist:
        """
        Insert an artist row and return it as stored.

        Raises:
            RecordInsertError: If the insert fails
        """
        row = ArtistService._insert(
            "artists",
            {
                "name": name,
                "project_name": project_name,
                "project_description": project_description,
                "campaign_statement": campaign_statement,
                "current_stage": current_stage,
                "avatar_url": avatar_url,
            },
            "Artist",
        )
        logger.info(f"Created artist: {row['id']}")
        return Artist.model_validate(row)

    @staticmethod
    def insert_framework(
        artist_id: str,
        values: list[str],
        goals: list[str],
        brand: list[str],
    ) -> MASFramework:
        """Insert the MAS framework of an artist."""
        row = ArtistService._insert(
            "mas_frameworks",
            {"artist_id": artist_id, "values": values, "goals": goals, "brand": brand},
            "MAS Framework",
        )
        return MASFramework.model_validate(row)

    @staticmethod
    def insert_session(
        artist_id: str,
        summary: str,
        themes: list[str],
        date: str | None = None,
    ) -> Session:
        """Insert a session note; the date defaults to now."""
        row = ArtistService._insert(
            "sessions",
            {
                "artist_id": artist_id,
                "summary": summary,
                "themes": themes,
                "date": date or _now_iso(),
            },
            "Session",
        )
        return Session.model_validate(row)

    @staticmethod
    def insert_media(
        artist_id: str,
        media_type: MediaType,
        url: str,
        file_name: str | None = None,
    ) -> dict[str, Any]:
        """Insert a media row pointing at an uploaded file."""
        return ArtistService._insert(
            "media",
            {
                "artist_id": artist_id,
                "type": media_type.value,
                "url": url,
                "file_name": file_name,
                "created_at": _now_iso(),
            },
            "Media",
        )

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    @staticmethod
    def update_artist(artist: Artist) -> Artist:
        """
        Write the editable fields of an artist and bump updated_at.

        Raises:
            RecordInsertError: If the update fails
        """
        client = SupabaseClient.get_client()
        artist_id_str = str(artist.id)

        update_data = {
            "name": artist.name,
            "project_name": artist.project_name,
            "project_description": artist.project_description,
            "campaign_statement": artist.campaign_statement,
            "current_stage": artist.current_stage.value,
            "avatar_url": artist.avatar_url,
            "updated_at": _now_iso(),
        }

        try:
            response = (
                client.table("artists")
                .update(update_data)
                .eq("id", artist_id_str)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update artist {artist_id_str}: {_error_message(e)}")
            raise RecordInsertError(f"Artist update error: {_error_message(e)}", table="artists")

        if response.data:
            logger.info(f"Updated artist: {artist_id_str}")
            return Artist.model_validate(response.data[0])

        return artist.model_copy(update={"updated_at": update_data["updated_at"]})

    @staticmethod
    def _upsert(table: str, data: dict[str, Any], label: str) -> dict[str, Any]:
        client = SupabaseClient.get_client()

        try:
            response = client.table(table).upsert(data).execute()
        except Exception as e:
            logger.error(f"{label} upsert error: {_error_message(e)}")
            raise RecordInsertError(f"{label} upsert error: {_error_message(e)}", table=table)

        return response.data[0] if response.data else data

    @staticmethod
    def upsert_framework(framework: MASFramework) -> MASFramework:
        """Insert or update a framework; an existing id is kept."""
        data = framework.model_dump(mode="json", exclude_none=True)
        return MASFramework.model_validate(
            ArtistService._upsert("mas_frameworks", data, "MAS Framework")
        )

    @staticmethod
    def upsert_session(session: Session) -> Session:
        """Insert or update a session; an existing id is kept."""
        data = session.model_dump(mode="json", exclude_none=True)
        return Session.model_validate(ArtistService._upsert("sessions", data, "Session"))

    # -------------------------------------------------------------------------
    # Deletes
    # -------------------------------------------------------------------------

    @staticmethod
    def delete_media(media_ids: list[str]) -> int:
        """
        Remove media files from storage, then their rows.

        Args:
            media_ids: Ids of the media rows to delete

        Returns:
            Number of media ids deleted

        Raises:
            StorageDeleteError: If storage removal fails
            RecordDeleteError: If the rows can't be deleted
        """
        if not media_ids:
            return 0

        ids = [normalize_uuid(m) for m in media_ids]
        rows = SupabaseClient.fetch_media_by_ids(ids)
        paths = StorageService.paths_from_urls([row["url"] for row in rows])

        try:
            StorageService.remove(paths)
        except StorageDeleteError as e:
            raise StorageDeleteError(f"Failed to delete storage files: {e.message}", paths=paths)

        client = SupabaseClient.get_client()
        try:
            client.table("media").delete().in_("id", ids).execute()
        except Exception as e:
            logger.error(f"Media deletion error: {_error_message(e)}")
            raise RecordDeleteError(
                f"Failed to delete media records: {_error_message(e)}", table="media"
            )

        logger.info(f"Deleted {len(ids)} media rows")
        return len(ids)

    @staticmethod
    def delete_artist(artist_id: str) -> int:
        """
        Delete an artist and everything attached to it.

        Storage objects of the artist's media are removed before the artist
        row; the database cascades the row delete to frameworks, sessions
        and media.

        Args:
            artist_id: Artist UUID

        Returns:
            Number of storage objects removed

        Raises:
            ArtistNotFoundError: If the artist doesn't exist
            PermissionDeniedError: If the backend refuses the delete
            StorageDeleteError: If storage removal fails
            RecordDeleteError: For any other delete failure
        """
        artist = ArtistService.get_artist(artist_id)
        artist_id_str = str(artist.id)

        media = SupabaseClient.fetch_media(artist_id_str)
        paths = StorageService.paths_from_urls([m["url"] for m in media if m.get("url")])
        removed = StorageService.remove(paths)

        client = SupabaseClient.get_client()
        try:
            client.table("artists").delete().eq("id", artist_id_str).execute()
        except Exception as e:
            code = _error_code(e)
            logger.error(f"Error deleting artist {artist_id_str}: {_error_message(e)}")
            if code == INSUFFICIENT_PRIVILEGE:
                raise PermissionDeniedError("delete this artist", _error_message(e))
            if code == RAISE_EXCEPTION:
                raise ArtistNotFoundError(artist_id_str)
            raise RecordDeleteError(
                f"Failed to delete artist: {_error_message(e)}", table="artists"
            )

        logger.info(f"Deleted artist {artist_id_str} and {removed} storage objects")
        return removed
