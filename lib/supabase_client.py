# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for fetching:
# - Artists for the wall and the admin list
# - MAS frameworks, sessions and media belonging to an artist
#
# Writes live in core/services; this module only reads.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   artist = SupabaseClient.fetch_artist(artist_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries the failing operation's code plus a suggestion for fixing it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        artists = SupabaseClient.fetch_artists()
        framework = SupabaseClient.fetch_framework(artists[0]["id"])
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Artists
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_artists(cls) -> list[dict[str, Any]]:
        """
        Fetch every artist row.

        Returns:
            List of artist dicts (empty when the table is empty)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = client.table("artists").select("*").execute()
            artists = response.data or []
            logger.debug(f"Fetched {len(artists)} artists")
            return artists

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch artists: {e}",
                code="FETCH_ARTISTS_FAILED",
                suggestion="Check that the artists table exists and is readable"
            )

    @classmethod
    def fetch_artist(cls, artist_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a specific artist by ID.

        Returns:
            Artist dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        artist_id_str = normalize_uuid(artist_id)

        try:
            response = (
                client.table("artists")
                .select("*")
                .eq("id", artist_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch artist: {e}",
                code="FETCH_ARTIST_FAILED",
                suggestion="Check that the artist_id exists",
                details={"artist_id": artist_id_str}
            )

    # -------------------------------------------------------------------------
    # Artist Details
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_framework(cls, artist_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch the MAS framework of an artist.

        Returns:
            Framework dict, or None if the artist has none
        """
        client = cls.get_client()
        artist_id_str = normalize_uuid(artist_id)

        try:
            response = (
                client.table("mas_frameworks")
                .select("*")
                .eq("artist_id", artist_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch MAS framework: {e}",
                code="FETCH_FRAMEWORK_FAILED",
                details={"artist_id": artist_id_str}
            )

    @classmethod
    def fetch_sessions(cls, artist_id: str | UUID) -> list[dict[str, Any]]:
        """Fetch every session note of an artist."""
        client = cls.get_client()
        artist_id_str = normalize_uuid(artist_id)

        try:
            response = (
                client.table("sessions")
                .select("*")
                .eq("artist_id", artist_id_str)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch sessions: {e}",
                code="FETCH_SESSIONS_FAILED",
                details={"artist_id": artist_id_str}
            )

    @classmethod
    def fetch_media(cls, artist_id: str | UUID) -> list[dict[str, Any]]:
        """Fetch every media row of an artist."""
        client = cls.get_client()
        artist_id_str = normalize_uuid(artist_id)

        try:
            response = (
                client.table("media")
                .select("*")
                .eq("artist_id", artist_id_str)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch media: {e}",
                code="FETCH_MEDIA_FAILED",
                details={"artist_id": artist_id_str}
            )

    @classmethod
    def fetch_media_by_ids(cls, media_ids: list[str]) -> list[dict[str, Any]]:
        """
        Fetch id and url of specific media rows.

        Used before deleting media so the storage objects can be removed.

        Args:
            media_ids: Media UUIDs

        Returns:
            List of {"id", "url"} dicts
        """
        if not media_ids:
            return []

        client = cls.get_client()

        try:
            response = (
                client.table("media")
                .select("id, url")
                .in_("id", [normalize_uuid(m) for m in media_ids])
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch media for deletion: {e}",
                code="FETCH_MEDIA_FAILED",
                details={"media_ids": media_ids}
            )
