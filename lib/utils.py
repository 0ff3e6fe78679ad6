# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID normalization for queries
# - Comma-separated tag parsing for form fields
# - Storage path derivation for avatars and media files
# =============================================================================

import re
import time
from urllib.parse import unquote, urlparse
from uuid import UUID, uuid4


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        artist_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        artist_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Tag Parsing
# =============================================================================

def parse_tags(text: str | None, drop_empty: bool = False) -> list[str]:
    """
    Split a comma-separated form field into a list of trimmed strings.

    Order and duplicates are preserved. A blank field yields an empty list.

    Args:
        text: Raw field value, e.g. "a, b, b"
        drop_empty: Also drop items that are empty after trimming

    Returns:
        List of items

    Example:
        parse_tags("a, b, b")                  # ["a", "b", "b"]
        parse_tags("a,,b")                     # ["a", "", "b"]
        parse_tags("a,,b", drop_empty=True)    # ["a", "b"]
    """
    if text is None or not text.strip():
        return []

    items = [item.strip() for item in text.split(",")]
    if drop_empty:
        items = [item for item in items if item]
    return items


# =============================================================================
# Storage Paths
# =============================================================================

def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def new_avatar_path(filename: str) -> str:
    """Path for an avatar uploaded with a brand new artist."""
    return f"avatars/{uuid4()}/{filename}"


def avatar_path_for(artist_id: str, filename: str) -> str:
    """Path for a replacement avatar of an existing artist."""
    return f"avatars/{artist_id}/{_timestamp_ms()}_{filename}"


def new_media_path(artist_id: str, filename: str) -> str:
    """Path for a media file uploaded with a brand new artist."""
    return f"media/{artist_id}/{filename}"


def media_path_for(artist_id: str, filename: str) -> str:
    """Path for a media file added while editing; whitespace becomes underscores."""
    safe_name = re.sub(r"\s+", "_", filename)
    return f"media/{artist_id}/{_timestamp_ms()}_{safe_name}"


def storage_path_from_url(url: str, bucket: str) -> str | None:
    """
    Derive the object path inside a bucket from its public URL.

    Public URLs look like
    https://<ref>.supabase.co/storage/v1/object/public/<bucket>/<path>

    Returns:
        The path after the bucket segment, or None if the URL does not
        reference the bucket.
    """
    if not url:
        return None

    segments = urlparse(url).path.split("/")
    if bucket not in segments:
        return None

    path = "/".join(segments[segments.index(bucket) + 1:])
    return unquote(path) or None
