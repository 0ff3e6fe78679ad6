# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for read operations
# - utils.py: Shared utilities (tag parsing, storage paths, UUID normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import (
    avatar_path_for,
    media_path_for,
    new_avatar_path,
    new_media_path,
    normalize_uuid,
    parse_tags,
    storage_path_from_url,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "avatar_path_for",
    "media_path_for",
    "new_avatar_path",
    "new_media_path",
    "normalize_uuid",
    "parse_tags",
    "storage_path_from_url",
]
