# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService
from .artist_service import ArtistService
from .media_service import MediaService
from .profile_workflow import create_artist_profile, update_artist_profile

__all__ = [
    "StorageService",
    "ArtistService",
    "MediaService",
    "create_artist_profile",
    "update_artist_profile",
]
