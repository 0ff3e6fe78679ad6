# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - artist.py: Artist rows, wall cards and admin list pages
# - framework.py: MAS framework (values/goals/brand)
# - session.py: Dated session notes
# - media.py: Media rows and the profile gallery grouping
# - profile.py: Artist bundles, form inputs and workflow results
#
# These models define the "contract" between API and clients.
# =============================================================================

from .artist import (
    Artist,
    ArtistCard,
    ArtistListPage,
    ArtistStage,
)
from .framework import FRAMEWORK_FIELDS, MASFramework
from .session import Session
from .media import (
    GalleryItem,
    GalleryKind,
    Media,
    MediaGallery,
    MediaType,
    classify_media,
)
from .profile import (
    ArtistDetails,
    ArtistEdit,
    ArtistForm,
    CreateArtistResult,
    Notification,
    NotificationLevel,
    UpdateArtistResult,
    UploadedFile,
)

__all__ = [
    # Artist
    "Artist",
    "ArtistCard",
    "ArtistListPage",
    "ArtistStage",
    # Framework
    "FRAMEWORK_FIELDS",
    "MASFramework",
    # Session
    "Session",
    # Media
    "GalleryItem",
    "GalleryKind",
    "Media",
    "MediaGallery",
    "MediaType",
    "classify_media",
    # Profile
    "ArtistDetails",
    "ArtistEdit",
    "ArtistForm",
    "CreateArtistResult",
    "Notification",
    "NotificationLevel",
    "UpdateArtistResult",
    "UploadedFile",
]
