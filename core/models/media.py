# =============================================================================
# core/models/media.py - Media & Gallery Schemas
# =============================================================================
# These models define the API contract for uploaded media:
# - MediaType: What the admin stored the file as (video/photo/moodboard)
# - Media: A row of the `media` table
# - GalleryKind / GalleryItem / MediaGallery: How the profile view groups
#   media. The kind is guessed from the URL extension, then overridden by
#   the stored type when that type is known to be visual.
# =============================================================================

import re
from datetime import datetime
from enum import Enum
from urllib.parse import urlparse
from uuid import UUID

from pydantic import BaseModel, Field


class MediaType(str, Enum):
    """Type recorded for a media row."""
    VIDEO = "video"
    PHOTO = "photo"
    MOODBOARD = "moodboard"


class Media(BaseModel):
    """
    Schema for a `media` row.

    Example:
        {
            "id": "880e8400-e29b-41d4-a716-446655440003",
            "artist_id": "550e8400-e29b-41d4-a716-446655440000",
            "type": "photo",
            "url": "https://xxx.supabase.co/storage/v1/object/public/lab-upload/media/550e.../cover.png",
            "description": null,
            "created_at": "2024-01-15T10:30:00Z",
            "file_name": "cover.png"
        }
    """

    id: UUID = Field(
        ...,
        description="Unique media identifier"
    )

    artist_id: UUID = Field(
        ...,
        description="Artist this media belongs to"
    )

    type: MediaType = Field(
        ...,
        description="Stored media type"
    )

    url: str = Field(
        ...,
        description="Public URL of the file in storage"
    )

    description: str | None = Field(
        default=None,
        description="Optional caption"
    )

    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the media was stored"
    )

    # Older rows were written without a file name
    file_name: str | None = Field(
        default=None,
        description="Original file name"
    )


# =============================================================================
# Gallery
# =============================================================================

class GalleryKind(str, Enum):
    """Display class of a media item in the profile gallery."""
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
    OTHER = "other"


_IMAGE_EXT = re.compile(r"\.(jpg|jpeg|png|gif|webp|bmp|svg)$")
_VIDEO_EXT = re.compile(r"\.(mp4|mov|avi|wmv|webm|mkv|flv|m4v)$")
_DOCUMENT_EXT = re.compile(r"\.(pdf|doc|docx|txt|rtf|odt|pages)$")
_ANY_EXT = re.compile(r"\.([a-z0-9]+)$")


def classify_media(media: Media) -> tuple[GalleryKind, str]:
    """
    Work out the gallery kind and display extension of a media item.

    Returns:
        (kind, extension) where extension is upper-case, or "file" when the
        URL has none
    """
    path = urlparse(media.url).path.lower()

    kind = GalleryKind.OTHER
    if _IMAGE_EXT.search(path):
        kind = GalleryKind.IMAGE
    elif _VIDEO_EXT.search(path):
        kind = GalleryKind.VIDEO
    elif _DOCUMENT_EXT.search(path):
        kind = GalleryKind.DOCUMENT

    match = _ANY_EXT.search(path)
    extension = match.group(1).upper() if match else "file"

    # Stored type wins over the extension guess
    if media.type in (MediaType.PHOTO, MediaType.MOODBOARD):
        kind = GalleryKind.IMAGE
    elif media.type == MediaType.VIDEO:
        kind = GalleryKind.VIDEO

    return kind, extension


class GalleryItem(BaseModel):
    """A media item enriched for display."""
    media: Media
    kind: GalleryKind
    file_extension: str

    @classmethod
    def from_media(cls, media: Media) -> "GalleryItem":
        kind, extension = classify_media(media)
        return cls(media=media, kind=kind, file_extension=extension)


class MediaGallery(BaseModel):
    """
    Media grouped by display kind, with per-kind counts.

    Example:
        {
            "items": [...],
            "groups": {"image": [...], "video": [], "document": [...], "other": []},
            "counts": {"all": 3, "image": 2, "video": 0, "document": 1, "other": 0}
        }
    """

    items: list[GalleryItem] = Field(default_factory=list)
    groups: dict[GalleryKind, list[GalleryItem]] = Field(default_factory=dict)
    counts: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def build(cls, media: list[Media]) -> "MediaGallery":
        items = [GalleryItem.from_media(m) for m in media]
        groups = {kind: [i for i in items if i.kind == kind] for kind in GalleryKind}

        counts = {"all": len(items)}
        counts.update({kind.value: len(group) for kind, group in groups.items()})

        return cls(items=items, groups=groups, counts=counts)
