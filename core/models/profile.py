# =============================================================================
# core/models/profile.py - Artist Profile & Form Schemas
# =============================================================================
# These models bundle an artist with its dependent rows and describe the
# two admin workflows:
# - ArtistDetails: artist + framework + sessions + media (profile/edit view)
# - ArtistForm: input of the "create artist" form
# - ArtistEdit: input of the "edit artist" form
# - UploadedFile: a file received from the browser
# - Notification: a message the UI shows as a toast
# - CreateArtistResult / UpdateArtistResult: workflow outcomes
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field

from .artist import Artist, ArtistStage
from .framework import MASFramework
from .media import Media, MediaGallery
from .session import Session


class ArtistDetails(BaseModel):
    """
    Everything known about one artist.

    `framework` is None when the artist has no MAS framework row.
    """
    artist: Artist
    framework: MASFramework | None = None
    sessions: list[Session] = Field(default_factory=list)
    media: list[Media] = Field(default_factory=list)

    @property
    def primary_session(self) -> Session | None:
        """The session the admin edits (the first one)."""
        return self.sessions[0] if self.sessions else None

    def gallery(self) -> MediaGallery:
        return MediaGallery.build(self.media)


# =============================================================================
# Uploaded Files
# =============================================================================

class UploadedFile(BaseModel):
    """
    A file received from the browser, already read into memory.

    Routers build these from FastAPI UploadFile objects so the workflows
    stay framework-agnostic.
    """
    filename: str
    content_type: str = "application/octet-stream"
    content: bytes = Field(default=b"", repr=False)

    # Set when an oversized part was left unread; content is then empty
    declared_size: int | None = None

    @property
    def size(self) -> int:
        if self.declared_size is not None:
            return self.declared_size
        return len(self.content)

    @property
    def is_video(self) -> bool:
        return self.content_type.startswith("video/")

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")


# =============================================================================
# Notifications
# =============================================================================

class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A user-visible message, rendered by the UI as a toast."""
    level: NotificationLevel
    message: str

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls(level=NotificationLevel.SUCCESS, message=message)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls(level=NotificationLevel.ERROR, message=message)


# =============================================================================
# Workflow Inputs
# =============================================================================

class ArtistForm(BaseModel):
    """
    Input of the "create artist" form.

    The tag fields are raw comma-separated strings, exactly as typed.

    Example:
        {
            "name": "Nova Reyes",
            "project_name": "Tidal",
            "project_description": "A debut EP about coastlines",
            "campaign_statement": "Music for the in-between",
            "current_stage": "Ideation",
            "values": "honesty, craft",
            "goals": "release EP",
            "brand": "coastal, warm",
            "session_summary": "Kick-off meeting",
            "themes": "ocean, memory"
        }
    """

    name: str = Field(..., description="Artist name")
    project_name: str = Field(..., description="Project name")
    project_description: str = Field(..., description="Project description")
    campaign_statement: str = Field(..., description="Campaign statement")
    current_stage: ArtistStage = Field(default=ArtistStage.IDEATION, description="Campaign stage")

    values: str = Field(default="", description="Comma-separated values")
    goals: str = Field(default="", description="Comma-separated goals")
    brand: str = Field(default="", description="Comma-separated brand attributes")

    session_summary: str = Field(default="", description="First session notes")
    themes: str = Field(default="", description="Comma-separated session themes")

    avatar: UploadedFile | None = None
    media: list[UploadedFile] = Field(default_factory=list)


class ArtistEdit(BaseModel):
    """
    Input of the "edit artist" form.

    Tag fields are comma-separated strings; empty items are dropped when
    parsed. `media_to_delete` holds ids of existing media to remove.
    """

    name: str = ""
    project_name: str = ""
    project_description: str = ""
    campaign_statement: str = ""
    current_stage: ArtistStage | None = None

    values: str = ""
    goals: str = ""
    brand: str = ""

    session_summary: str = ""
    themes: str = ""

    avatar: UploadedFile | None = None
    media_to_delete: list[str] = Field(default_factory=list)
    new_media: list[UploadedFile] = Field(default_factory=list)


# =============================================================================
# Workflow Results
# =============================================================================

class CreateArtistResult(BaseModel):
    """Outcome of the creation workflow."""
    artist: Artist
    media_stored: int = 0
    media_failed: int = 0
    notifications: list[Notification] = Field(default_factory=list)


class UpdateArtistResult(BaseModel):
    """Outcome of the update workflow; `artist` replaces the caller's copy."""
    artist: Artist
    framework: MASFramework
    session: Session
    media_deleted: int = 0
    media_stored: int = 0
    media_rejected: int = 0
    notifications: list[Notification] = Field(default_factory=list)
