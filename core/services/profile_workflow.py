# =============================================================================
# core/services/profile_workflow.py - Create & Edit Artist Workflows
# =============================================================================
# The two multi-step admin workflows. Each step is a blocking call into
# Supabase, executed strictly in order. Nothing is rolled back: if a step
# aborts, rows written by earlier steps stay in place.
#
# Create:  avatar -> artist -> framework -> session -> media (per file)
# Edit:    validate -> avatar -> delete media -> add media -> artist,
#          framework, session
# =============================================================================

import asyncio
import logging
from datetime import datetime, timezone

from lib.utils import (
    avatar_path_for,
    media_path_for,
    new_avatar_path,
    new_media_path,
    parse_tags,
)
from core.models import (
    FRAMEWORK_FIELDS,
    Artist,
    ArtistDetails,
    ArtistEdit,
    ArtistForm,
    CreateArtistResult,
    MASFramework,
    Notification,
    Session,
    UpdateArtistResult,
    UploadedFile,
)
from core.services.artist_service import ArtistService
from core.services.media_service import MediaService, size_error
from core.services.storage_service import StorageService
from app.exceptions import (
    RecordInsertError,
    StorageUploadError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

ARTIST_REQUIRED_FIELDS = (
    "name",
    "project_name",
    "project_description",
    "campaign_statement",
)


def _missing(values: dict[str, object]) -> list[str]:
    """Names of the entries that are blank strings or empty lists."""
    missing = []
    for name, value in values.items():
        if isinstance(value, str):
            value = value.strip()
        if not value:
            missing.append(name)
    return missing


def _check_avatar_size(avatar: UploadedFile | None) -> None:
    error = size_error(avatar) if avatar else None
    if error:
        raise ValidationFailedError(error, fields=["avatar"])


# =============================================================================
# Create
# =============================================================================

def create_artist_profile(form: ArtistForm) -> CreateArtistResult:
    """
    Create an artist with its framework, first session and media.

    Steps run in order; an avatar upload failure or a failed artist,
    framework or session insert aborts the rest. A media file that is too
    large, fails to upload or fails to be recorded is logged, reported
    and skipped.

    Args:
        form: Submitted "create artist" form

    Returns:
        CreateArtistResult with the stored artist and notifications

    Raises:
        ValidationFailedError: If a required field is blank or the avatar
            is too large
        StorageUploadError: If the avatar upload fails
        RecordInsertError: If the artist, framework or session insert fails
    """
    missing = _missing({name: getattr(form, name) for name in ARTIST_REQUIRED_FIELDS})
    if missing:
        raise ValidationFailedError("Please fill in all required fields.", fields=missing)
    _check_avatar_size(form.avatar)

    # 1. Avatar
    avatar_url = ""
    if form.avatar:
        path = new_avatar_path(form.avatar.filename)
        try:
            avatar_url = StorageService.upload_public(
                path, form.avatar.content, form.avatar.content_type
            )
        except StorageUploadError as e:
            raise StorageUploadError(f"Avatar upload error: {e.message}", path=path)

    # 2. Artist row
    artist = ArtistService.insert_artist(
        name=form.name,
        project_name=form.project_name,
        project_description=form.project_description,
        campaign_statement=form.campaign_statement,
        current_stage=form.current_stage.value,
        avatar_url=avatar_url,
    )
    artist_id = str(artist.id)

    # 3. Framework and 4. session
    ArtistService.insert_framework(
        artist_id=artist_id,
        **{name: parse_tags(getattr(form, name)) for name in FRAMEWORK_FIELDS},
    )
    ArtistService.insert_session(
        artist_id=artist_id,
        summary=form.session_summary,
        themes=parse_tags(form.themes),
    )

    # 5. Media, one file at a time
    result = CreateArtistResult(artist=artist)
    for file in form.media:
        error = size_error(file)
        if error:
            logger.warning(f"Skipping media file {file.filename}: {error}")
            result.media_failed += 1
            result.notifications.append(Notification.error(error))
            continue

        try:
            MediaService.store(artist_id, file, new_media_path(artist_id, file.filename))
            result.media_stored += 1
        except (StorageUploadError, RecordInsertError) as e:
            logger.error(f"Media error for {file.filename}, skipping: {e.message}")
            result.media_failed += 1
            result.notifications.append(
                Notification.error(f'Media error for "{file.filename}": {e.message}')
            )

    result.notifications.insert(0, Notification.success("Artist profile created successfully!"))
    logger.info(
        f"Created artist profile {artist_id} "
        f"({result.media_stored} media stored, {result.media_failed} failed)"
    )
    return result


# =============================================================================
# Edit
# =============================================================================

def _validate_edit(edit: ArtistEdit) -> tuple[dict[str, list[str]], list[str]]:
    """
    Check the whole edit before anything is written.

    Returns:
        Parsed framework tags keyed by field name, and parsed themes

    Raises:
        ValidationFailedError: If a required field is empty or the avatar
            is not an image or too large
    """
    tags = {name: parse_tags(getattr(edit, name), drop_empty=True) for name in FRAMEWORK_FIELDS}
    themes = parse_tags(edit.themes, drop_empty=True)

    fields = {name: getattr(edit, name) for name in ARTIST_REQUIRED_FIELDS}
    fields["current_stage"] = edit.current_stage
    fields.update(tags)
    fields.update({"session_summary": edit.session_summary, "themes": themes})

    missing = _missing(fields)
    if missing:
        raise ValidationFailedError("Please fill in all required fields.", fields=missing)

    if edit.avatar and not edit.avatar.is_image:
        raise ValidationFailedError("Please select an image file for the avatar.", fields=["avatar"])
    _check_avatar_size(edit.avatar)

    return tags, themes


def _apply_edit(
    details: ArtistDetails,
    edit: ArtistEdit,
    tags: dict[str, list[str]],
    themes: list[str],
    accepted: list[UploadedFile],
    notifications: list[Notification],
) -> UpdateArtistResult:
    """Run the blocking write steps of an edit, in order."""
    artist_id = str(details.artist.id)

    # 1. Avatar
    avatar_url = details.artist.avatar_url
    if edit.avatar:
        path = avatar_path_for(artist_id, edit.avatar.filename)
        try:
            avatar_url = StorageService.upload_public(
                path, edit.avatar.content, edit.avatar.content_type, upsert=True
            )
        except StorageUploadError as e:
            raise StorageUploadError(f"Failed to upload avatar: {e.message}", path=path)

    # 2. Media marked for deletion
    owned_ids = {str(m.id) for m in details.media}
    to_delete = [m for m in dict.fromkeys(edit.media_to_delete) if m in owned_ids]
    for media_id in set(edit.media_to_delete) - owned_ids:
        logger.warning(f"Ignoring media {media_id}: not attached to artist {artist_id}")

    deleted = ArtistService.delete_media(to_delete)
    if deleted:
        notifications.append(Notification.success(f"Deleted {deleted} media files."))

    # 3. New media
    stored = 0
    for file in accepted:
        try:
            MediaService.store(artist_id, file, media_path_for(artist_id, file.filename))
            stored += 1
        except (StorageUploadError, RecordInsertError) as e:
            logger.error(f"Failed to store media file {file.filename}: {e.message}")
            notifications.append(
                Notification.error(f"Failed to upload media file {file.filename}: {e.message}")
            )

    # 4. Artist, framework, session
    artist = ArtistService.update_artist(
        Artist(
            id=details.artist.id,
            name=edit.name,
            project_name=edit.project_name,
            project_description=edit.project_description,
            campaign_statement=edit.campaign_statement,
            current_stage=edit.current_stage,
            avatar_url=avatar_url,
            created_at=details.artist.created_at,
            updated_at=details.artist.updated_at,
        )
    )

    framework = ArtistService.upsert_framework(
        MASFramework(
            id=details.framework.id if details.framework else None,
            artist_id=details.artist.id,
            **tags,
        )
    )

    current = details.primary_session
    session = ArtistService.upsert_session(
        Session(
            id=current.id if current else None,
            artist_id=details.artist.id,
            summary=edit.session_summary,
            date=current.date if current else datetime.now(timezone.utc),
            themes=themes,
        )
    )

    notifications.append(Notification.success("Artist profile updated successfully!"))
    logger.info(f"Updated artist profile {artist_id} ({deleted} media deleted, {stored} stored)")

    return UpdateArtistResult(
        artist=artist,
        framework=framework,
        session=session,
        media_deleted=deleted,
        media_stored=stored,
        notifications=notifications,
    )


async def update_artist_profile(artist_id: str, edit: ArtistEdit) -> UpdateArtistResult:
    """
    Apply an edit to an existing artist.

    The edit is validated before anything touches the network. Then the
    current artist, framework, sessions and media are loaded, the same
    bundle the edit form was filled from. Invalid new files are
    rejected one by one without blocking the rest. The write steps run in
    a worker thread.

    Args:
        artist_id: Artist UUID
        edit: Submitted "edit artist" form

    Returns:
        UpdateArtistResult carrying the updated artist and notifications

    Raises:
        ArtistNotFoundError: If the artist doesn't exist
        ValidationFailedError: If the edit is incomplete
        StorageUploadError: If the avatar upload fails
        StorageDeleteError / RecordDeleteError: If removing media fails
        RecordInsertError: If the artist, framework or session write fails
    """
    tags, themes = _validate_edit(edit)

    details = await ArtistService.get_artist_details(artist_id)
    accepted, rejected = await MediaService.partition(edit.new_media)

    notifications = [Notification.error(message) for message in rejected]

    result = await asyncio.to_thread(
        _apply_edit, details, edit, tags, themes, accepted, notifications
    )
    result.media_rejected = len(rejected)
    return result
