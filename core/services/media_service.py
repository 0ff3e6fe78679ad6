# =============================================================================
# core/services/media_service.py - Media Validation & Upload
# =============================================================================
# Validates files added to an artist and stores them:
# - size limit (MAX_UPLOAD_SIZE_MB)
# - video duration limit (MAX_VIDEO_DURATION_SECONDS), read with ffprobe
# - accepted MIME types (images, videos, pdf, doc/docx, txt)
#
# Each file is judged on its own; one bad file never blocks the others.
# =============================================================================

import asyncio
import logging
import os
import subprocess
import tempfile

from app.config import settings
from core.models import MediaType, UploadedFile
from core.services.artist_service import ArtistService
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

DOCUMENT_MIME_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
})


def is_supported_type(content_type: str) -> bool:
    """Check a MIME type against the accepted media types."""
    return (
        content_type.startswith("image/")
        or content_type.startswith("video/")
        or content_type in DOCUMENT_MIME_TYPES
    )


def media_type_for(content_type: str) -> MediaType:
    """Media rows are stored as video when the MIME says so, photo otherwise."""
    return MediaType.VIDEO if "video" in content_type else MediaType.PHOTO


def size_error(file: UploadedFile) -> str | None:
    """Message for a file over the size limit; the limit itself is allowed."""
    if file.size > settings.max_upload_size_bytes:
        return f'File "{file.filename}" exceeds {settings.MAX_UPLOAD_SIZE_MB}MB limit.'
    return None


def _run_ffprobe(content: bytes, suffix: str) -> float | None:
    """Write the video to a temp file and ask ffprobe for its duration."""
    fd, path = tempfile.mkstemp(suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)

        cmd = [
            settings.FFPROBE_PATH,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            path,
        ]
        result = subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=60)
        return float(result.stdout.strip())

    except (OSError, subprocess.SubprocessError, ValueError) as e:
        logger.warning(f"Could not read video duration: {e}")
        return None

    finally:
        os.unlink(path)


async def probe_video_duration(file: UploadedFile) -> float | None:
    """
    Read the duration of a video in seconds.

    Returns:
        Duration in seconds, or None if the metadata can't be read
    """
    suffix = os.path.splitext(file.filename)[1]
    return await asyncio.to_thread(_run_ffprobe, file.content, suffix)


class MediaService:
    """
    Service for validating and storing media files.
    """

    @staticmethod
    async def validate(file: UploadedFile) -> str | None:
        """
        Check a file against the upload rules.

        Checks run in order: size, video duration, MIME type.

        Args:
            file: File received from the browser

        Returns:
            None when the file is accepted, otherwise the message to show
        """
        error = size_error(file)
        if error:
            return error

        if file.is_video:
            duration = await probe_video_duration(file)
            if duration is None or duration > settings.MAX_VIDEO_DURATION_SECONDS:
                minutes = settings.MAX_VIDEO_DURATION_SECONDS // 60
                return f'Video "{file.filename}" exceeds {minutes} minutes.'

        if not is_supported_type(file.content_type):
            return f'File "{file.filename}" is not a supported type.'

        return None

    @staticmethod
    async def partition(files: list[UploadedFile]) -> tuple[list[UploadedFile], list[str]]:
        """
        Split files into accepted ones and rejection messages.

        Returns:
            (accepted files, one message per rejected file)
        """
        accepted: list[UploadedFile] = []
        rejected: list[str] = []

        for file in files:
            error = await MediaService.validate(file)
            if error:
                logger.warning(f"Rejected media file {file.filename}: {error}")
                rejected.append(error)
            else:
                accepted.append(file)

        return accepted, rejected

    @staticmethod
    def store(artist_id: str, file: UploadedFile, path: str) -> dict:
        """
        Upload a file and record it in the media table.

        Args:
            artist_id: Owner of the file
            file: File to store
            path: Object path inside the bucket

        Returns:
            Inserted media row

        Raises:
            StorageUploadError: If the upload fails
            RecordInsertError: If the media row can't be inserted
        """
        url = StorageService.upload_public(path, file.content, file.content_type)

        return ArtistService.insert_media(
            artist_id=artist_id,
            media_type=media_type_for(file.content_type),
            url=url,
            file_name=file.filename,
        )
