# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends, UploadFile

from app.config import settings
from core.models import UploadedFile
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client instance.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


# Type alias for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]


async def read_upload(file: UploadFile | None) -> UploadedFile | None:
    """
    Read a multipart file into an UploadedFile.

    Browsers send an empty part with no filename when a file input is left
    blank; that counts as no file. A part larger than the upload limit is
    not read; only its declared size is kept so validation can reject it.
    """
    if file is None or not file.filename:
        return None

    content_type = file.content_type or "application/octet-stream"

    if file.size is not None and file.size > settings.max_upload_size_bytes:
        logger.warning(f"Not reading {file.filename}: {file.size} bytes exceeds upload limit")
        return UploadedFile(
            filename=file.filename,
            content_type=content_type,
            declared_size=file.size,
        )

    content = await file.read()
    return UploadedFile(
        filename=file.filename,
        content_type=content_type,
        content=content,
    )


async def read_uploads(files: list[UploadFile] | None) -> list[UploadedFile]:
    """Read every non-empty multipart file, keeping their order."""
    uploaded = []
    for file in files or []:
        item = await read_upload(file)
        if item is not None:
            uploaded.append(item)
    return uploaded
