# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every workflow failure falls into one of four categories: upload, insert,
# delete or validation. The backend's raw message is kept in the response.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class ArtistLabException(Exception):
    """
    Base exception for the ArtistLab API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "ARTISTLAB_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Artist Exceptions
# =============================================================================

class ArtistNotFoundError(ArtistLabException):
    """Raised when an artist ID doesn't exist."""

    def __init__(self, artist_id: str):
        super().__init__(
            message=f"Artist not found: {artist_id}",
            code="ARTIST_NOT_FOUND",
            status_code=404,
            suggestion="Check that the artist_id is correct and the artist hasn't been deleted",
            details={"artist_id": artist_id}
        )


class PermissionDeniedError(ArtistLabException):
    """Raised when the backend refuses a write (PostgREST 42501)."""

    def __init__(self, action: str, error: str):
        super().__init__(
            message=f"You don't have permission to {action}.",
            code="PERMISSION_DENIED",
            status_code=403,
            suggestion="Check the row level security policies for this table",
            details={"error": error}
        )


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationFailedError(ArtistLabException):
    """Raised when form input is rejected before any network call."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion="Fill in every required field and try again",
            details={"fields": fields} if fields else None
        )


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageUploadError(ArtistLabException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str, path: str | None = None):
        super().__init__(
            message=error,
            code="STORAGE_UPLOAD_ERROR",
            status_code=502,
            suggestion="Try again later or check that the storage bucket exists",
            details={"path": path} if path else None
        )


class StorageDeleteError(ArtistLabException):
    """Raised when removing files from storage fails."""

    def __init__(self, error: str, paths: list[str] | None = None):
        super().__init__(
            message=error,
            code="STORAGE_DELETE_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details={"paths": paths} if paths else None
        )


# =============================================================================
# Database Exceptions
# =============================================================================

class RecordInsertError(ArtistLabException):
    """Raised when inserting, updating or upserting a row fails."""

    def __init__(self, error: str, table: str):
        super().__init__(
            message=error,
            code="INSERT_ERROR",
            status_code=502,
            suggestion="Rows written before this step were kept; fix the input and save again",
            details={"table": table}
        )


class RecordDeleteError(ArtistLabException):
    """Raised when deleting rows fails."""

    def __init__(self, error: str, table: str):
        super().__init__(
            message=error,
            code="DELETE_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details={"table": table}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def artistlab_exception_handler(
    request: Request,
    exc: ArtistLabException
) -> JSONResponse:
    """
    Convert ArtistLabException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
