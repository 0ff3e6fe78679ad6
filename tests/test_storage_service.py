# =============================================================================
# tests/test_storage_service.py - Storage Service Tests
# =============================================================================
# Tests for uploads, public URLs and removals in the lab-upload bucket,
# run against the in-memory Supabase from conftest.
# =============================================================================

import pytest

from app.exceptions import StorageDeleteError, StorageUploadError
from core.services.storage_service import StorageService


class TestUpload:
    """Tests for StorageService uploads."""

    def test_upload_public_returns_url(self, fake_supabase):
        """Test a stored file is reachable through its public URL."""
        url = StorageService.upload_public("media/a/clip.mp4", b"data", "video/mp4")

        assert url.endswith("/lab-upload/media/a/clip.mp4")
        assert fake_supabase.objects["lab-upload"]["media/a/clip.mp4"] == b"data"

    def test_existing_path_without_upsert_fails(self, fake_supabase):
        """Test an upload never silently overwrites."""
        StorageService.upload("media/a/x.png", b"1", "image/png")

        with pytest.raises(StorageUploadError) as exc_info:
            StorageService.upload("media/a/x.png", b"2", "image/png")

        assert exc_info.value.details["path"] == "media/a/x.png"

    def test_upsert_overwrites(self, fake_supabase):
        StorageService.upload("avatars/a/me.png", b"1", "image/png")
        StorageService.upload("avatars/a/me.png", b"2", "image/png", upsert=True)

        assert fake_supabase.objects["lab-upload"]["avatars/a/me.png"] == b"2"


class TestRemove:
    """Tests for StorageService removals."""

    def test_remove_nothing(self, fake_supabase):
        """Test an empty list doesn't call storage."""
        assert StorageService.remove([]) == 0
        assert fake_supabase.calls == []

    def test_remove_failure(self, fake_supabase):
        fake_supabase.fail_remove = RuntimeError("bucket offline")

        with pytest.raises(StorageDeleteError):
            StorageService.remove(["media/a/x.png"])

    def test_paths_from_urls_skips_foreign_urls(self, fake_supabase):
        urls = [
            "https://test-project.supabase.co/storage/v1/object/public/lab-upload/media/a/x.png",
            "https://cdn.example.com/elsewhere/y.png",
        ]
        assert StorageService.paths_from_urls(urls) == ["media/a/x.png"]
