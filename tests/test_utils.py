# =============================================================================
# tests/test_utils.py - Utility Function Tests
# =============================================================================
# This module contains tests for:
# - Comma-separated tag parsing
# - Storage path construction for avatars and media
# - Deriving bucket paths back from public URLs
# =============================================================================

import re
from uuid import UUID

import pytest

from lib.utils import (
    avatar_path_for,
    media_path_for,
    new_avatar_path,
    new_media_path,
    normalize_uuid,
    parse_tags,
    storage_path_from_url,
)


# =============================================================================
# Tag Parsing Tests
# =============================================================================

class TestParseTags:
    """Test parse_tags function."""

    def test_splits_and_trims(self):
        """Test items are trimmed and order and duplicates kept."""
        assert parse_tags("a, b, b") == ["a", "b", "b"]

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_field_is_empty_list(self, text):
        """Test a blank field yields no items."""
        assert parse_tags(text) == []
        assert parse_tags(text, drop_empty=True) == []

    def test_keeps_empty_items_by_default(self):
        """Test the creation form keeps empty items between commas."""
        assert parse_tags("a,,b") == ["a", "", "b"]

    def test_drop_empty(self):
        """Test the edit form drops empty items."""
        assert parse_tags(" a , , b ,", drop_empty=True) == ["a", "b"]


# =============================================================================
# Storage Path Tests
# =============================================================================

class TestStoragePaths:
    """Test storage path helpers."""

    def test_new_avatar_path_uses_fresh_uuid(self):
        """Test new avatars get a random folder."""
        path = new_avatar_path("me.png")
        prefix, folder, name = path.split("/")

        assert prefix == "avatars"
        assert UUID(folder)
        assert name == "me.png"
        assert new_avatar_path("me.png") != path

    def test_avatar_path_for_existing_artist(self):
        """Test replacement avatars are timestamped under the artist id."""
        path = avatar_path_for("artist-1", "me.png")
        assert re.fullmatch(r"avatars/artist-1/\d+_me\.png", path)

    def test_new_media_path(self):
        """Test media uploaded at creation keep their filename."""
        assert new_media_path("artist-1", "my clip.mp4") == "media/artist-1/my clip.mp4"

    def test_media_path_for_replaces_whitespace(self):
        """Test media added while editing have whitespace replaced."""
        path = media_path_for("artist-1", "my  big\tclip.mp4")
        assert re.fullmatch(r"media/artist-1/\d+_my_big_clip\.mp4", path)


class TestStoragePathFromUrl:
    """Test storage_path_from_url function."""

    def test_full_path_after_bucket(self):
        """Test nested paths are kept whole, not just the last segment."""
        url = "https://x.supabase.co/storage/v1/object/public/lab-upload/media/abc/1_clip.mp4"
        assert storage_path_from_url(url, "lab-upload") == "media/abc/1_clip.mp4"

    def test_unquotes_path(self):
        """Test percent-encoded names are decoded."""
        url = "https://x.supabase.co/storage/v1/object/public/lab-upload/media/abc/my%20clip.mp4"
        assert storage_path_from_url(url, "lab-upload") == "media/abc/my clip.mp4"

    def test_other_bucket(self):
        """Test URLs outside the bucket give None."""
        url = "https://x.supabase.co/storage/v1/object/public/other/media/abc/a.png"
        assert storage_path_from_url(url, "lab-upload") is None

    def test_empty_url(self):
        assert storage_path_from_url("", "lab-upload") is None


def test_normalize_uuid():
    """Test UUID objects and strings both come out as strings."""
    value = UUID("550e8400-e29b-41d4-a716-446655440000")
    assert normalize_uuid(value) == "550e8400-e29b-41d4-a716-446655440000"
    assert normalize_uuid("abc") == "abc"
