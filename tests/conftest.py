# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase client (tables + storage)
# - A patched ffprobe so video checks don't need the binary
# =============================================================================

import os
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import AsyncMock, patch

import pytest

from core.models import UploadedFile
from lib.supabase_client import SupabaseClient

PUBLIC_URL_BASE = "https://test-project.supabase.co/storage/v1/object/public"


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeAPIError(Exception):
    """Mimics postgrest's APIError: carries a code and a message."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__({"message": message, "code": code})
        self.message = message
        self.code = code


class FakeQuery:
    """A single query builder chain against one table."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: Any = None
        self.filters: list[tuple[str, Any]] = []
        self.is_single = False

    def select(self, *_columns):
        self.op = "select"
        return self

    def insert(self, data):
        self.op, self.payload = "insert", data
        return self

    def update(self, data):
        self.op, self.payload = "update", data
        return self

    def upsert(self, data):
        self.op, self.payload = "upsert", data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, lambda v, value=value: str(v) == str(value)))
        return self

    def in_(self, column, values):
        wanted = {str(v) for v in values}
        self.filters.append((column, lambda v: str(v) in wanted))
        return self

    def single(self):
        self.is_single = True
        return self

    def limit(self, _count):
        return self

    def _matches(self, row):
        return all(check(row.get(column)) for column, check in self.filters)

    def execute(self):
        self.db.calls.append((self.op, self.table))

        failure = self.db.failures.get((self.table, self.op))
        if failure is not None:
            raise failure

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "select":
            data = [dict(r) for r in rows if self._matches(r)]
            if self.is_single:
                if len(data) != 1:
                    raise FakeAPIError(
                        "JSON object requested, multiple (or no) rows returned",
                        code="PGRST116",
                    )
                return SimpleNamespace(data=data[0])
            return SimpleNamespace(data=data)

        if self.op == "insert":
            row = dict(self.payload)
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return SimpleNamespace(data=updated)

        if self.op == "upsert":
            data = dict(self.payload)
            for row in rows:
                if data.get("id") and str(row.get("id")) == str(data["id"]):
                    row.update(data)
                    return SimpleNamespace(data=[dict(row)])
            data.setdefault("id", str(uuid.uuid4()))
            rows.append(data)
            return SimpleNamespace(data=[dict(data)])

        if self.op == "delete":
            removed = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            if self.table == "artists":
                self.db.cascade([str(r["id"]) for r in removed])
            return SimpleNamespace(data=removed)

        raise AssertionError(f"unsupported op {self.op}")


class FakeBucket:
    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name

    @property
    def objects(self) -> dict[str, bytes]:
        return self.db.objects.setdefault(self.name, {})

    def upload(self, path, file, file_options=None):
        self.db.calls.append(("storage.upload", path))
        if any(marker in path for marker in self.db.failing_uploads):
            raise FakeAPIError(f"upload refused for {path}")
        upsert = (file_options or {}).get("upsert") == "true"
        if path in self.objects and not upsert:
            raise FakeAPIError("The resource already exists", code="409")
        self.objects[path] = file
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"{PUBLIC_URL_BASE}/{self.name}/{path}"

    def remove(self, paths):
        self.db.calls.append(("storage.remove", tuple(paths)))
        if self.db.fail_remove is not None:
            raise self.db.fail_remove
        for path in paths:
            self.objects.pop(path, None)
        return [{"name": p} for p in paths]

    def list(self, *_args, **_kwargs):
        return [{"name": p} for p in self.objects]


class FakeStorage:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def from_(self, bucket):
        return FakeBucket(self.db, bucket)


class FakeSupabase:
    """
    In-memory replacement for the supabase-py Client.

    `calls` records every executed query and storage call in order.
    `failures[(table, op)]` makes that query raise.
    """

    def __init__(self):
        self.tables: dict[str, list[dict]] = {
            "artists": [], "mas_frameworks": [], "sessions": [], "media": [],
        }
        self.objects: dict[str, dict[str, bytes]] = {}
        self.calls: list[tuple] = []
        self.failures: dict[tuple[str, str], Exception] = {}
        self.failing_uploads: set[str] = set()
        self.fail_remove: Exception | None = None
        self.storage = FakeStorage(self)

    def table(self, name):
        return FakeQuery(self, name)

    def cascade(self, artist_ids: list[str]):
        for name in ("mas_frameworks", "sessions", "media"):
            self.tables[name] = [
                r for r in self.tables[name] if str(r["artist_id"]) not in artist_ids
            ]

    # -------------------------------------------------------------------------
    # Seeding helpers
    # -------------------------------------------------------------------------

    def add_artist(self, **overrides) -> dict:
        row = {
            "id": str(uuid.uuid4()),
            "name": "Nova Reyes",
            "avatar_url": "",
            "project_name": "Tidal",
            "project_description": "A debut EP about coastlines",
            "campaign_statement": "Music for the in-between",
            "current_stage": "Branding",
            "created_at": "2024-01-15T10:30:00+00:00",
            "updated_at": None,
        }
        row.update(overrides)
        self.tables["artists"].append(row)
        return row

    def add_framework(self, artist_id: str, **overrides) -> dict:
        row = {
            "id": str(uuid.uuid4()),
            "artist_id": artist_id,
            "values": ["honesty"],
            "goals": ["release EP"],
            "brand": ["coastal"],
        }
        row.update(overrides)
        self.tables["mas_frameworks"].append(row)
        return row

    def add_session(self, artist_id: str, **overrides) -> dict:
        row = {
            "id": str(uuid.uuid4()),
            "artist_id": artist_id,
            "summary": "Kick-off",
            "date": "2024-01-15T10:30:00+00:00",
            "themes": ["ocean"],
        }
        row.update(overrides)
        self.tables["sessions"].append(row)
        return row

    def add_media(self, artist_id: str, path: str, media_type: str = "photo", bucket: str = "lab-upload") -> dict:
        self.objects.setdefault(bucket, {})[path] = b"data"
        row = {
            "id": str(uuid.uuid4()),
            "artist_id": artist_id,
            "type": media_type,
            "url": f"{PUBLIC_URL_BASE}/{bucket}/{path}",
            "description": None,
            "created_at": "2024-01-15T10:30:00+00:00",
            "file_name": path.rsplit("/", 1)[-1],
        }
        self.tables["media"].append(row)
        return row

    def ops(self) -> list[str]:
        """Executed calls as "op:target" strings, for order assertions."""
        return [f"{op}:{target}" for op, target in self.calls]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_supabase():
    """Swap the singleton Supabase client for an in-memory one."""
    fake = FakeSupabase()
    with patch.object(SupabaseClient, "_instance", fake):
        yield fake


@pytest.fixture
def video_duration():
    """Patch ffprobe; set `.return_value` to change the reported duration."""
    probe = AsyncMock(return_value=30.0)
    with patch("core.services.media_service.probe_video_duration", probe):
        yield probe


@pytest.fixture
def make_file():
    """Factory for UploadedFile objects."""
    def _make(filename="photo.png", content_type="image/png", size=16):
        return UploadedFile(filename=filename, content_type=content_type, content=b"x" * size)
    return _make
