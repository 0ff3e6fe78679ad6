# =============================================================================
# tests/test_routers.py - API Endpoint Tests
# =============================================================================
# This module contains tests for the HTTP layer:
# - Public wall and profile endpoints
# - Admin create/list/get/update/delete endpoints (multipart forms)
# - Theme preference cookie
# - Health checks and error responses
#
# Requests go through FastAPI's TestClient against the in-memory Supabase.
# =============================================================================

import uuid

import pytest
from fastapi.testclient import TestClient

from app.main import app
from tests.conftest import FakeAPIError

ADMIN = "/api/v1/admin/artists"

FORM = {
    "name": "Nova Reyes",
    "project_name": "Tidal",
    "project_description": "A debut EP",
    "campaign_statement": "Music for the in-between",
    "current_stage": "Launch",
    "values": "a, b, b",
    "goals": "tour",
    "brand": "warm",
    "session_summary": "Kick-off",
    "themes": "ocean",
}


@pytest.fixture
def client(fake_supabase):
    return TestClient(app)


# =============================================================================
# Wall Tests
# =============================================================================

class TestWall:
    """Tests for the public wall."""

    def test_lists_cards(self, client, fake_supabase):
        fake_supabase.add_artist(name="Nova")
        fake_supabase.add_artist(name="Kai")

        response = client.get("/api/v1/wall")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [a["name"] for a in body["artists"]] == ["Nova", "Kai"]
        assert set(body["artists"][0]) == {"id", "name", "project_name", "avatar_url", "current_stage"}

    def test_profile(self, client, fake_supabase):
        artist = fake_supabase.add_artist()
        fake_supabase.add_framework(artist["id"])
        fake_supabase.add_session(artist["id"])
        fake_supabase.add_media(artist["id"], f"media/{artist['id']}/a.png")
        fake_supabase.add_media(artist["id"], f"media/{artist['id']}/brief.pdf", "moodboard")

        response = client.get(f"/api/v1/wall/{artist['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["artist"]["id"] == artist["id"]
        assert body["framework"]["values"] == ["honesty"]
        assert len(body["sessions"]) == 1
        assert body["gallery"]["counts"]["all"] == 2
        assert body["gallery"]["counts"]["image"] == 2
        assert body["gallery"]["items"][1]["file_extension"] == "PDF"

    def test_profile_not_found(self, client):
        response = client.get(f"/api/v1/wall/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == "ARTIST_NOT_FOUND"

    def test_profile_bad_id(self, client):
        assert client.get("/api/v1/wall/not-a-uuid").status_code == 422

    def test_read_failure(self, client, fake_supabase):
        """Test backend read errors come back as 502 with a code."""
        fake_supabase.failures[("artists", "select")] = FakeAPIError("connection refused")

        response = client.get("/api/v1/wall")

        assert response.status_code == 502
        assert response.json()["code"] == "FETCH_ARTISTS_FAILED"


# =============================================================================
# Admin Tests
# =============================================================================

class TestAdminCreate:
    """Tests for POST /admin/artists."""

    def test_create_with_files(self, client, fake_supabase):
        response = client.post(
            ADMIN,
            data=FORM,
            files=[
                ("avatar", ("me.png", b"img", "image/png")),
                ("media", ("a.png", b"1", "image/png")),
                ("media", ("b.pdf", b"2", "application/pdf")),
            ],
        )

        assert response.status_code == 201
        body = response.json()
        assert body["artist"]["current_stage"] == "Launch"
        assert body["media_stored"] == 2
        assert body["notifications"][0] == {
            "level": "success",
            "message": "Artist profile created successfully!",
        }
        assert fake_supabase.tables["mas_frameworks"][0]["values"] == ["a", "b", "b"]

    def test_create_without_files(self, client, fake_supabase):
        response = client.post(ADMIN, data=FORM)

        assert response.status_code == 201
        assert fake_supabase.tables["media"] == []

    def test_blank_required_field(self, client, fake_supabase):
        response = client.post(ADMIN, data={**FORM, "name": " "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Please fill in all required fields."
        assert fake_supabase.tables["artists"] == []

    def test_unknown_stage(self, client):
        assert client.post(ADMIN, data={**FORM, "current_stage": "Touring"}).status_code == 422

    def test_insert_error(self, client, fake_supabase):
        fake_supabase.failures[("artists", "insert")] = FakeAPIError("new row violates policy")

        response = client.post(ADMIN, data=FORM)

        assert response.status_code == 502
        assert response.json()["detail"] == "Artist insert error: new row violates policy"


class TestAdminList:
    """Tests for GET /admin/artists."""

    def test_search_and_page(self, client, fake_supabase):
        for i in range(9):
            fake_supabase.add_artist(name=f"Nova {i}")
        fake_supabase.add_artist(name="Kai")

        body = client.get(ADMIN, params={"search": "nova", "page": 2}).json()

        assert body["total"] == 10
        assert body["filtered_total"] == 9
        assert body["total_pages"] == 2
        assert [a["name"] for a in body["artists"]] == ["Nova 8"]

    def test_invalid_page(self, client):
        assert client.get(ADMIN, params={"page": 0}).status_code == 422


class TestAdminUpdate:
    """Tests for GET and PUT /admin/artists/{id}."""

    def test_get_details(self, client, fake_supabase):
        artist = fake_supabase.add_artist()
        fake_supabase.add_media(artist["id"], f"media/{artist['id']}/a.png")

        body = client.get(f"{ADMIN}/{artist['id']}").json()

        assert body["artist"]["name"] == "Nova Reyes"
        assert body["framework"] is None
        assert len(body["media"]) == 1

    def test_update_with_media_diff(self, client, fake_supabase, video_duration):
        artist = fake_supabase.add_artist()
        aid = artist["id"]
        first = fake_supabase.add_media(aid, f"media/{aid}/1.png")
        second = fake_supabase.add_media(aid, f"media/{aid}/2.png")
        fake_supabase.add_media(aid, f"media/{aid}/3.png")

        response = client.put(
            f"{ADMIN}/{aid}",
            data={**FORM, "name": "Nova R.", "media_to_delete": [first["id"], second["id"]]},
            files=[("media", ("clip.mp4", b"v", "video/mp4"))],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["artist"]["name"] == "Nova R."
        assert body["media_deleted"] == 2
        assert body["media_stored"] == 1
        assert len(fake_supabase.tables["media"]) == 2

    def test_update_missing_fields(self, client, fake_supabase):
        artist = fake_supabase.add_artist()

        response = client.put(f"{ADMIN}/{artist['id']}", data={"name": "Only a name"})

        assert response.status_code == 400
        assert "project_name" in response.json()["details"]["fields"]


class TestAdminDelete:
    """Tests for DELETE /admin/artists/{id}."""

    def test_delete(self, client, fake_supabase):
        artist = fake_supabase.add_artist()
        fake_supabase.add_media(artist["id"], f"media/{artist['id']}/a.png")

        response = client.delete(f"{ADMIN}/{artist['id']}")

        assert response.status_code == 200
        assert response.json()["files_removed"] == 1
        assert fake_supabase.tables["artists"] == []

    def test_delete_permission_denied(self, client, fake_supabase):
        artist = fake_supabase.add_artist()
        fake_supabase.failures[("artists", "delete")] = FakeAPIError("denied", code="42501")

        response = client.delete(f"{ADMIN}/{artist['id']}")

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"

    def test_delete_unknown(self, client):
        assert client.delete(f"{ADMIN}/{uuid.uuid4()}").status_code == 404


# =============================================================================
# Preferences & Health Tests
# =============================================================================

class TestThemePreference:
    """Tests for the theme cookie."""

    def test_defaults_to_light(self, client):
        assert client.get("/api/v1/preferences/theme").json() == {"theme": "light"}

    def test_saved_theme_is_returned(self, client):
        response = client.put("/api/v1/preferences/theme", json={"theme": "dark"})

        assert response.status_code == 200
        assert "theme=dark" in response.headers["set-cookie"]
        assert client.get("/api/v1/preferences/theme").json() == {"theme": "dark"}

    def test_invalid_theme(self, client):
        assert client.put("/api/v1/preferences/theme", json={"theme": "sepia"}).status_code == 422


class TestHealth:
    """Tests for health endpoints."""

    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "healthy"

    def test_ready(self, client):
        body = client.get("/api/v1/health/ready").json()
        assert body["status"] == "ready"
        assert body["checks"] == {"database": "healthy", "storage": "healthy"}

    def test_root(self, client):
        assert client.get("/").json()["name"] == "ArtistLab API"


def test_openapi_examples():
    """Test response examples are published in the schema."""
    schemas = app.openapi()["components"]["schemas"]

    assert schemas["WallResponse"]["properties"]["total"]["example"] == 12
    assert schemas["DeleteArtistResponse"]["properties"]["files_removed"]["example"] == 3
