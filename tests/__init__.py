# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the ArtistLab API:
# - test_utils.py: Tag parsing and storage path helpers
# - test_models.py: Pydantic model validation and gallery grouping
# - test_dependencies.py: Reading multipart uploads
# - test_storage_service.py: Bucket uploads, public URLs, removal
# - test_media_service.py: Upload rules (size, duration, MIME type)
# - test_artist_service.py: Listing, details and deletes
# - test_profile_workflow.py: Create and edit workflows
# - test_routers.py: HTTP endpoints through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
