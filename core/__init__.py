# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the artist lab's business logic:
# - models/: Pydantic schemas for artists, frameworks, sessions and media
# - services/: Database, storage and workflow operations
#
# Routers call into services; services talk to Supabase via lib/.
# =============================================================================
