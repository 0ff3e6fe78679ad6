# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the ArtistLab API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import ArtistLabException, artistlab_exception_handler
from app.routers import health, wall, artists, preferences
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs configuration on startup and a shutdown marker on exit. The
    Supabase client is created lazily on first use.
    """
    logger.info(f"Starting ArtistLab API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Storage bucket: {settings.STORAGE_BUCKET}")

    yield

    logger.info("Shutting down ArtistLab API")


# Create FastAPI application
app = FastAPI(
    title="ArtistLab API",
    description="""
## Artist Development Lab

Public wall and admin dashboard for artists working through the lab.

### Public

- **Wall** - every artist as a card
- **Profile** - MAS framework (values, goals, brand), session notes and media gallery

### Admin

1. **Create** - multipart form with avatar and media, stored in the `lab-upload` bucket
2. **List** - search by name or project, 8 per page
3. **Edit** - change fields, replace the avatar, add and remove media
4. **Delete** - removes storage files, then the artist and its rows

Workflow outcomes are returned as `notifications`, each with a level
(`success` or `error`) and a message.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Wall",
            "description": "Public artist wall and profiles",
        },
        {
            "name": "Admin",
            "description": "Create, list, edit and delete artists",
        },
        {
            "name": "Preferences",
            "description": "Light/dark theme preference",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ArtistLabException)
async def handle_artistlab_exception(request: Request, exc: ArtistLabException):
    """Handle custom ArtistLab exceptions."""
    return await artistlab_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_error(request: Request, exc: SupabaseClientError):
    """Handle failed reads against Supabase."""
    logger.error(f"Supabase error: {exc}")
    content = {"detail": exc.message, "code": exc.code}
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    return JSONResponse(status_code=502, content=content)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Public wall
app.include_router(
    wall.router,
    prefix="/api/v1/wall",
    tags=["Wall"]
)

# Admin dashboard
app.include_router(
    artists.router,
    prefix="/api/v1/admin/artists",
    tags=["Admin"]
)

# Theme preference
app.include_router(
    preferences.router,
    prefix="/api/v1/preferences",
    tags=["Preferences"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "ArtistLab API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
