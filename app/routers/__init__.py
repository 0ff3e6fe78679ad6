# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - wall.py: Public artist wall and profile view
# - artists.py: Admin create/list/edit/delete endpoints
# - preferences.py: Light/dark theme preference
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import wall
from . import artists
from . import preferences

__all__ = [
    "health",
    "wall",
    "artists",
    "preferences",
]
