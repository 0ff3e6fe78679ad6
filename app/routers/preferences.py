# =============================================================================
# app/routers/preferences.py - UI Preferences
# =============================================================================
# The light/dark theme is the only state kept on the client. It lives in a
# cookie so both the wall and the admin dashboard pick it up.
# =============================================================================

from enum import Enum
from typing import Annotated

from fastapi import APIRouter, Cookie, Response
from pydantic import BaseModel

router = APIRouter()

THEME_COOKIE = "theme"
ONE_YEAR = 60 * 60 * 24 * 365


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class ThemePreference(BaseModel):
    theme: Theme


@router.get("/theme", response_model=ThemePreference)
async def get_theme(
    theme: Annotated[str | None, Cookie()] = None,
):
    """
    Get the saved theme; light when nothing valid is saved.
    """
    if theme not in {t.value for t in Theme}:
        return ThemePreference(theme=Theme.LIGHT)
    return ThemePreference(theme=Theme(theme))


@router.put("/theme", response_model=ThemePreference)
async def set_theme(preference: ThemePreference, response: Response):
    """
    Save the theme in a long-lived cookie.
    """
    response.set_cookie(
        key=THEME_COOKIE,
        value=preference.theme.value,
        max_age=ONE_YEAR,
        samesite="lax",
    )
    return preference
