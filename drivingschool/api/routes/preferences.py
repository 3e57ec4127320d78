from fastapi import APIRouter, Request, Response

from drivingschool.config import settings
from drivingschool.schemas.user import Theme, ThemeUpdate

router = APIRouter(prefix="/preferences", tags=["Préférences"])

ONE_YEAR = 365 * 24 * 3600

@router.get("/theme", response_model=ThemeUpdate)
async def get_theme(request: Request):
    """Thème clair/sombre mémorisé côté navigateur"""
    value = request.cookies.get(settings.THEME_COOKIE_NAME)
    theme = Theme(value) if value in Theme._value2member_map_ else Theme.LIGHT
    return ThemeUpdate(theme=theme)

@router.put("/theme", response_model=ThemeUpdate)
async def set_theme(request: ThemeUpdate, response: Response):
    response.set_cookie(settings.THEME_COOKIE_NAME, request.theme.value, max_age=ONE_YEAR, samesite="lax")
    return request
