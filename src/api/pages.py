"""Static HTML pages for the login form, signup form and dashboard."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from src.api.dependencies import get_app_settings
from src.config import Settings

router = APIRouter(tags=["pages"], include_in_schema=False)


def _page(settings: Settings, filename: str) -> FileResponse:
    path = Path(settings.static_dir) / filename
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Endpoint not found")
    return FileResponse(path, media_type="text/html")


@router.get("/")
async def login_page(settings: Annotated[Settings, Depends(get_app_settings)]):
    return _page(settings, "login.html")


@router.get("/dashboard")
async def dashboard_page(settings: Annotated[Settings, Depends(get_app_settings)]):
    return _page(settings, "index.html")


@router.get("/signup")
async def signup_page(settings: Annotated[Settings, Depends(get_app_settings)]):
    return _page(settings, "signup.html")
