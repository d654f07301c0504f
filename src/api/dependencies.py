"""FastAPI dependencies for settings, database sessions and services."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from src.config import Settings
from src.database import get_db
from src.services.auth import AuthService
from src.services.games import GameService
from src.services.steam import SteamService


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, bcrypt_rounds=settings.bcrypt_rounds)


def get_game_service(
    db: Annotated[Session, Depends(get_db)],
) -> GameService:
    """Get game service with dependencies."""
    return GameService(db)


def get_steam_service(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SteamService:
    """Get Steam Web API service."""
    return SteamService(settings)
