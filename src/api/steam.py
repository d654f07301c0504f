"""Steam account API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_steam_service
from src.schemas.game import OwnedGamesResponse
from src.services.steam import SteamService

router = APIRouter(prefix="/api", tags=["steam"])


@router.get("/owned-games", response_model=OwnedGamesResponse)
async def get_owned_games(
    steam: Annotated[SteamService, Depends(get_steam_service)],
):
    """Games owned by the configured Steam account.

    Upstream failures are left to the application's error handler.
    """
    owned = await steam.get_owned_games()
    if owned is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No games found or user profile is private",
        )

    return OwnedGamesResponse(games=owned["games"], game_count=owned.get("game_count"))
