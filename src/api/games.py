"""Game catalog API endpoints."""

import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from src.api.dependencies import get_game_service
from src.schemas.game import (
    GameData,
    GameDetailResponse,
    GameListData,
    GameListResponse,
    GameResponse,
    GameStatistics,
    GameStatisticsData,
    GameStatisticsResponse,
    Pagination,
)
from src.services.game_query import FilterRequest, QueryBuildError
from src.services.games import GameService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/games", tags=["games"])

NUMERIC_ID = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)
# Range of the INTEGER id columns; anything outside cannot match a row
MIN_ID, MAX_ID = -(2**31), 2**31 - 1


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _parse_id(value: str, message: str) -> int | None:
    """Parse a path id, or None when it is numeric but outside the column range."""
    if not NUMERIC_ID.fullmatch(value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    number = int(value)
    return number if MIN_ID <= number <= MAX_ID else None


def _game_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")


@router.get("", response_model=GameListResponse)
def list_games(
    games: Annotated[GameService, Depends(get_game_service)],
    search: str | None = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
    min_hours: Annotated[str | None, Query(alias="minHours")] = None,
    max_hours: Annotated[str | None, Query(alias="maxHours")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    order: str | None = None,
    page: str | None = None,
    limit: str | None = None,
):
    """List games with optional filters, sorting and pagination.

    Malformed paging values are clamped and unknown sort columns fall back to
    ``name``; none of the query parameters can cause a 400.
    """
    filters = FilterRequest.from_query(
        search=search,
        min_price=min_price,
        max_price=max_price,
        min_hours=min_hours,
        max_hours=max_hours,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit,
    )
    try:
        result = games.list_games(filters)
    except (SQLAlchemyError, QueryBuildError):
        logger.exception("Error fetching games")
        raise _server_error("Error fetching games") from None

    info = result.page_info
    return GameListResponse(
        data=GameListData(
            games=[GameResponse.model_validate(dict(row)) for row in result.games],
            pagination=Pagination(
                current_page=info.current_page,
                total_pages=info.total_pages,
                total_games=info.total_games,
                games_per_page=info.games_per_page,
                has_next_page=info.has_next_page,
                has_prev_page=info.has_prev_page,
            ),
        )
    )


@router.get("/stats", response_model=GameStatisticsResponse)
def get_game_statistics(
    games: Annotated[GameService, Depends(get_game_service)],
):
    """Price and playtime aggregates across the catalog."""
    try:
        stats = games.get_statistics()
    except SQLAlchemyError:
        logger.exception("Error fetching game statistics")
        raise _server_error("Error fetching game statistics") from None

    return GameStatisticsResponse(
        data=GameStatisticsData(statistics=GameStatistics.model_validate(stats))
    )


@router.get("/steam/{appid}", response_model=GameDetailResponse)
def get_game_by_appid(
    appid: str,
    games: Annotated[GameService, Depends(get_game_service)],
):
    """Get a game by its Steam app id."""
    steam_appid = _parse_id(appid, "Invalid Steam App ID")
    if steam_appid is None:
        raise _game_not_found()
    try:
        game = games.get_game_by_appid(steam_appid)
    except SQLAlchemyError:
        logger.exception("Error fetching game")
        raise _server_error("Error fetching game") from None

    if game is None:
        raise _game_not_found()
    return GameDetailResponse(data=GameData(game=GameResponse.model_validate(dict(game))))


@router.get("/{game_id}", response_model=GameDetailResponse)
def get_game(
    game_id: str,
    games: Annotated[GameService, Depends(get_game_service)],
):
    """Get a game by its catalog id."""
    catalog_id = _parse_id(game_id, "Invalid game ID")
    if catalog_id is None:
        raise _game_not_found()
    try:
        game = games.get_game(catalog_id)
    except SQLAlchemyError:
        logger.exception("Error fetching game")
        raise _server_error("Error fetching game") from None

    if game is None:
        raise _game_not_found()
    return GameDetailResponse(data=GameData(game=GameResponse.model_validate(dict(game))))
