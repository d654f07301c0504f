"""Game catalog schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GameResponse(BaseModel):
    """Single catalog row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    steam_appid: int
    price_usd: float | None
    hours_to_beat: float | None
    cost_per_hour: float | None
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    """Pagination metadata, serialized in camelCase for the dashboard."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    total_pages: int
    total_games: int
    games_per_page: int
    has_next_page: bool
    has_prev_page: bool


class GameListData(BaseModel):
    games: list[GameResponse]
    pagination: Pagination


class GameListResponse(BaseModel):
    """Response for the filtered game listing."""

    success: bool = True
    data: GameListData


class GameData(BaseModel):
    game: GameResponse


class GameDetailResponse(BaseModel):
    """Response for a single game lookup."""

    success: bool = True
    data: GameData


class GameStatistics(BaseModel):
    """Aggregates over rows that have price, hours and cost per hour."""

    total_games: int
    avg_price: float | None
    min_price: float | None
    max_price: float | None
    avg_hours: float | None
    min_hours: float | None
    max_hours: float | None
    avg_cost_per_hour: float | None


class GameStatisticsData(BaseModel):
    statistics: GameStatistics


class GameStatisticsResponse(BaseModel):
    success: bool = True
    data: GameStatisticsData


class OwnedGamesResponse(BaseModel):
    """Owned games as reported by the Steam Web API."""

    success: bool = True
    games: list[dict]
    game_count: int | None = None
