"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    LoginResponse,
    LoginUser,
    SignupResponse,
    SignupUser,
    UserLogin,
    UserSignup,
)
from src.schemas.game import (
    GameDetailResponse,
    GameListResponse,
    GameResponse,
    GameStatistics,
    GameStatisticsResponse,
    OwnedGamesResponse,
    Pagination,
)

__all__ = [
    "UserLogin",
    "UserSignup",
    "LoginUser",
    "SignupUser",
    "LoginResponse",
    "SignupResponse",
    "GameResponse",
    "Pagination",
    "GameListResponse",
    "GameDetailResponse",
    "GameStatistics",
    "GameStatisticsResponse",
    "OwnedGamesResponse",
]
