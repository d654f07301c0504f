"""SQLAlchemy models."""

from src.models.game import Game
from src.models.user import User

__all__ = [
    "User",
    "Game",
]
