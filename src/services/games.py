"""Game catalog service: listing, lookups and statistics."""

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import Session

from src.models.game import Game
from src.services.game_query import GAME_COLUMNS, FilterRequest, GameQueryBuilder, PageInfo

logger = logging.getLogger(__name__)


@dataclass
class GamePage:
    """One page of listing results plus its pagination metadata."""

    games: list[RowMapping]
    page_info: PageInfo


class GameService:
    """Read-only access to the ``steam_games`` table."""

    def __init__(self, db: Session):
        self.db = db

    def list_games(self, filters: FilterRequest) -> GamePage:
        """Run the count and page queries for a filter request."""
        builder = GameQueryBuilder(filters)
        count_stmt = builder.count_statement()
        fetch_stmt = builder.fetch_statement()

        total = self.db.execute(count_stmt).scalar_one()
        games = list(self.db.execute(fetch_stmt).mappings().all())

        logger.debug(f"Listing page {filters.page}: {len(games)} of {total} games")
        return GamePage(
            games=games,
            page_info=PageInfo.compute(total, filters.page, filters.limit),
        )

    def get_game(self, game_id: int) -> RowMapping | None:
        """Get a game by its catalog id."""
        stmt = select(*GAME_COLUMNS).where(Game.id == game_id)
        return self.db.execute(stmt).mappings().first()

    def get_game_by_appid(self, appid: int) -> RowMapping | None:
        """Get a game by its Steam app id."""
        stmt = select(*GAME_COLUMNS).where(Game.steam_appid == appid)
        return self.db.execute(stmt).mappings().first()

    def get_statistics(self) -> dict:
        """Aggregate price and playtime over fully populated rows."""
        stmt = select(
            func.count().label("total_games"),
            func.avg(Game.price_usd).label("avg_price"),
            func.min(Game.price_usd).label("min_price"),
            func.max(Game.price_usd).label("max_price"),
            func.avg(Game.hours_to_beat).label("avg_hours"),
            func.min(Game.hours_to_beat).label("min_hours"),
            func.max(Game.hours_to_beat).label("max_hours"),
            func.avg(Game.cost_per_hour).label("avg_cost_per_hour"),
        ).select_from(Game).where(
            Game.price_usd.is_not(None),
            Game.hours_to_beat.is_not(None),
            Game.cost_per_hour.is_not(None),
        )
        return dict(self.db.execute(stmt).mappings().one())
