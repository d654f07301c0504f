"""Steam game catalog model."""

from sqlalchemy import Column, Integer, Numeric, String

from src.database import Base
from src.models.mixins import TimestampMixin


class Game(Base, TimestampMixin):
    """Catalog entry for a Steam game.

    Rows are loaded out-of-band (see ``scripts/seed_demo_data.py``); the API only reads them.
    ``cost_per_hour`` is stored as price_usd / hours_to_beat by whoever writes the row.
    """

    __tablename__ = "steam_games"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    steam_appid = Column(Integer, unique=True, nullable=False, index=True)
    price_usd = Column(Numeric(10, 2), nullable=True)
    hours_to_beat = Column(Numeric(8, 2), nullable=True)
    cost_per_hour = Column(Numeric(10, 4), nullable=True)
