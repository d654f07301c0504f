#!/usr/bin/env python3
"""Seed a demo user and a sample Steam game catalog.

The catalog is read-only over HTTP, so this script is how ``steam_games``
gets rows in development. cost_per_hour is derived here, at write time.

Usage:
    # From project root, with DB_* (or DATABASE_URL) set in the environment or .env:
    python scripts/seed_demo_data.py
"""

import os
import sys
from decimal import ROUND_HALF_UP, Decimal

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config import get_settings
from src.database import create_db_engine, create_session_factory, init_db
from src.models import Game, User
from src.services.auth import get_password_hash

DEMO_USERNAME = "demo_user"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demopass123"

# (name, steam appid, price in USD, hours to beat)
DEMO_GAMES = [
    ("Portal", 400, "9.99", "3.5"),
    ("Portal 2", 620, "9.99", "8.5"),
    ("Half-Life 2", 220, "9.99", "13.0"),
    ("Hollow Knight", 367520, "14.99", "27.5"),
    ("Celeste", 504230, "19.99", "8.0"),
    ("Stardew Valley", 413150, "14.99", "53.0"),
    ("Hades", 1145360, "24.99", "22.5"),
    ("Terraria", 105600, "9.99", "52.0"),
    ("The Witcher 3: Wild Hunt", 292030, "39.99", "51.5"),
    ("Disco Elysium", 632470, "39.99", "23.0"),
    ("Outer Wilds", 753640, "24.99", "16.5"),
    ("Baba Is You", 736260, "14.99", None),
    ("Team Fortress 2", 440, "0.00", None),
]


def cost_per_hour(price: Decimal | None, hours: Decimal | None) -> Decimal | None:
    """Price divided by hours to beat, or None when either is unknown."""
    if price is None or not hours:
        return None
    return (price / hours).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)


def seed_demo_data():
    """Seed the configured database with a demo user and catalog."""
    settings = get_settings()
    engine = create_db_engine(settings)
    init_db(engine)
    session = create_session_factory(engine)()

    try:
        existing_user = session.query(User).filter_by(username=DEMO_USERNAME).first()
        if existing_user:
            print("Demo data already exists. Clearing and re-seeding...")
            session.delete(existing_user)
        session.query(Game).filter(
            Game.steam_appid.in_([appid for _, appid, _, _ in DEMO_GAMES])
        ).delete(synchronize_session=False)
        session.commit()

        print("Creating demo user...")
        session.add(
            User(
                username=DEMO_USERNAME,
                email=DEMO_EMAIL,
                password_hash=get_password_hash(DEMO_PASSWORD, settings.bcrypt_rounds),
            )
        )

        print(f"Creating {len(DEMO_GAMES)} games...")
        for name, appid, price, hours in DEMO_GAMES:
            price_usd = Decimal(price)
            hours_to_beat = Decimal(hours) if hours is not None else None
            session.add(
                Game(
                    name=name,
                    steam_appid=appid,
                    price_usd=price_usd,
                    hours_to_beat=hours_to_beat,
                    cost_per_hour=cost_per_hour(price_usd, hours_to_beat),
                )
            )

        session.commit()
        print("Demo data seeded successfully!")

    except Exception as e:
        session.rollback()
        print(f"Error seeding demo data: {e}")
        raise
    finally:
        session.close()
        engine.dispose()


if __name__ == "__main__":
    seed_demo_data()
