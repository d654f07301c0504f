"""Pytest configuration and fixtures."""

import itertools
import os
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src import models  # noqa: F401
from src.config import Settings
from src.database import Base, get_db
from src.main import create_app
from src.models import Game

# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/steam_catalog", "/steam_catalog_test"
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

STATIC_DIR = Path(__file__).resolve().parent.parent / "public"


@pytest.fixture(scope="session")
def test_settings():
    """Settings for the application under test."""
    return Settings(
        _env_file=None,
        database_url=SQLALCHEMY_DATABASE_URL,
        bcrypt_rounds=4,
        static_dir=str(STATIC_DIR),
        steam_api_base_url="https://steam.test",
        steam_api_key="test-key",
        steam_id="76561197960287930",
        environment="test",
    )


@pytest.fixture(scope="session")
def app(test_settings):
    """Application built from the test settings."""
    return create_app(test_settings)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(app, db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def unsafe_client(app, client):
    """Test client that returns 500 responses instead of re-raising server errors."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """Sign up a user and return the submitted credentials plus the new id."""
    credentials = {"username": "player_one", "email": "player@example.com", "password": "secret123"}
    response = client.post("/api/signup", json=credentials)
    assert response.status_code == 201
    return {**credentials, "id": response.json()["user"]["id"]}


@pytest.fixture
def make_game(db):
    """Factory that inserts a catalog row, deriving cost_per_hour from price and hours."""
    appids = itertools.count(1000)

    def _make_game(name, price="9.99", hours="10", appid=None, cost_per_hour="derive"):
        price_usd = Decimal(price) if price is not None else None
        hours_to_beat = Decimal(hours) if hours is not None else None
        if cost_per_hour == "derive":
            cost_per_hour = (
                price_usd / hours_to_beat if price_usd is not None and hours_to_beat else None
            )
        game = Game(
            name=name,
            steam_appid=appid if appid is not None else next(appids),
            price_usd=price_usd,
            hours_to_beat=hours_to_beat,
            cost_per_hour=cost_per_hour,
        )
        db.add(game)
        db.commit()
        db.refresh(game)
        return game

    return _make_game
