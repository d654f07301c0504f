"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    db_host: str = Field(default="localhost")
    db_port: int | None = Field(default=None)
    db_user: str = Field(default="steam_user")
    db_password: str = Field(default="")
    db_name: str = Field(default="steam_catalog")
    # Full URL, takes precedence over the individual DB_* parts
    database_url: str | None = Field(default=None)
    db_pool_size: int = Field(default=10, ge=1)
    db_pool_timeout: float | None = Field(default=None)  # None waits for a free connection

    # Server
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=5000)
    static_dir: str = Field(default="public")

    # Steam Web API
    steam_api_base_url: str = Field(default="https://api.steampowered.com")
    steam_api_key: str | None = Field(default=None)
    steam_id: str | None = Field(default=None)
    steam_api_encryption_key: str | None = Field(default=None)  # reserved, not used yet

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    log_level: str = Field(default="INFO")
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production" and self.database_url is None:
            if not self.db_password:
                raise ValueError("DB_PASSWORD must be set in production")
            if self.db_host == "localhost":
                raise ValueError("DB_HOST should not be localhost in production")
        return self

    @property
    def sqlalchemy_url(self) -> str | URL:
        """Database URL for SQLAlchemy, built from the DB_* parts unless DATABASE_URL is set."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
