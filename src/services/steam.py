"""Steam Web API client for the owned-games lookup."""

import logging

import httpx

from src.config import Settings

logger = logging.getLogger(__name__)


class SteamService:
    """Service for fetching a player's library from the Steam Web API."""

    OWNED_GAMES_PATH = "/IPlayerService/GetOwnedGames/v0001/"

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = settings.steam_api_base_url.rstrip("/")
        self.api_key = settings.steam_api_key
        self.steam_id = settings.steam_id
        self.timeout = 30.0
        self._transport = transport

    async def get_owned_games(self) -> dict | None:
        """Fetch the configured account's owned games.

        Returns:
            The upstream ``response`` object when it lists games, or None when
            the account has no games or its profile is private.

        Raises:
            httpx.HTTPError: on transport failures and non-2xx upstream responses.
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(
                f"{self.base_url}{self.OWNED_GAMES_PATH}",
                params={
                    "key": self.api_key,
                    "steamid": self.steam_id,
                    "include_appinfo": 1,
                    "format": "json",
                },
            )
            response.raise_for_status()
            data = response.json()

        owned = data.get("response") or {}
        if owned.get("games") is None:
            logger.info(f"No owned games returned for Steam ID {self.steam_id}")
            return None
        return owned
