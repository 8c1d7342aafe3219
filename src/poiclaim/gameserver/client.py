"""
CFTools Data API client.

API Docs: https://developer.cftools.cloud/documentation/data-api

Endpoints used:
- POST /auth/register - Exchange application credentials for a bearer token
- GET /server/{id}/info - Server metadata
- GET /server/{id}/GSM/list - Online players with live positions
- POST /server/{id}/message-server - Broadcast a chat message
- POST /server/{id}/hephaistos/webhook - Register the chat webhook

Auth: application id + secret, bearer token valid for 24 hours.
Every request must carry the application id as User-Agent.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from poiclaim.catalog import Position
from poiclaim.config import settings
from poiclaim.gameserver.base import DeliveryError, MessageChannel
from poiclaim.gameserver.rate_limiter import RateLimitConfig, RateLimitedClient, RateLimiter

logger = logging.getLogger(__name__)

TOKEN_LIFETIME_SECONDS = 24 * 60 * 60
TOKEN_REFRESH_MARGIN_SECONDS = 60


class CFToolsError(Exception):
    """Raised when a CFTools API call fails."""

    pass


class CFToolsAuthError(CFToolsError):
    """Raised when authentication with CFTools fails."""

    pass


@dataclass
class TokenCache:
    """Cached bearer token."""

    token: str
    expires_at: float  # time.monotonic() seconds


class CFToolsClient:
    """
    Async client for the CFTools Data API.

    Tokens are cached until shortly before their 24 hour expiry and
    refreshed transparently; a 401 response forces one refresh and retry.
    """

    def __init__(
        self,
        application_id: Optional[str] = None,
        application_secret: Optional[str] = None,
        server_api_id: Optional[str] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        """
        Initialize the CFTools client.

        Args:
            application_id: CFTools application id (defaults to settings)
            application_secret: CFTools application secret (defaults to settings)
            server_api_id: Server API id from the CFTools dashboard (defaults to settings)
            base_url: Override base URL (useful for testing)
            http_client: Pre-built httpx client (useful for testing)
            rate_limiter: Limiter shared by all requests
        """
        self.application_id = application_id or settings.cftools_application_id
        self.application_secret = application_secret or settings.cftools_application_secret
        self.server_api_id = server_api_id or settings.cftools_server_api_id
        self.base_url = (base_url or settings.cftools_base_url).rstrip("/")

        self._token_cache: Optional[TokenCache] = None

        if not self.is_configured:
            logger.warning(
                "CFTools credentials not configured. Set CFTOOLS_APPLICATION_ID, "
                "CFTOOLS_APPLICATION_SECRET and CFTOOLS_SERVER_API_ID."
            )

        self._raw_client = http_client or httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=15.0,
        )
        self._client = RateLimitedClient(
            self._raw_client,
            rate_limiter or RateLimiter(RateLimitConfig(requests_per_window=30, window_seconds=60.0)),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.application_id and self.application_secret and self.server_api_id)

    @property
    def server_url(self) -> str:
        return f"{self.base_url}/server/{self.server_api_id}"

    async def authenticate(self) -> str:
        """Fetch a new bearer token and cache it."""
        if not self.is_configured:
            raise CFToolsAuthError("CFTools credentials not configured")

        try:
            response = await self._raw_client.post(
                f"{self.base_url}/auth/register",
                json={
                    "application_id": self.application_id,
                    "secret": self.application_secret,
                },
                headers={"User-Agent": self.application_id},
            )
            response.raise_for_status()
            token = response.json()["token"]
        except httpx.HTTPStatusError as e:
            logger.error(f"CFTools authentication failed: {e.response.status_code} {e.response.text}")
            raise CFToolsAuthError("Failed to authenticate with CFTools API") from e
        except httpx.RequestError as e:
            logger.error(f"CFTools authentication request failed: {e}")
            raise CFToolsAuthError("Failed to authenticate with CFTools API") from e
        except (KeyError, ValueError) as e:
            logger.error(f"Invalid CFTools token response: {e}")
            raise CFToolsAuthError("Invalid CFTools token response") from e

        self._token_cache = TokenCache(
            token=token,
            expires_at=time.monotonic() + TOKEN_LIFETIME_SECONDS - TOKEN_REFRESH_MARGIN_SECONDS,
        )
        logger.info("Authenticated with CFTools API")
        return token

    async def _get_token(self) -> str:
        if self._token_cache and self._token_cache.expires_at > time.monotonic():
            return self._token_cache.token
        return await self.authenticate()

    async def _authorized_request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Make an authorized request against the server API.

        Raises:
            CFToolsError: On HTTP or transport errors
        """
        url = f"{self.server_url}{path}"

        for attempt in range(2):
            token = await self._get_token()
            headers = {
                "Authorization": f"Bearer {token}",
                "User-Agent": self.application_id,
            }
            try:
                response = await self._client.request(method, url, headers=headers, **kwargs)
            except httpx.RequestError as e:
                raise CFToolsError(f"CFTools request to {path} failed: {e}") from e

            if response.status_code == 401:
                self._token_cache = None
                if attempt == 0:
                    logger.info("CFTools token rejected, re-authenticating")
                    continue
                break

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise CFToolsError(
                    f"CFTools API error for {path}: {e.response.status_code} {e.response.text}"
                ) from e
            return response

        raise CFToolsAuthError("CFTools rejected a freshly issued token")

    @staticmethod
    def _json(response: httpx.Response, path: str) -> Any:
        """Decode a JSON body, mapping malformed payloads to CFToolsError."""
        try:
            return response.json()
        except ValueError as e:
            raise CFToolsError(f"CFTools returned invalid JSON for {path}: {e}") from e

    async def send_message(self, content: str) -> None:
        """Broadcast a message to the in-game chat."""
        await self._authorized_request("POST", "/message-server", json={"content": content})
        logger.info(f"Sent message to in-game chat: {content!r}")

    async def get_server_info(self) -> dict[str, Any]:
        response = await self._authorized_request("GET", "/info")
        return self._json(response, "/info")

    async def list_players(self) -> list[dict[str, Any]]:
        """
        Online players as reported by the game session manager.

        Raises:
            CFToolsError: If the response is not a player list
        """
        response = await self._authorized_request("GET", "/GSM/list")
        data = self._json(response, "/GSM/list")
        if not isinstance(data, dict):
            raise CFToolsError(f"Unexpected CFTools player list payload: {type(data).__name__}")

        players = data.get("players") or []
        if not isinstance(players, list):
            raise CFToolsError(f"Unexpected CFTools players field: {type(players).__name__}")
        return [p for p in players if isinstance(p, dict)]

    async def get_player_position(self, player_name: str) -> Optional[Position]:
        """
        Latest known position of an online player.

        Returns None if the player is not online or has no usable position data.
        """
        players = await self.list_players()
        wanted = player_name.casefold()
        player = next(
            (p for p in players if str(p.get("name", "")).casefold() == wanted),
            None,
        )
        if player is None:
            logger.info(f"Player '{player_name}' not found in CFTools player list")
            return None

        try:
            latest = player["live"]["position"]["latest"]
            x, y, z = (float(v) for v in latest[:3])
        except (KeyError, TypeError, ValueError) as e:
            logger.info(f"Player '{player_name}' has no valid latest position: {e!r}")
            return None

        return (x, y, z)

    async def register_webhook(
        self,
        url: str,
        secret: str,
        events: Optional[list[str]] = None,
    ) -> dict[str, Any]:
        """Register the Hephaistos webhook that delivers chat events."""
        response = await self._authorized_request(
            "POST",
            "/hephaistos/webhook",
            json={"url": url, "secret": secret, "events": events or ["user.chat"]},
        )
        data = self._json(response, "/hephaistos/webhook") if response.content else {}
        if not isinstance(data, dict):
            data = {}
        if data.get("status"):
            logger.info(f"Hephaistos webhook registered at {url}")
        else:
            logger.warning("Webhook might already exist or needs manual validation in CFTools Cloud")
        return data

    async def close(self) -> None:
        await self._client.aclose()


class CFToolsMessageChannel(MessageChannel):
    """Delivers chat messages through the CFTools message-server endpoint."""

    def __init__(self, client: CFToolsClient):
        self.client = client

    @property
    def channel_name(self) -> str:
        return "cftools"

    async def send(self, content: str) -> None:
        try:
            await self.client.send_message(content)
        except CFToolsError as e:
            raise DeliveryError(str(e)) from e
