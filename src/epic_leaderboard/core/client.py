"""EpicLeaderboard HTTP API client.

Three endpoints under one base URL:
    GET  /api/getScores               JSON scores list
    POST /api/submitScore             form-encoded body, status only
    GET  /api/isUsernameAvailable_v2  plain-text code "0".."3"

No authentication header. The game key travels only in the submit form body.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping, Optional, Union

import httpx

from .. import __version__
from .encoding import deserialize_meta, encode_params, format_number, serialize_meta
from .errors import ClientError
from .models import (
    EntriesResult,
    Entry,
    GameCredentials,
    LeaderboardRef,
    Timeframe,
    UsernameAvailability,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://epicleaderboard.com"
USER_AGENT = f"X-EpicLeaderboard Python/{__version__}"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
HTTP_UNAVAILABLE_MESSAGE = (
    "HTTP client not available: the httpx.AsyncClient passed to LeaderboardClient has been closed."
)

USERNAME_CODES: dict[str, UsernameAvailability] = {
    "0": UsernameAvailability.AVAILABLE,
    "2": UsernameAvailability.PROFANITY,
    "3": UsernameAvailability.TAKEN,
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_rank(value: object) -> int:
    """Read a rank the way JavaScript's parseInt would; 0 when unusable."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        rank = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        rank = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return 0
        rank = int(match.group(1))
    else:
        return 0
    return rank if rank >= 0 else 0


def _text_field(value: object) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return ""


def _parse_entry(raw: object) -> Entry:
    """Map one score object to an Entry, defaulting every missing field."""
    if not isinstance(raw, dict):
        return Entry()
    return Entry(
        rank=_parse_rank(raw.get("rank")),
        username=_text_field(raw.get("username")),
        score=_text_field(raw.get("score")),
        country=_text_field(raw.get("country")),
        meta=deserialize_meta(raw.get("meta")),
    )


def _parse_entries(data: object) -> EntriesResult:
    if not isinstance(data, dict):
        return EntriesResult()

    scores = data.get("scores")
    entries = [_parse_entry(item) for item in scores] if isinstance(scores, list) else []

    player = data.get("playerscore")
    player_entry = _parse_entry(player) if player else None

    return EntriesResult(entries=entries, player_entry=player_entry)


class LeaderboardClient:
    """Async client for one EpicLeaderboard server.

    Holds no per-call state, so one instance can serve concurrent tasks.
    Pass ``http_client`` to share a connection pool (the caller owns and
    closes it); otherwise every call opens a short-lived ``httpx.AsyncClient``.
    ``timeout`` is forwarded to those short-lived clients; ``None`` means
    requests never time out on their own. Redirects are always followed,
    whatever the injected client's own ``follow_redirects`` setting.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[Union[float, httpx.Timeout]] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    async def fetch_entries(
        self,
        game: GameCredentials,
        leaderboard: LeaderboardRef,
        username: str,
        timeframe: Timeframe = Timeframe.ALL_TIME,
        around_player: bool = True,
        local_only: bool = False,
    ) -> EntriesResult:
        """Fetch ranked entries for a leaderboard.

        Args:
            game: Game whose leaderboard is read. The key is not sent.
            leaderboard: Primary/secondary leaderboard ids.
            username: Player to locate; fills ``player_entry`` when known.
            timeframe: Scoring window.
            around_player: Return the entries surrounding the player instead of the top.
            local_only: Restrict to the requester's country.

        Returns:
            EntriesResult in server (rank) order.

        Raises:
            ClientError: on a non-2xx status or a transport/decoding failure.
        """
        params = {
            "gameID": game.game_id,
            "primaryID": leaderboard.primary_id,
            "secondaryID": leaderboard.secondary_id,
            "username": username,
            "timeframe": str(int(timeframe)),
            "around": "1" if around_player else "0",
            "local": "1" if local_only else "0",
        }
        url = f"{self._base_url}/api/getScores?{encode_params(params)}"
        response = await self._request("GET", url, operation="get leaderboard entries")
        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Undecodable leaderboard response from %s: %s", self._base_url, exc)
            raise ClientError(f"Failed to get leaderboard entries: {exc}") from exc
        return _parse_entries(data)

    async def submit_entry(
        self,
        game: GameCredentials,
        leaderboard: LeaderboardRef,
        username: str,
        score: Union[int, float],
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Submit a score with optional string metadata.

        Raises:
            ClientError: on a non-2xx status or a transport failure.
        """
        params = {
            "gameID": game.game_id,
            "gameKey": game.game_key,
            "primaryID": leaderboard.primary_id,
            "secondaryID": leaderboard.secondary_id,
            "username": username,
            "score": format_number(score),
            "meta": serialize_meta(metadata or {}),
        }
        await self._request(
            "POST",
            f"{self._base_url}/api/submitScore",
            operation="submit leaderboard entry",
            content=encode_params(params),
            content_type=FORM_CONTENT_TYPE,
        )

    async def check_username_available(
        self,
        game: GameCredentials,
        username: str,
    ) -> UsernameAvailability:
        """Ask whether ``username`` can be used. Unknown answers map to INVALID."""
        params = {"gameID": game.game_id, "username": username}
        url = f"{self._base_url}/api/isUsernameAvailable_v2?{encode_params(params)}"
        response = await self._request("GET", url, operation="check username availability")
        return USERNAME_CODES.get(response.text, UsernameAvailability.INVALID)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        content: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> httpx.Response:
        """Send one request and return the successful response.

        Redirects are followed. Every failure leaves as a ClientError named
        after ``operation``.
        """
        if self._http_client is not None and self._http_client.is_closed:
            raise ClientError(HTTP_UNAVAILABLE_MESSAGE)

        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if content_type:
            headers["Content-Type"] = content_type

        logger.debug("%s %s", method, url.split("?", 1)[0])
        try:
            if self._http_client is not None:
                response = await self._http_client.request(
                    method, url, headers=headers, content=content, follow_redirects=True
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(
                        method, url, headers=headers, content=content, follow_redirects=True
                    )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Request to %s failed: %s", self._base_url, exc)
            raise ClientError(f"Failed to {operation}: {exc}") from exc

        if not response.is_success:
            logger.warning("%s %s returned HTTP %d", method, url.split("?", 1)[0], response.status_code)
            raise ClientError(f"Failed to {operation}: {response.status_code}", response.status_code)
        return response
