"""Shared test fixtures for epic_leaderboard tests."""

from collections.abc import Callable

import httpx
import pytest

from epic_leaderboard import GameCredentials, LeaderboardClient, LeaderboardRef


@pytest.fixture
def base_url() -> str:
    return "https://leaderboard.test"


@pytest.fixture
def game() -> GameCredentials:
    return GameCredentials(game_id="game-123", game_key="key-456")


@pytest.fixture
def board() -> LeaderboardRef:
    return LeaderboardRef(primary_id="main", secondary_id="level-1")


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Every request sent through ``make_client``, in order."""
    return []


@pytest.fixture
def make_client(
    base_url: str,
    requests_seen: list[httpx.Request],
) -> Callable[[Callable[[httpx.Request], httpx.Response]], LeaderboardClient]:
    """Build a LeaderboardClient whose HTTP calls are answered by ``handler``.

    Returns:
        Factory taking a request handler and returning a client bound to ``base_url``.
    """

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> LeaderboardClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        return LeaderboardClient(base_url, http_client=http_client)

    return factory
