"""Tests for the MCP tools (environment config and mocked client)."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from epic_leaderboard import (
    ClientError,
    EntriesResult,
    Entry,
    GameCredentials,
    LeaderboardClient,
    LeaderboardRef,
    Timeframe,
    UsernameAvailability,
)
from epic_leaderboard import server


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EPICLEADERBOARD_GAME_ID", "game-123")
    monkeypatch.setenv("EPICLEADERBOARD_GAME_KEY", "key-456")
    monkeypatch.delenv("EPICLEADERBOARD_URL", raising=False)


@pytest.fixture
def mock_client() -> MagicMock:
    """LeaderboardClient with async methods stubbed out."""
    client = MagicMock(spec=LeaderboardClient)
    client.fetch_entries = AsyncMock(return_value=EntriesResult())
    client.submit_entry = AsyncMock(return_value=None)
    client.check_username_available = AsyncMock(return_value=UsernameAvailability.AVAILABLE)
    with patch.object(server, "_get_client", return_value=client):
        yield client


class TestConfig:
    """Tests for environment-driven configuration."""

    def test_base_url_defaults(self, env) -> None:
        assert server._get_base_url() == "https://epicleaderboard.com"

    def test_base_url_override(self, env, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EPICLEADERBOARD_URL", "https://staging.example.com")
        assert server._get_base_url() == "https://staging.example.com"
        assert server._get_client().base_url == "https://staging.example.com"

    def test_game_requires_id(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("EPICLEADERBOARD_GAME_ID", raising=False)
        with pytest.raises(ValueError, match="EPICLEADERBOARD_GAME_ID"):
            server._get_game()

    def test_key_only_required_for_writes(self, env, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("EPICLEADERBOARD_GAME_KEY")
        assert server._get_game() == GameCredentials(game_id="game-123", game_key="")
        with pytest.raises(ValueError, match="EPICLEADERBOARD_GAME_KEY"):
            server._get_game(require_key=True)


class TestParseTimeframe:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            pytest.param("all_time", Timeframe.ALL_TIME, id="name"),
            pytest.param("Week", Timeframe.WEEK, id="mixed_case"),
            pytest.param("all-time", Timeframe.ALL_TIME, id="hyphen"),
            pytest.param("4", Timeframe.DAY, id="ordinal"),
        ],
    )
    def test_accepts(self, value: str, expected: Timeframe) -> None:
        assert server.parse_timeframe(value) is expected

    @pytest.mark.parametrize("value", ["fortnight", "9", ""])
    def test_rejects(self, value: str) -> None:
        with pytest.raises(ValueError, match="Invalid timeframe"):
            server.parse_timeframe(value)


class TestLeaderboardEntriesTool:
    @pytest.mark.asyncio
    async def test_passes_arguments(self, env, mock_client: MagicMock) -> None:
        await server.leaderboard_entries("main", "level-1", "Alice", "week", around_player=False, local_only=True)

        mock_client.fetch_entries.assert_awaited_once_with(
            GameCredentials(game_id="game-123", game_key="key-456"),
            LeaderboardRef(primary_id="main", secondary_id="level-1"),
            "Alice",
            timeframe=Timeframe.WEEK,
            around_player=False,
            local_only=True,
        )

    @pytest.mark.asyncio
    async def test_returns_entries_and_summary(self, env, mock_client: MagicMock) -> None:
        alice = Entry(rank=1, username="Alice", score="100", country="US", meta={"level": "1"})
        mock_client.fetch_entries.return_value = EntriesResult(entries=[alice], player_entry=alice)

        result = await server.leaderboard_entries("main")

        assert result["title"] == "Leaderboard main"
        assert result["timeframe"] == "all_time"
        assert result["entries"] == [alice.model_dump()]
        assert result["player_entry"]["username"] == "Alice"
        assert "#1 Alice: 100" in result["summary"]

    @pytest.mark.asyncio
    async def test_empty_board(self, env, mock_client: MagicMock) -> None:
        result = await server.leaderboard_entries("main")

        assert result["entries"] == []
        assert result["player_entry"] is None
        assert result["summary"] == "No entries on this leaderboard yet."

    @pytest.mark.asyncio
    async def test_client_errors_propagate(self, env, mock_client: MagicMock) -> None:
        mock_client.fetch_entries.side_effect = ClientError("Failed to get leaderboard entries: 500", 500)

        with pytest.raises(ClientError, match="500"):
            await server.leaderboard_entries("main")


class TestLeaderboardSubmitTool:
    @pytest.mark.asyncio
    async def test_submits_with_key(self, env, mock_client: MagicMock) -> None:
        result = await server.leaderboard_submit("main", "Alice", 100.0, "level-1", {"level": "1"})

        mock_client.submit_entry.assert_awaited_once_with(
            GameCredentials(game_id="game-123", game_key="key-456"),
            LeaderboardRef(primary_id="main", secondary_id="level-1"),
            "Alice",
            100.0,
            {"level": "1"},
        )
        assert result["summary"] == "Submitted 100 for Alice."

    @pytest.mark.asyncio
    async def test_requires_key(self, env, mock_client: MagicMock, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("EPICLEADERBOARD_GAME_KEY")

        with pytest.raises(ValueError, match="EPICLEADERBOARD_GAME_KEY"):
            await server.leaderboard_submit("main", "Alice", 1)

        mock_client.submit_entry.assert_not_awaited()


class TestCheckUsernameTool:
    @pytest.mark.parametrize(
        ("status", "available"),
        [
            pytest.param(UsernameAvailability.AVAILABLE, True, id="available"),
            pytest.param(UsernameAvailability.TAKEN, False, id="taken"),
            pytest.param(UsernameAvailability.PROFANITY, False, id="profanity"),
            pytest.param(UsernameAvailability.INVALID, False, id="invalid"),
        ],
    )
    @pytest.mark.asyncio
    async def test_reports_status(
        self, env, mock_client: MagicMock, status: UsernameAvailability, available: bool
    ) -> None:
        mock_client.check_username_available.return_value = status

        result = await server.leaderboard_check_username("Alice")

        assert result["status"] == status.name.lower()
        assert result["available"] is available
        assert result["summary"] == server.USERNAME_MESSAGES[status]
