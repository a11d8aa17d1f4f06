"""EpicLeaderboard MCP Server.

FastMCP server with 3 tools: read a leaderboard, submit a score, and check
whether a username is available.
Run: epic-leaderboard-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .core.client import DEFAULT_BASE_URL, LeaderboardClient
from .core.encoding import format_number
from .core.models import Entry, GameCredentials, LeaderboardRef, Timeframe, UsernameAvailability

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)
WRITE = ToolAnnotations(readOnlyHint=False, destructiveHint=False, idempotentHint=False, openWorldHint=True)

USERNAME_MESSAGES = {
    UsernameAvailability.AVAILABLE: "Username is available.",
    UsernameAvailability.INVALID: "Username is invalid.",
    UsernameAvailability.PROFANITY: "Username contains inappropriate content.",
    UsernameAvailability.TAKEN: "Username is already taken.",
}


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging for the server process."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    logger.info("EpicLeaderboard MCP server using %s", _get_base_url())
    yield


mcp = FastMCP(
    "EpicLeaderboard",
    instructions="Read game leaderboards, submit scores, and check username availability on an EpicLeaderboard server.",
    lifespan=lifespan,
)


def _get_base_url() -> str:
    return os.environ.get("EPICLEADERBOARD_URL", "") or DEFAULT_BASE_URL


def _get_game(require_key: bool = False) -> GameCredentials:
    game_id = os.environ.get("EPICLEADERBOARD_GAME_ID", "")
    if not game_id:
        raise ValueError("EPICLEADERBOARD_GAME_ID environment variable is required.")
    game_key = os.environ.get("EPICLEADERBOARD_GAME_KEY", "")
    if require_key and not game_key:
        raise ValueError("EPICLEADERBOARD_GAME_KEY environment variable is required to submit scores.")
    return GameCredentials(game_id=game_id, game_key=game_key)


def _get_client() -> LeaderboardClient:
    return LeaderboardClient(_get_base_url())


def parse_timeframe(value: str) -> Timeframe:
    """Accept a timeframe name ('week', 'all_time') or ordinal ('3')."""
    text = value.strip()
    if text.isdigit():
        try:
            return Timeframe(int(text))
        except ValueError:
            pass
    else:
        key = text.upper().replace("-", "_").replace(" ", "_")
        if key in Timeframe.__members__:
            return Timeframe[key]
    choices = ", ".join(t.name.lower() for t in Timeframe)
    raise ValueError(f"Invalid timeframe: {value!r}. Use one of: {choices}.")


# ─── Tool 1: Leaderboard Entries ─────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def leaderboard_entries(
    primary_id: str,
    secondary_id: str = "",
    username: str = "",
    timeframe: str = "all_time",
    around_player: bool = True,
    local_only: bool = False,
) -> dict:
    """Ranked leaderboard entries, optionally centred on one player.

    Args:
        primary_id: Leaderboard id, e.g. 'main-leaderboard'.
        secondary_id: Sub-board id such as a level name. Default ''.
        username: Player to locate. Fills 'player_entry' when the player has a score.
        timeframe: 'all_time', 'year', 'month', 'week' or 'day'. Default 'all_time'.
        around_player: Show entries around the player instead of the top. Default True.
        local_only: Only players from the requester's country. Default False.
    """
    window = parse_timeframe(timeframe)
    result = await _get_client().fetch_entries(
        _get_game(),
        LeaderboardRef(primary_id=primary_id, secondary_id=secondary_id),
        username,
        timeframe=window,
        around_player=around_player,
        local_only=local_only,
    )
    return {
        "title": f"Leaderboard {primary_id}" + (f" / {secondary_id}" if secondary_id else ""),
        "timeframe": window.name.lower(),
        "entries": [e.model_dump() for e in result.entries],
        "player_entry": result.player_entry.model_dump() if result.player_entry else None,
        "summary": _entries_summary(result.entries, result.player_entry),
    }


def _entries_summary(entries: list[Entry], player: Optional[Entry]) -> str:
    if not entries:
        return "No entries on this leaderboard yet."
    top = " | ".join(f"#{e.rank} {e.username}: {e.score}" for e in entries[:5])
    if player:
        return f"{top}. {player.username} is ranked #{player.rank} with {player.score}"
    return top


# ─── Tool 2: Submit Score ────────────────────────────────────────────────────


@mcp.tool(annotations=WRITE)
async def leaderboard_submit(
    primary_id: str,
    username: str,
    score: float,
    secondary_id: str = "",
    metadata: Optional[dict[str, str]] = None,
) -> dict:
    """Submit a score for a player. Requires EPICLEADERBOARD_GAME_KEY.

    Args:
        primary_id: Leaderboard id.
        username: Player name the score is recorded under.
        score: Score value.
        secondary_id: Sub-board id such as a level name. Default ''.
        metadata: Extra string key/values stored with the score, e.g. {'level': '1'}.
    """
    board = LeaderboardRef(primary_id=primary_id, secondary_id=secondary_id)
    await _get_client().submit_entry(_get_game(require_key=True), board, username, score, metadata or {})
    logger.info("Submitted score for %s on %s", username, primary_id)
    return {
        "title": "Score Submitted",
        "leaderboard": board.model_dump(),
        "username": username,
        "score": score,
        "summary": f"Submitted {format_number(score)} for {username}.",
    }


# ─── Tool 3: Username Availability ───────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def leaderboard_check_username(username: str) -> dict:
    """Check whether a username is available, taken, invalid, or blocked for profanity.

    Args:
        username: Candidate player name.
    """
    status = await _get_client().check_username_available(_get_game(), username)
    return {
        "title": "Username Availability",
        "username": username,
        "status": status.name.lower(),
        "available": status is UsernameAvailability.AVAILABLE,
        "summary": USERNAME_MESSAGES[status],
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
