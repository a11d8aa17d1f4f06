"""EpicLeaderboard client.

Submit scores, read ranked leaderboards, and check username availability
against an EpicLeaderboard server. Ships an optional MCP server exposing the
same operations as tools.
"""

__version__ = "0.1.0"

from .core import (
    DEFAULT_BASE_URL,
    ClientError,
    EntriesResult,
    Entry,
    GameCredentials,
    LeaderboardClient,
    LeaderboardRef,
    Timeframe,
    UsernameAvailability,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "ClientError",
    "EntriesResult",
    "Entry",
    "GameCredentials",
    "LeaderboardClient",
    "LeaderboardRef",
    "Timeframe",
    "UsernameAvailability",
]
