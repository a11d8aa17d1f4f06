"""Pydantic data models: the shared leaderboard objects.

Both the library client and the MCP server use these models as the common
interface for requests and parsed responses.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Timeframe(IntEnum):
    """Scoring window a query is scoped to. Values are the wire ordinals."""

    ALL_TIME = 0
    YEAR = 1
    MONTH = 2
    WEEK = 3
    DAY = 4


class UsernameAvailability(IntEnum):
    """Outcome of a username availability check. Values are the wire codes."""

    AVAILABLE = 0
    INVALID = 1
    PROFANITY = 2
    TAKEN = 3


class GameCredentials(BaseModel):
    """Identifies a game. The key is only needed to submit scores."""

    model_config = ConfigDict(frozen=True)

    game_id: str
    game_key: str = Field(default="", repr=False, description="Write secret, sent only in POST bodies")


class LeaderboardRef(BaseModel):
    """A named leaderboard, optionally split by a secondary id (e.g. a level)."""

    model_config = ConfigDict(frozen=True)

    primary_id: str
    secondary_id: str = ""


class Entry(BaseModel):
    """One ranked record on a leaderboard."""

    rank: int = Field(default=0, ge=0)
    username: str = ""
    score: str = Field(default="", description="Server-formatted score, kept as text")
    country: str = ""
    meta: dict[str, str] = Field(default_factory=dict)


class EntriesResult(BaseModel):
    """Entries returned by a leaderboard query."""

    entries: list[Entry] = Field(default_factory=list)
    player_entry: Optional[Entry] = Field(None, description="Set only when the query named a player")
