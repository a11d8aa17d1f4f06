"""Core library: models, wire encoding, and the HTTP client.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any server framework; the MCP server imports from here.
"""

from .client import DEFAULT_BASE_URL, LeaderboardClient
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
    "deserialize_meta",
    "encode_params",
    "format_number",
    "serialize_meta",
]
