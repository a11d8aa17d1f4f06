"""The one error type surfaced by the leaderboard client."""

from __future__ import annotations

from typing import Optional


class ClientError(Exception):
    """A failed leaderboard request.

    ``status_code`` is set when the server answered with a non-2xx status and
    is ``None`` for transport failures or an unusable HTTP client.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ClientError({self.message!r}, status_code={self.status_code!r})"
