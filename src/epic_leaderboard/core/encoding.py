"""Wire encoding helpers: URL parameters and entry metadata."""

from __future__ import annotations

import json
from typing import Mapping, Union
from urllib.parse import quote

# Characters JavaScript's encodeURIComponent leaves alone besides alphanumerics.
_UNRESERVED = "-_.!~*'()"


def encode_params(params: Mapping[str, str]) -> str:
    """Join ``params`` into ``key=value&...`` with percent-encoded parts.

    Order follows the mapping's iteration order. An empty mapping gives ``""``.
    """
    return "&".join(
        f"{quote(key, safe=_UNRESERVED)}={quote(value, safe=_UNRESERVED)}"
        for key, value in params.items()
    )


def format_number(value: Union[int, float]) -> str:
    """Stringify a score; integral floats lose their trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def serialize_meta(metadata: Mapping[str, str]) -> str:
    """Encode metadata as a compact JSON object."""
    return json.dumps(dict(metadata), separators=(",", ":"), ensure_ascii=False)


def deserialize_meta(raw: object) -> dict[str, str]:
    """Decode a metadata JSON string, returning ``{}`` for anything unusable.

    Never raises: corrupt metadata on one entry must not break a score list.
    """
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    if not isinstance(parsed, dict):
        return {}
    return {str(key): _meta_value(value) for key, value in parsed.items()}


def _meta_value(value: object) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
