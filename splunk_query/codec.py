"""Request body and JSON response helpers.

Request parameters are joined verbatim: the service receives exactly
``key=value&key=value`` with no percent-encoding applied.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from splunk_query.errors import DecodeError

_EXCERPT_CHARS = 200


def join_params(*parts: str) -> str:
    return "&".join(part for part in parts if part)


def append_output_mode(url: str, directive: str) -> str:
    if directive in url.partition("?")[2].split("&"):
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{directive}"


def decode_body(body: bytes) -> Optional[Any]:
    """Decode a JSON response body; an empty body decodes to ``None``."""
    if not body or not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError as exc:
        excerpt = body[:_EXCERPT_CHARS].decode("utf-8", errors="replace")
        raise DecodeError(f"malformed JSON response: {exc}", excerpt=excerpt) from exc
