"""Error classification for degraded external calls.

Reference lookups and generative backends never surface their
failures; they degrade to the next fallback path. Classifying the
swallowed exception keeps the log line informative (timeout vs auth
vs server) without changing control flow.
"""

from __future__ import annotations

import asyncio
from enum import Enum

import httpx

from careerlog.constants import ERROR_TRUNCATION_CHARS


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, network errors
    SERVER = "server"  # 500, 502, 503
    TIMEOUT = "timeout"  # deadline exceeded
    CLIENT = "client"  # 400, 401, 403, 404
    UNKNOWN = "unknown"


def _status_code(error: Exception) -> int | None:
    """Pull an HTTP status from httpx, openai or litellm exceptions."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    status_code = getattr(error, "status_code", None)
    return status_code if isinstance(status_code, int) else None


def classify_error(error: Exception) -> ErrorClass:
    """Classify an error by category.

    Checks structured attributes first (status_code), falls back
    to string matching for untyped exceptions.
    """
    status_code = _status_code(error)
    if status_code is not None:
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    if isinstance(
        error, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)
    ):
        return ErrorClass.TIMEOUT
    if isinstance(error, httpx.TransportError):
        return ErrorClass.TRANSIENT

    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg or "rate_limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "econnrefused" in msg or "connection" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("400", "401", "403", "404")):
        return ErrorClass.CLIENT

    return ErrorClass.UNKNOWN


def describe_error(error: Exception) -> str:
    """Short ``class=<category> error=<text>`` fragment for log lines."""
    text = str(error)[:ERROR_TRUNCATION_CHARS] or type(error).__name__
    return f"class={classify_error(error).value} error={text}"
