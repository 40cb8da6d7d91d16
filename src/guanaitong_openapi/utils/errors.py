"""Exception types and structured error output for the CLI."""

from __future__ import annotations

import json
import sys

from rich.console import Console

console = Console(stderr=True)


class OpenApiError(RuntimeError):
    """Base exception for all open platform client errors."""


class TransportError(OpenApiError):
    """The HTTP round trip failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(OpenApiError):
    """The response body was not a valid envelope or payload."""


class ApiError(OpenApiError):
    """The server answered with a nonzero envelope code."""

    def __init__(self, code: int, msg: str) -> None:
        super().__init__(f"API error {code}: {msg}")
        self.code = code
        self.msg = msg


class TokenError(OpenApiError):
    """Creating an access token failed."""


# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("createToken", "Check GAT_OPENAPI_APP_ID / GAT_OPENAPI_APP_SECRET and the prod/test setting"),
    ("1000210004", "Token was rejected twice, check that the clock is in sync and retry"),
    ("credentials", "Set GAT_OPENAPI_APP_ID and GAT_OPENAPI_APP_SECRET in the environment or .env"),
    ("timed out", "Request timed out, try again or check network connectivity"),
    ("connect", "Connection error, check network connectivity and GAT_OPENAPI_BASE_URL"),
    ("HTTP 5", "The open platform returned a server error, retry later"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern.lower() in lower:
            return hint
    return None


def _error_code(error: Exception) -> str:
    if isinstance(error, TokenError):
        return "AUTH_ERROR"
    if isinstance(error, TransportError):
        return "TRANSPORT_ERROR"
    if isinstance(error, DecodeError):
        return "DECODE_ERROR"
    if isinstance(error, ApiError):
        return "API_ERROR"
    if isinstance(error, ValueError):
        return "CONFIG_ERROR"
    return "RUNTIME_ERROR"


def handle_error(error: Exception) -> None:
    """Report an error as JSON on stdout and as readable text on stderr.

    The JSON object looks like
    {"error": true, "code": "API_ERROR", "message": "...", "hint": "..."}
    and carries ``api_code`` when the server supplied one.
    """
    message = str(error)
    hint = _get_hint(message)

    error_obj: dict[str, object] = {
        "error": True,
        "code": _error_code(error),
        "message": message,
    }
    if isinstance(error, ApiError):
        error_obj["api_code"] = error.code
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
