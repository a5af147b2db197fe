"""Error types and user-facing error messages for API calls"""

import json
from typing import Any, Iterable, List

import httpx


class TokenRefreshError(Exception):
    """The refresh endpoint answered, but without a usable access token"""


def _flatten_messages(values: Iterable[Any]) -> List[str]:
    messages = []
    for value in values:
        if isinstance(value, str):
            messages.append(value)
        elif isinstance(value, dict):
            messages.extend(_flatten_messages(value.values()))
        elif isinstance(value, (list, tuple)):
            messages.extend(_flatten_messages(value))
        elif value is not None:
            messages.append(str(value))
    return messages


def describe_error(error: BaseException, default: str = "Operation failed") -> str:
    """Turn an exception raised by an API call into a message for the user

    HTTP errors prefer the server's ``detail`` field, then any field-level
    messages (e.g. ``{"username": ["already taken"]}``), then the default.

    Args:
        error: Exception raised by the client or an endpoint group
        default: Message used when nothing more specific is available

    Returns:
        Message suitable for display
    """
    if isinstance(error, httpx.HTTPStatusError):
        try:
            data = error.response.json()
        except (json.JSONDecodeError, ValueError):
            data = None

        if isinstance(data, dict):
            detail = data.get("detail")
            if detail:
                return str(detail)
            messages = _flatten_messages(data.values())
            if messages:
                return " ".join(messages)
        return f"{default} (HTTP {error.response.status_code})"

    if isinstance(error, httpx.TimeoutException):
        return "The API did not respond in time. Try again later"

    if isinstance(error, httpx.RequestError):
        return f"Could not connect to the API: {error}"

    if isinstance(error, TokenRefreshError):
        return str(error)

    return default
