"""JWT payload decoding for status display

Tokens stay opaque to the HTTP client. These helpers only read the ``exp``
claim so the CLI can show how long the access token has left.
"""

import base64
import datetime
import json
from typing import Any, Dict, Optional


def parse_jwt_claims(token: str) -> Optional[Dict[str, Any]]:
    """Decode the payload of a JWT without verifying it

    Args:
        token: JWT token string

    Returns:
        Dictionary of claims, or None if the token is not a decodable JWT
    """
    if not token or token.count(".") != 2:
        return None

    _, payload, _ = token.split(".")
    padded = payload + "=" * (-len(payload) % 4)
    try:
        data = base64.urlsafe_b64decode(padded.encode())
        claims = json.loads(data.decode())
    except (ValueError, UnicodeDecodeError):
        return None
    return claims if isinstance(claims, dict) else None


def token_expiry(token: str) -> Optional[datetime.datetime]:
    """Return the UTC expiry time of a JWT, if it carries one"""
    claims = parse_jwt_claims(token) or {}
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    try:
        return datetime.datetime.fromtimestamp(float(exp), datetime.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def describe_expiry(token: str, now: Optional[datetime.datetime] = None) -> str:
    """Human readable time until the token expires"""
    expires_at = token_expiry(token)
    if expires_at is None:
        return "unknown"

    now = now or datetime.datetime.now(datetime.timezone.utc)
    seconds = int((expires_at - now).total_seconds())
    if seconds <= 0:
        return "expired"

    hours, remainder = divmod(seconds, 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
