"""Access token refresh call"""

import logging

import httpx

from settings import REFRESH_PATH
from .errors import TokenRefreshError

logger = logging.getLogger(__name__)


async def request_new_access_token(
    client: httpx.AsyncClient,
    refresh_token: str,
    refresh_path: str = REFRESH_PATH,
) -> str:
    """Exchange a refresh token for a new access token

    The client passed here must not be the intercepted one, a 401 from the
    refresh endpoint has to fail instead of triggering another refresh.

    Args:
        client: Plain HTTP client bound to the API base URL
        refresh_token: Refresh token from the session store
        refresh_path: Path of the refresh endpoint

    Returns:
        The new access token

    Raises:
        httpx.HTTPStatusError: Refresh endpoint rejected the token
        httpx.RequestError: Refresh endpoint could not be reached
        TokenRefreshError: Response did not contain an access token
    """
    logger.info("Attempting to refresh access token...")
    response = await client.post(
        refresh_path,
        json={"refresh": refresh_token},
        headers={"Content-Type": "application/json"},
    )

    if not response.is_success:
        logger.error(f"Token refresh failed with status {response.status_code}: {response.text}")
        response.raise_for_status()

    try:
        payload = response.json()
    except ValueError as e:
        raise TokenRefreshError(f"Token refresh returned invalid JSON: {e}") from e

    access_token = payload.get("access") if isinstance(payload, dict) else None
    if not access_token:
        raise TokenRefreshError("Token refresh response missing access token")

    logger.info("Access token refreshed successfully")
    return access_token
