"""Authenticated HTTP client for the hospital records API

Every request passes through two hooks:

* before sending, the stored access token is attached as a bearer header;
* after receiving, a 401 triggers one token refresh and one retry of the
  same request. When no refresh token is stored, or the refresh fails, the
  session is cleared and the terminal auth failure callback is told to go
  to the login entry point.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

import httpx

from session import SessionStore
from settings import (
    API_BASE_URL,
    LOGIN_PATH,
    REFRESH_PATH,
    CONNECT_TIMEOUT,
    REQUEST_TIMEOUT,
    REFRESH_SINGLE_FLIGHT,
)
from .token_refresh import request_new_access_token

logger = logging.getLogger(__name__)

# Key in httpx.Request.extensions marking a request already retried after a refresh
RETRY_MARKER = "hospital_admin_auth_retry"

AuthFailureCallback = Callable[[str], None]


def _token_preview(token: str) -> str:
    return f"{token[:20]}..."


def is_retried(request: httpx.Request) -> bool:
    """Whether the request has already been retried after a token refresh"""
    return bool(request.extensions.get(RETRY_MARKER))


class AuthenticatedHttpClient:
    """Async HTTP client with bearer authentication and refresh-on-401

    Args:
        store: Session store holding the access/refresh tokens
        base_url: API base URL (default: API_BASE_URL setting)
        on_auth_failure: Called with the login path when the session cannot
            be recovered. Fire-and-forget, the failing call still raises.
        login_path: Login entry point passed to on_auth_failure
        refresh_path: Token refresh endpoint
        single_flight: Share one in-flight refresh between concurrent 401s
        timeout: Request timeout (default: REQUEST_TIMEOUT/CONNECT_TIMEOUT)
        transport: Optional httpx transport, used by tests
    """

    def __init__(
        self,
        store: SessionStore,
        base_url: Optional[str] = None,
        on_auth_failure: Optional[AuthFailureCallback] = None,
        login_path: str = LOGIN_PATH,
        refresh_path: str = REFRESH_PATH,
        single_flight: Optional[bool] = None,
        timeout: Optional[httpx.Timeout] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store
        self.base_url = base_url or API_BASE_URL
        self.on_auth_failure = on_auth_failure
        self.login_path = login_path
        self.refresh_path = refresh_path
        self.single_flight = REFRESH_SINGLE_FLIGHT if single_flight is None else single_flight

        timeout = timeout or httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        # Refresh calls bypass the hooks so a rejected refresh cannot recurse
        self._refresh_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )
        self._inflight_refresh: Optional["asyncio.Future[str]"] = None

    async def __aenter__(self) -> "AuthenticatedHttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close both underlying HTTP clients"""
        await self._client.aclose()
        await self._refresh_client.aclose()

    # Request helpers

    async def request(
        self,
        method: str,
        url: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Build and send a request through the authentication hooks

        Returns:
            The successful (2xx) response

        Raises:
            httpx.HTTPStatusError: Non-2xx response that could not be recovered
            httpx.RequestError: Transport failure
        """
        request = self._client.build_request(method, url, json=json, params=params)
        return await self.send(request)

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return await self.request("GET", url, params=params)

    async def post(self, url: str, json: Any = None) -> httpx.Response:
        return await self.request("POST", url, json=json)

    async def put(self, url: str, json: Any = None) -> httpx.Response:
        return await self.request("PUT", url, json=json)

    async def delete(self, url: str) -> httpx.Response:
        return await self.request("DELETE", url)

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send a prepared request: authenticate, dispatch, handle the response"""
        self.authenticate_request(request)
        response = await self._client.send(request)
        return await self.handle_response(response)

    # Hooks

    def authenticate_request(self, request: httpx.Request) -> httpx.Request:
        """Attach the stored access token as a bearer header, if there is one"""
        logger.debug(f"Making {request.method} request to: {request.url}")
        token = self.store.get_access_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
            logger.debug(f"Authorization header set ({_token_preview(token)})")
        else:
            logger.debug("No access token in session store, sending request unauthenticated")
        return request

    async def handle_response(self, response: httpx.Response) -> httpx.Response:
        """Pass through successes, recover a first 401, raise everything else"""
        request = response.request

        if response.is_success:
            logger.debug(f"{response.status_code} for {request.method} {request.url}")
            return response

        if response.status_code != 401 or is_retried(request):
            if response.status_code == 401:
                logger.warning(f"401 on retried {request.method} {request.url}, giving up")
            response.raise_for_status()

        logger.info(f"401 for {request.method} {request.url}, attempting token refresh")
        request.extensions[RETRY_MARKER] = True

        refresh_token = self.store.get_refresh_token()
        if not refresh_token:
            logger.info("No refresh token available, ending session")
            self.end_session()
            response.raise_for_status()

        try:
            access_token = await self._refresh_access_token(refresh_token)
        except Exception as e:
            logger.warning(f"Token refresh failed: {e}")
            self.end_session()
            raise

        request.headers["Authorization"] = f"Bearer {access_token}"
        return await self.send(request)

    # Refresh / session end

    async def _renew_access_token(self, refresh_token: str) -> str:
        access_token = await request_new_access_token(
            self._refresh_client, refresh_token, self.refresh_path
        )
        # Only the access token changes, the refresh token is kept as is
        self.store.set_access_token(access_token)
        return access_token

    async def _refresh_access_token(self, refresh_token: str) -> str:
        if not self.single_flight:
            return await self._renew_access_token(refresh_token)

        task = self._inflight_refresh
        if task is None:
            task = asyncio.ensure_future(self._renew_access_token(refresh_token))
            self._inflight_refresh = task
        else:
            logger.debug("Joining in-flight token refresh")
        try:
            # A cancelled waiter must not cancel the refresh the others share
            return await asyncio.shield(task)
        finally:
            if self._inflight_refresh is task:
                self._inflight_refresh = None

    def end_session(self) -> None:
        """Clear stored credentials and signal the login redirect"""
        self.store.clear()
        logger.info(f"Session cleared, redirecting to {self.login_path}")
        if self.on_auth_failure is not None:
            self.on_auth_failure(self.login_path)
