"""Hospital records API package"""

from typing import Optional

import httpx

from session import SessionStore
from .client import AuthenticatedHttpClient, AuthFailureCallback, RETRY_MARKER, is_retried
from .endpoints import AuthAPI, PatientsAPI, DoctorsAPI, MappingsAPI
from .errors import TokenRefreshError, describe_error
from .token_refresh import request_new_access_token
from .dashboard import DashboardStats, build_stats, load_dashboard


class HospitalAPI:
    """Entry point bundling the authenticated client and its endpoint groups

    This class wires together:
    - The authenticated HTTP client (bearer header, refresh-on-401)
    - Auth, patient, doctor and mapping endpoint groups
    """

    def __init__(
        self,
        store: SessionStore,
        base_url: Optional[str] = None,
        on_auth_failure: Optional[AuthFailureCallback] = None,
        single_flight: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store
        self.client = AuthenticatedHttpClient(
            store,
            base_url=base_url,
            on_auth_failure=on_auth_failure,
            single_flight=single_flight,
            transport=transport,
        )
        self.auth = AuthAPI(self.client)
        self.patients = PatientsAPI(self.client)
        self.doctors = DoctorsAPI(self.client)
        self.mappings = MappingsAPI(self.client)

    async def dashboard(self) -> DashboardStats:
        """Counts and recent entries for the dashboard screen"""
        return await load_dashboard(self)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "HospitalAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


__all__ = [
    "HospitalAPI",
    "AuthenticatedHttpClient",
    "AuthFailureCallback",
    "RETRY_MARKER",
    "is_retried",
    "AuthAPI",
    "PatientsAPI",
    "DoctorsAPI",
    "MappingsAPI",
    "TokenRefreshError",
    "describe_error",
    "request_new_access_token",
    "DashboardStats",
    "build_stats",
    "load_dashboard",
]
