import asyncio
import base64
import json
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from api import AuthenticatedHttpClient, HospitalAPI
from session import MemorySessionStore
from settings import REFRESH_PATH

BASE_URL = "http://hospital.test"

PUBLIC_PATHS = {"/api/auth/login/", "/api/auth/register/"}


class FakeHospitalServer:
    """In-process stand-in for the hospital API, served through httpx.MockTransport

    Protected routes answer 401 unless the bearer token equals valid_access.
    The refresh endpoint accepts valid_refresh and makes issued_access the
    new valid access token.
    """

    def __init__(
        self,
        valid_access: Optional[str] = "access-1",
        valid_refresh: str = "refresh-1",
        issued_access: str = "access-2",
    ):
        self.valid_access = valid_access
        self.valid_refresh = valid_refresh
        self.issued_access = issued_access
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        # (method, path, Authorization header, JSON body) per request received
        self.calls: List[Tuple[str, str, Optional[str], Any]] = []
        self.refresh_status = 200
        self.refresh_body: Any = None
        self.refresh_error: Optional[Exception] = None
        self.refresh_gate: Optional[asyncio.Event] = None
        # Seconds to wait before answering each refresh call, in arrival order
        self.refresh_delays: List[float] = []
        self.always_unauthorized = False
        self.transport_error: Optional[Exception] = None

    def route(self, method: str, path: str, status: int = 200, body: Any = None):
        self.routes[(method, path)] = (status, body)

    @property
    def refresh_calls(self):
        return [call for call in self.calls if call[1] == REFRESH_PATH]

    def calls_to(self, path: str):
        return [call for call in self.calls if call[1] == path]

    @staticmethod
    def _response(status: int, body: Any = None) -> httpx.Response:
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        # Yield so concurrent requests interleave like real network calls
        await asyncio.sleep(0)
        body = json.loads(request.content) if request.content else None
        path = request.url.path
        self.calls.append((request.method, path, request.headers.get("Authorization"), body))

        if path == REFRESH_PATH:
            return await self._refresh(body or {})

        if self.transport_error is not None:
            raise self.transport_error

        if path not in PUBLIC_PATHS:
            authorization = request.headers.get("Authorization")
            if self.always_unauthorized or authorization != f"Bearer {self.valid_access}":
                return self._response(401, {"detail": "Given token not valid for any token type"})

        status, payload = self.routes.get((request.method, path), (404, {"detail": "Not found."}))
        return self._response(status, payload)

    async def _refresh(self, body: Dict[str, Any]) -> httpx.Response:
        if self.refresh_gate is not None:
            await self.refresh_gate.wait()
        if self.refresh_delays:
            await asyncio.sleep(self.refresh_delays.pop(0))
        if self.refresh_error is not None:
            raise self.refresh_error
        if self.refresh_status != 200:
            return self._response(self.refresh_status, {"detail": "Token is invalid or expired"})
        if body.get("refresh") != self.valid_refresh:
            return self._response(401, {"detail": "Token is invalid or expired"})
        self.valid_access = self.issued_access
        if self.refresh_body is not None:
            return self._response(200, self.refresh_body)
        return self._response(200, {"access": self.issued_access})


@pytest.fixture
def server():
    return FakeHospitalServer()


@pytest.fixture
def store():
    return MemorySessionStore({
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "user": json.dumps({"id": 1, "username": "admin"}),
    })


@pytest.fixture
def auth_failures():
    """Records the login paths passed to the terminal auth failure callback"""
    return []


@pytest_asyncio.fixture
async def client(server, store, auth_failures):
    http_client = AuthenticatedHttpClient(
        store,
        base_url=BASE_URL,
        on_auth_failure=auth_failures.append,
        single_flight=False,
        transport=httpx.MockTransport(server),
    )
    yield http_client
    await http_client.aclose()


@pytest_asyncio.fixture
async def hospital_api(server, store, auth_failures):
    api = HospitalAPI(
        store,
        base_url=BASE_URL,
        on_auth_failure=auth_failures.append,
        single_flight=False,
        transport=httpx.MockTransport(server),
    )
    yield api
    await api.aclose()


def make_jwt(claims: Dict[str, Any]) -> str:
    """Unsigned JWT carrying the given claims"""
    def encode(data):
        return base64.urlsafe_b64encode(json.dumps(data).encode()).decode().rstrip("=")

    return f"{encode({'alg': 'HS256'})}.{encode(claims)}.signature"


def patient_payload(patient_id: int, **overrides) -> Dict[str, Any]:
    data = {
        "id": patient_id,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone_number": "555-0100",
        "date_of_birth": "1990-12-10",
        "gender": "F",
        "address": "12 St James's Square",
        "city": "London",
        "state": "LDN",
        "zip_code": "SW1Y",
        "created_by_username": "admin",
    }
    data.update(overrides)
    return data


def doctor_payload(doctor_id: int, **overrides) -> Dict[str, Any]:
    data = {
        "id": doctor_id,
        "first_name": "Gregory",
        "last_name": "House",
        "full_name": "Gregory House",
        "email": "house@example.com",
        "phone_number": "555-0199",
        "specialization": "GENERAL",
        "license_number": "LIC-001",
        "years_of_experience": 20,
        "qualification": "MD",
        "clinic_name": "Princeton-Plainsboro",
        "clinic_address": "1 Hospital Rd",
        "city": "Princeton",
        "state": "NJ",
        "zip_code": "08540",
        "consultation_fee": "150.00",
        "is_available": True,
    }
    data.update(overrides)
    return data


def mapping_payload(mapping_id: int, status: str = "ACTIVE", **overrides) -> Dict[str, Any]:
    data = {
        "id": mapping_id,
        "patient": 1,
        "doctor": 1,
        "patient_name": "Ada Lovelace",
        "doctor_name": "Gregory House",
        "doctor_specialization": "GENERAL",
        "assigned_date": "2024-01-01",
        "status": status,
    }
    data.update(overrides)
    return data
