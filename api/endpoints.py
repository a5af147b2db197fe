"""Endpoint groups for the hospital records API

Each group is a thin wrapper over ``AuthenticatedHttpClient`` that builds
the path, sends the payload and parses the JSON into record models.
"""

import logging
from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel

from models import (
    AuthResponse,
    Doctor,
    DoctorForm,
    FormData,
    LoginForm,
    MappingForm,
    Patient,
    PatientDoctorMapping,
    PatientForm,
    RegisterForm,
    User,
)
from .client import AuthenticatedHttpClient

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)
Payload = Union[FormData, Dict[str, Any]]


def to_payload(data: Payload) -> Dict[str, Any]:
    """JSON body for a form model or a plain mapping, without None values"""
    if isinstance(data, FormData):
        return data.to_payload()
    return {key: value for key, value in data.items() if value is not None}


def unwrap_list(payload: Any) -> List[Any]:
    """Accept both a bare list and a paginated ``{"results": [...]}`` body"""
    if isinstance(payload, dict) and "results" in payload:
        return payload["results"] or []
    if isinstance(payload, list):
        return payload
    logger.warning(f"Unexpected list payload of type {type(payload).__name__}")
    return []


def parse_records(model: Type[RecordT], payload: Any) -> List[RecordT]:
    return [model.model_validate(item) for item in unwrap_list(payload)]


class AuthAPI:
    """Registration, login, profile and token refresh"""

    def __init__(self, client: AuthenticatedHttpClient):
        self.client = client

    async def register(self, data: RegisterForm) -> AuthResponse:
        response = await self.client.post("/api/auth/register/", json=data.to_payload())
        return AuthResponse.model_validate(response.json())

    async def login(self, data: LoginForm) -> AuthResponse:
        response = await self.client.post("/api/auth/login/", json=data.to_payload())
        return AuthResponse.model_validate(response.json())

    async def profile(self) -> User:
        response = await self.client.get("/api/auth/profile/")
        return User.model_validate(response.json()["user"])

    async def refresh_token(self, refresh_token: str) -> str:
        """Explicit refresh through the intercepted client

        Returns:
            The new access token (not written to the session store)
        """
        response = await self.client.post("/api/auth/token/refresh/", json={"refresh": refresh_token})
        return response.json()["access"]


class PatientsAPI:
    """Patient records"""

    def __init__(self, client: AuthenticatedHttpClient):
        self.client = client

    async def list(self) -> List[Patient]:
        response = await self.client.get("/api/patients/")
        return parse_records(Patient, response.json())

    async def create(self, data: Union[PatientForm, Dict[str, Any]]) -> Patient:
        response = await self.client.post("/api/patients/", json=to_payload(data))
        return Patient.model_validate(response.json())

    async def get(self, patient_id: int) -> Patient:
        response = await self.client.get(f"/api/patients/{patient_id}/")
        return Patient.model_validate(response.json())

    async def update(self, patient_id: int, data: Payload) -> Patient:
        response = await self.client.put(f"/api/patients/{patient_id}/", json=to_payload(data))
        return Patient.model_validate(response.json())

    async def delete(self, patient_id: int) -> None:
        await self.client.delete(f"/api/patients/{patient_id}/")


class DoctorsAPI:
    """Doctor records

    The doctors resource uses explicit action suffixes for writes.
    """

    def __init__(self, client: AuthenticatedHttpClient):
        self.client = client

    async def list(self) -> List[Doctor]:
        response = await self.client.get("/api/doctors/")
        return parse_records(Doctor, response.json())

    async def create(self, data: Union[DoctorForm, Dict[str, Any]]) -> Doctor:
        response = await self.client.post("/api/doctors/create/", json=to_payload(data))
        return Doctor.model_validate(response.json())

    async def get(self, doctor_id: int) -> Doctor:
        response = await self.client.get(f"/api/doctors/{doctor_id}/")
        return Doctor.model_validate(response.json())

    async def update(self, doctor_id: int, data: Payload) -> Doctor:
        response = await self.client.put(f"/api/doctors/{doctor_id}/update/", json=to_payload(data))
        return Doctor.model_validate(response.json())

    async def delete(self, doctor_id: int) -> None:
        await self.client.delete(f"/api/doctors/{doctor_id}/delete/")


class MappingsAPI:
    """Patient to doctor mappings"""

    def __init__(self, client: AuthenticatedHttpClient):
        self.client = client

    async def list(self) -> List[PatientDoctorMapping]:
        response = await self.client.get("/api/mappings/")
        return parse_records(PatientDoctorMapping, response.json())

    async def create(self, data: Union[MappingForm, Dict[str, Any]]) -> PatientDoctorMapping:
        response = await self.client.post("/api/mappings/", json=to_payload(data))
        return PatientDoctorMapping.model_validate(response.json())

    async def get_by_patient(self, patient_id: int) -> List[PatientDoctorMapping]:
        response = await self.client.get(f"/api/mappings/patient/{patient_id}/")
        return parse_records(PatientDoctorMapping, response.json())

    async def update(self, mapping_id: int, data: Payload) -> PatientDoctorMapping:
        response = await self.client.put(f"/api/mappings/{mapping_id}/update/", json=to_payload(data))
        return PatientDoctorMapping.model_validate(response.json())

    async def delete(self, mapping_id: int) -> None:
        await self.client.delete(f"/api/mappings/{mapping_id}/")
