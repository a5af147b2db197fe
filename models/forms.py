"""
Pydantic models for request payloads sent to the hospital API.

Field checks are left to the server, these models only shape the JSON.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel


class FormData(BaseModel):
    """Base for outgoing payloads"""

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the request, omitting unset optional fields"""
        return self.model_dump(exclude_none=True)


class LoginForm(FormData):
    username: str
    password: str


class RegisterForm(FormData):
    username: str
    email: str
    password: str
    password2: str
    first_name: str
    last_name: str


class PatientForm(FormData):
    first_name: str
    last_name: str
    email: str
    phone_number: str
    date_of_birth: str
    gender: str
    address: str
    city: str
    state: str
    zip_code: str
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    medical_history: Optional[str] = None


class DoctorForm(FormData):
    first_name: str
    last_name: str
    email: str
    phone_number: str
    specialization: str
    license_number: str
    years_of_experience: int
    qualification: str
    clinic_name: str
    clinic_address: str
    city: str
    state: str
    zip_code: str
    consultation_fee: float
    is_available: bool = True


class MappingForm(FormData):
    patient: int
    doctor: int
    status: str = "ACTIVE"
    notes: Optional[str] = None
