"""
Pydantic models for records returned by the hospital API.
"""
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict


class ApiRecord(BaseModel):
    """Base for API payloads, tolerant of fields the client does not know"""
    model_config = ConfigDict(extra="ignore")


class User(ApiRecord):
    """Authenticated user profile"""
    id: int
    username: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""


class Patient(ApiRecord):
    """Patient record"""
    id: int
    first_name: str
    last_name: str
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    date_of_birth: str = ""
    gender: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    medical_history: Optional[str] = None
    created_by_username: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Doctor(ApiRecord):
    """Doctor record"""
    id: int
    first_name: str
    last_name: str
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    specialization: str = ""
    license_number: str = ""
    years_of_experience: int = 0
    qualification: str = ""
    clinic_name: str = ""
    clinic_address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    consultation_fee: Union[str, float, None] = None  # Decimal fields arrive as strings
    is_available: bool = True
    created_by_username: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PatientDoctorMapping(ApiRecord):
    """Assignment of a patient to a doctor"""
    id: int
    patient: int
    doctor: int
    patient_name: str = ""
    doctor_name: str = ""
    doctor_specialization: str = ""
    assigned_date: Optional[str] = None
    status: str = "ACTIVE"
    notes: Optional[str] = None
    created_by_username: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class AuthTokens(ApiRecord):
    """Token pair issued on login/registration"""
    access: str
    refresh: str


class AuthResponse(ApiRecord):
    """Login/registration response"""
    message: str = ""
    user: User
    tokens: AuthTokens
