"""Record, form and choice definitions for the hospital API"""

from .choices import GENDER_CHOICES, SPECIALIZATION_CHOICES, STATUS_CHOICES, choice_label
from .records import (
    User,
    Patient,
    Doctor,
    PatientDoctorMapping,
    AuthTokens,
    AuthResponse,
)
from .forms import (
    FormData,
    LoginForm,
    RegisterForm,
    PatientForm,
    DoctorForm,
    MappingForm,
)

__all__ = [
    "GENDER_CHOICES",
    "SPECIALIZATION_CHOICES",
    "STATUS_CHOICES",
    "choice_label",
    "User",
    "Patient",
    "Doctor",
    "PatientDoctorMapping",
    "AuthTokens",
    "AuthResponse",
    "FormData",
    "LoginForm",
    "RegisterForm",
    "PatientForm",
    "DoctorForm",
    "MappingForm",
]
