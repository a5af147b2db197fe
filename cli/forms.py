"""Interactive record forms for CLI"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt

from models import (
    GENDER_CHOICES,
    SPECIALIZATION_CHOICES,
    STATUS_CHOICES,
    DoctorForm,
    FormData,
    MappingForm,
    PatientForm,
    RegisterForm,
)

Choices = Sequence[Tuple[str, str]]


@dataclass
class FormField:
    """One prompt in a record form

    kind is one of: text, password, int, float, bool, choice
    """
    name: str
    label: str
    kind: str = "text"
    required: bool = True
    choices: Optional[Choices] = None


PATIENT_FIELDS = [
    FormField("first_name", "First name"),
    FormField("last_name", "Last name"),
    FormField("email", "Email"),
    FormField("phone_number", "Phone number"),
    FormField("date_of_birth", "Date of birth (YYYY-MM-DD)"),
    FormField("gender", "Gender", kind="choice", choices=GENDER_CHOICES),
    FormField("address", "Address"),
    FormField("city", "City"),
    FormField("state", "State"),
    FormField("zip_code", "ZIP code"),
    FormField("blood_type", "Blood type", required=False),
    FormField("allergies", "Allergies", required=False),
    FormField("medical_history", "Medical history", required=False),
]

DOCTOR_FIELDS = [
    FormField("first_name", "First name"),
    FormField("last_name", "Last name"),
    FormField("email", "Email"),
    FormField("phone_number", "Phone number"),
    FormField("specialization", "Specialization", kind="choice", choices=SPECIALIZATION_CHOICES),
    FormField("license_number", "License number"),
    FormField("years_of_experience", "Years of experience", kind="int"),
    FormField("qualification", "Qualification"),
    FormField("clinic_name", "Clinic name"),
    FormField("clinic_address", "Clinic address"),
    FormField("city", "City"),
    FormField("state", "State"),
    FormField("zip_code", "ZIP code"),
    FormField("consultation_fee", "Consultation fee", kind="float"),
    FormField("is_available", "Available for appointments", kind="bool"),
]

REGISTER_FIELDS = [
    FormField("first_name", "First name"),
    FormField("last_name", "Last name"),
    FormField("username", "Username"),
    FormField("email", "Email"),
    FormField("password", "Password", kind="password"),
    FormField("password2", "Confirm password", kind="password"),
]


def mapping_fields(patients: Choices, doctors: Choices) -> List[FormField]:
    """Mapping form fields, with patient/doctor choices from the current lists"""
    return [
        FormField("patient", "Patient ID", kind="choice", choices=patients),
        FormField("doctor", "Doctor ID", kind="choice", choices=doctors),
        FormField("status", "Status", kind="choice", choices=STATUS_CHOICES),
        FormField("notes", "Notes", required=False),
    ]


def _print_choices(field: FormField, console) -> None:
    console.print(f"[bold]{field.label}[/bold]")
    for value, label in field.choices:
        console.print(f"  [cyan]{value}[/cyan] {label}")


def _ask(prompt_cls, label: str, default: Any = None, **kwargs) -> Any:
    # Rich treats any default, None included, as the answer to an empty input
    if default is None:
        return prompt_cls.ask(label, **kwargs)
    return prompt_cls.ask(label, default=default, **kwargs)


def ask_field(field: FormField, console, default: Any = None) -> Any:
    """Prompt for a single field value

    Optional text fields return None when left empty; required text fields
    are asked again until a value is given.
    """
    if field.kind == "bool":
        return Confirm.ask(field.label, default=True if default is None else bool(default))

    if field.kind == "int":
        return _ask(IntPrompt, field.label, int(default) if default is not None else None)

    if field.kind == "float":
        return _ask(FloatPrompt, field.label, float(default) if default is not None else None)

    if field.kind == "choice":
        _print_choices(field, console)
        values = [str(value) for value, _ in field.choices]
        default_value = str(default) if default is not None and str(default) in values else None
        return _ask(Prompt, field.label, default_value, choices=values, show_choices=False)

    password = field.kind == "password"
    while True:
        value = _ask(
            Prompt,
            field.label,
            str(default) if default not in (None, "") else None,
            password=password,
        )
        value = (value or "").strip()
        if value:
            return value
        if not field.required:
            return None
        console.print(f"[red]{field.label} is required[/red]")


def collect_values(
    fields: Sequence[FormField],
    console,
    defaults: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Prompt for every field and return the answers keyed by field name"""
    defaults = defaults or {}
    return {field.name: ask_field(field, console, defaults.get(field.name)) for field in fields}


def prompt_form(
    form_cls: Type[FormData],
    fields: Sequence[FormField],
    console,
    existing: Optional[BaseModel] = None,
) -> FormData:
    """Fill a form model interactively, prefilled from an existing record"""
    defaults = existing.model_dump() if existing is not None else None
    return form_cls.model_validate(collect_values(fields, console, defaults))


def prompt_patient_form(console, existing=None) -> PatientForm:
    return prompt_form(PatientForm, PATIENT_FIELDS, console, existing)


def prompt_doctor_form(console, existing=None) -> DoctorForm:
    return prompt_form(DoctorForm, DOCTOR_FIELDS, console, existing)


def prompt_register_form(console) -> RegisterForm:
    return prompt_form(RegisterForm, REGISTER_FIELDS, console)


def prompt_mapping_form(console, patients: Choices, doctors: Choices, existing=None) -> MappingForm:
    return prompt_form(MappingForm, mapping_fields(patients, doctors), console, existing)
