"""Record tables and detail views for CLI"""

from typing import Any, Callable, List, Sequence, Tuple

from pydantic import BaseModel
from rich.table import Table

from models import GENDER_CHOICES, SPECIALIZATION_CHOICES, STATUS_CHOICES, choice_label

Column = Tuple[str, Callable[[Any], Any]]


def _full_name(record) -> str:
    return record.full_name or f"{record.first_name} {record.last_name}".strip()


PATIENT_COLUMNS: List[Column] = [
    ("ID", lambda p: p.id),
    ("Name", _full_name),
    ("Email", lambda p: p.email),
    ("Phone", lambda p: p.phone_number),
    ("Gender", lambda p: choice_label(GENDER_CHOICES, p.gender)),
    ("City", lambda p: p.city),
]

DOCTOR_COLUMNS: List[Column] = [
    ("ID", lambda d: d.id),
    ("Name", _full_name),
    ("Specialization", lambda d: choice_label(SPECIALIZATION_CHOICES, d.specialization)),
    ("Clinic", lambda d: d.clinic_name),
    ("Fee", lambda d: d.consultation_fee),
    ("Available", lambda d: "Yes" if d.is_available else "No"),
]

MAPPING_COLUMNS: List[Column] = [
    ("ID", lambda m: m.id),
    ("Patient", lambda m: m.patient_name or m.patient),
    ("Doctor", lambda m: m.doctor_name or m.doctor),
    ("Specialization", lambda m: choice_label(SPECIALIZATION_CHOICES, m.doctor_specialization)),
    ("Status", lambda m: choice_label(STATUS_CHOICES, m.status)),
    ("Assigned", lambda m: m.assigned_date or ""),
]


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def build_record_table(title: str, records: Sequence[BaseModel], columns: Sequence[Column]) -> Table:
    """Table with one row per record"""
    table = Table(title=title)
    for header, _ in columns:
        table.add_column(header, style="cyan" if header == "ID" else None)
    for record in records:
        table.add_row(*(_cell(getter(record)) for _, getter in columns))
    return table


def build_detail_table(title: str, record: BaseModel) -> Table:
    """Two-column property table for a single record"""
    table = Table(title=title, show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    for name, value in record.model_dump().items():
        table.add_row(name.replace("_", " ").capitalize(), _cell(value))
    return table


def id_choices(records: Sequence[BaseModel]) -> List[Tuple[str, str]]:
    """(id, name) choice pairs for a record list"""
    return [(str(record.id), _full_name(record)) for record in records]
