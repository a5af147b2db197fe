"""Record management screens (list / view / create / edit / delete)"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List

from rich.prompt import Confirm, IntPrompt, Prompt

from cli.forms import prompt_doctor_form, prompt_mapping_form, prompt_patient_form
from cli.menu import display_record_menu
from cli.tables import (
    DOCTOR_COLUMNS,
    MAPPING_COLUMNS,
    PATIENT_COLUMNS,
    build_detail_table,
    build_record_table,
    id_choices,
)

if TYPE_CHECKING:
    from cli.cli_app import HospitalAdminCLI


class RecordScreen(ABC):
    """Menu-driven CRUD screen for one record type"""

    title = ""
    singular = ""
    columns: List = []
    extra_options: List[str] = []

    def __init__(self, app: "HospitalAdminCLI"):
        self.app = app
        self.console = app.console

    @property
    @abstractmethod
    def endpoint(self):
        """Endpoint group for this record type"""

    @abstractmethod
    def prompt_form(self, existing=None):
        """Ask for the form values, prefilled from existing"""

    def actions(self) -> List[Callable[[], None]]:
        return [self.list_records, self.view_record, self.create_record, self.edit_record, self.delete_record]

    def run(self):
        """Loop until the user goes back or the session ends"""
        while self.app.session_active():
            choices = display_record_menu(self.title, self.console, self.extra_options)
            choice = Prompt.ask("Select option", choices=choices)
            if choice == choices[-1]:
                return
            self.actions()[int(choice) - 1]()
            self.app.pause()

    def fetch_all(self):
        return self.app.call(self.endpoint.list(), f"Failed to fetch {self.title.lower()}")

    def fetch_one(self, record_id: int):
        return self.app.call(self.endpoint.get(record_id), f"Failed to fetch {self.singular.lower()}")

    def ask_id(self) -> int:
        return IntPrompt.ask(f"{self.singular} ID")

    def list_records(self):
        ok, records = self.fetch_all()
        if not ok:
            return
        if not records:
            self.console.print(f"[dim]No {self.title.lower()} found[/dim]")
            return
        self.console.print(build_record_table(self.title, records, self.columns))

    def view_record(self):
        ok, record = self.fetch_one(self.ask_id())
        if ok and record is not None:
            self.console.print(build_detail_table(f"{self.singular} #{record.id}", record))

    def create_record(self):
        form = self.prompt_form()
        if form is None:
            return
        ok, record = self.app.call(self.endpoint.create(form), "Operation failed")
        if ok:
            self.console.print(f"[green]✓ {self.singular} created successfully (ID {record.id})[/green]")

    def edit_record(self):
        record_id = self.ask_id()
        ok, existing = self.fetch_one(record_id)
        if not ok or existing is None:
            return
        form = self.prompt_form(existing)
        if form is None:
            return
        ok, _ = self.app.call(self.endpoint.update(record_id, form), "Operation failed")
        if ok:
            self.console.print(f"[green]✓ {self.singular} updated successfully[/green]")

    def delete_record(self):
        record_id = self.ask_id()
        if not Confirm.ask(f"Are you sure you want to delete {self.singular.lower()} {record_id}?", default=False):
            return
        ok, _ = self.app.call(self.endpoint.delete(record_id), f"Failed to delete {self.singular.lower()}")
        if ok:
            self.console.print(f"[green]✓ {self.singular} deleted successfully[/green]")


class PatientScreen(RecordScreen):
    title = "Patients"
    singular = "Patient"
    columns = PATIENT_COLUMNS

    @property
    def endpoint(self):
        return self.app.api.patients

    def prompt_form(self, existing=None):
        return prompt_patient_form(self.console, existing)


class DoctorScreen(RecordScreen):
    title = "Doctors"
    singular = "Doctor"
    columns = DOCTOR_COLUMNS

    @property
    def endpoint(self):
        return self.app.api.doctors

    def prompt_form(self, existing=None):
        return prompt_doctor_form(self.console, existing)


class MappingScreen(RecordScreen):
    title = "Mappings"
    singular = "Mapping"
    columns = MAPPING_COLUMNS
    extra_options = ["List by Patient"]

    @property
    def endpoint(self):
        return self.app.api.mappings

    def actions(self):
        return super().actions() + [self.list_by_patient]

    def fetch_one(self, record_id: int):
        # Mappings have no single-record endpoint
        ok, mappings = self.fetch_all()
        if not ok:
            return False, None
        for mapping in mappings:
            if mapping.id == record_id:
                return True, mapping
        self.console.print(f"[red]✗ Mapping {record_id} not found[/red]")
        return False, None

    def prompt_form(self, existing=None):
        ok, patients = self.app.call(self.app.api.patients.list(), "Failed to fetch patients")
        if not ok:
            return None
        ok, doctors = self.app.call(self.app.api.doctors.list(), "Failed to fetch doctors")
        if not ok:
            return None
        if not patients or not doctors:
            self.console.print("[yellow]Create at least one patient and one doctor first[/yellow]")
            return None
        return prompt_mapping_form(self.console, id_choices(patients), id_choices(doctors), existing)

    def list_by_patient(self):
        patient_id = IntPrompt.ask("Patient ID")
        ok, mappings = self.app.call(
            self.endpoint.get_by_patient(patient_id), "Failed to fetch patient mappings"
        )
        if not ok:
            return
        if not mappings:
            self.console.print(f"[dim]No doctors assigned to patient {patient_id}[/dim]")
            return
        self.console.print(build_record_table(f"Doctors for patient {patient_id}", mappings, self.columns))


def build_screens(app: "HospitalAdminCLI") -> dict:
    """Record screens keyed by their main menu option"""
    return {
        "2": PatientScreen(app),
        "3": DoctorScreen(app),
        "4": MappingScreen(app),
    }
