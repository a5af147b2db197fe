"""Dashboard statistics"""

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from models import Doctor, Patient, PatientDoctorMapping

if TYPE_CHECKING:
    from . import HospitalAPI

RECENT_LIMIT = 5


@dataclass
class DashboardStats:
    """Record counts and the most recent entries of each list"""
    total_patients: int = 0
    total_doctors: int = 0
    total_mappings: int = 0
    active_mappings: int = 0
    recent_patients: List[Patient] = field(default_factory=list)
    recent_doctors: List[Doctor] = field(default_factory=list)
    recent_mappings: List[PatientDoctorMapping] = field(default_factory=list)


def build_stats(
    patients: List[Patient],
    doctors: List[Doctor],
    mappings: List[PatientDoctorMapping],
) -> DashboardStats:
    return DashboardStats(
        total_patients=len(patients),
        total_doctors=len(doctors),
        total_mappings=len(mappings),
        active_mappings=sum(1 for mapping in mappings if mapping.status == "ACTIVE"),
        recent_patients=patients[:RECENT_LIMIT],
        recent_doctors=doctors[:RECENT_LIMIT],
        recent_mappings=mappings[:RECENT_LIMIT],
    )


async def load_dashboard(api: "HospitalAPI") -> DashboardStats:
    """Fetch the three record lists concurrently and summarise them

    If one list call fails, the others are cancelled before the error is
    raised, so none of them can end a session started after this call.
    """
    tasks = [
        asyncio.ensure_future(api.patients.list()),
        asyncio.ensure_future(api.doctors.list()),
        asyncio.ensure_future(api.mappings.list()),
    ]
    try:
        patients, doctors, mappings = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Wait for the cancelled requests to unwind before propagating
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return build_stats(patients, doctors, mappings)
