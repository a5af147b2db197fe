import asyncio

import httpx
import pytest

from api import build_stats
from models import Doctor, Patient, PatientDoctorMapping
from session import CredentialPair, SessionRecord
from settings import LOGIN_PATH
from conftest import doctor_payload, mapping_payload, patient_payload


def test_build_stats_counts_active_mappings_only():
    patients = [Patient.model_validate(patient_payload(i)) for i in range(1, 8)]
    doctors = [Doctor.model_validate(doctor_payload(1))]
    mappings = [
        PatientDoctorMapping.model_validate(mapping_payload(1, "ACTIVE")),
        PatientDoctorMapping.model_validate(mapping_payload(2, "INACTIVE")),
        PatientDoctorMapping.model_validate(mapping_payload(3, "COMPLETED")),
        PatientDoctorMapping.model_validate(mapping_payload(4, "ACTIVE")),
    ]

    stats = build_stats(patients, doctors, mappings)

    assert stats.total_patients == 7
    assert stats.total_doctors == 1
    assert stats.total_mappings == 4
    assert stats.active_mappings == 2
    assert [patient.id for patient in stats.recent_patients] == [1, 2, 3, 4, 5]
    assert len(stats.recent_mappings) == 4


def test_build_stats_empty():
    stats = build_stats([], [], [])

    assert stats.total_patients == stats.active_mappings == 0
    assert stats.recent_doctors == []


@pytest.mark.asyncio
async def test_dashboard_loads_all_lists(hospital_api, server):
    server.route("GET", "/api/patients/", body={"results": [patient_payload(1), patient_payload(2)]})
    server.route("GET", "/api/doctors/", body=[doctor_payload(1)])
    server.route("GET", "/api/mappings/", body=[mapping_payload(1), mapping_payload(2, "INACTIVE")])

    stats = await hospital_api.dashboard()

    assert stats.total_patients == 2
    assert stats.total_doctors == 1
    assert stats.total_mappings == 2
    assert stats.active_mappings == 1
    assert {call[1] for call in server.calls} == {"/api/patients/", "/api/doctors/", "/api/mappings/"}


@pytest.mark.asyncio
async def test_failed_dashboard_cancels_remaining_list_calls(hospital_api, server, store, auth_failures):
    # Every list call is rejected and every refresh fails, the first one at once
    server.valid_access = "never-issued"
    server.refresh_status = 401
    server.refresh_delays = [0, 0.05, 0.05]

    with pytest.raises(httpx.HTTPStatusError):
        await hospital_api.dashboard()

    store.save_session(SessionRecord(
        credentials=CredentialPair(access_token="fresh", refresh_token="fresh-refresh"),
        user={"id": 2, "username": "nurse"},
    ))
    # Anything left running would fail its refresh and clear the new session
    await asyncio.sleep(0.1)

    assert store.get_access_token() == "fresh"
    assert store.get_refresh_token() == "fresh-refresh"
    assert auth_failures == [LOGIN_PATH]
