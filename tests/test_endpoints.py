import pytest

from models import DoctorForm, MappingForm, PatientForm
from conftest import doctor_payload, mapping_payload, patient_payload

pytestmark = pytest.mark.asyncio


def patient_form(**overrides):
    data = dict(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        phone_number="555-0100",
        date_of_birth="1990-12-10",
        gender="F",
        address="12 St James's Square",
        city="London",
        state="LDN",
        zip_code="SW1Y",
    )
    data.update(overrides)
    return PatientForm(**data)


def doctor_form(**overrides):
    data = dict(
        first_name="Gregory",
        last_name="House",
        email="house@example.com",
        phone_number="555-0199",
        specialization="GENERAL",
        license_number="LIC-001",
        years_of_experience=20,
        qualification="MD",
        clinic_name="Princeton-Plainsboro",
        clinic_address="1 Hospital Rd",
        city="Princeton",
        state="NJ",
        zip_code="08540",
        consultation_fee=150.0,
    )
    data.update(overrides)
    return DoctorForm(**data)


async def test_patients_list_accepts_bare_array(hospital_api, server):
    server.route("GET", "/api/patients/", body=[patient_payload(1), patient_payload(2)])

    patients = await hospital_api.patients.list()

    assert [patient.id for patient in patients] == [1, 2]
    assert patients[0].full_name == "Ada Lovelace"


async def test_patients_list_accepts_paginated_object(hospital_api, server):
    server.route("GET", "/api/patients/", body={"count": 1, "next": None, "results": [patient_payload(7)]})

    patients = await hospital_api.patients.list()

    assert [patient.id for patient in patients] == [7]


async def test_unexpected_list_payload_yields_empty_list(hospital_api, server):
    server.route("GET", "/api/doctors/", body={"detail": "odd"})

    assert await hospital_api.doctors.list() == []


async def test_patient_create_omits_unset_optional_fields(hospital_api, server):
    server.route("POST", "/api/patients/", status=201, body=patient_payload(3))

    patient = await hospital_api.patients.create(patient_form())

    assert patient.id == 3
    _, _, _, body = server.calls_to("/api/patients/")[0]
    assert body["first_name"] == "Ada"
    assert "blood_type" not in body
    assert "allergies" not in body


async def test_patient_update_and_delete_paths(hospital_api, server):
    server.route("PUT", "/api/patients/3/", body=patient_payload(3, city="Paris"))
    server.route("DELETE", "/api/patients/3/", status=204)

    patient = await hospital_api.patients.update(3, patient_form(city="Paris"))
    result = await hospital_api.patients.delete(3)

    assert patient.city == "Paris"
    assert result is None
    assert [call[0] for call in server.calls_to("/api/patients/3/")] == ["PUT", "DELETE"]


async def test_patient_update_accepts_plain_dict(hospital_api, server):
    server.route("PUT", "/api/patients/3/", body=patient_payload(3, city="Leeds"))

    await hospital_api.patients.update(3, {"city": "Leeds", "allergies": None})

    assert server.calls_to("/api/patients/3/")[0][3] == {"city": "Leeds"}


async def test_doctor_write_paths(hospital_api, server):
    server.route("POST", "/api/doctors/create/", status=201, body=doctor_payload(4))
    server.route("GET", "/api/doctors/4/", body=doctor_payload(4))
    server.route("PUT", "/api/doctors/4/update/", body=doctor_payload(4, is_available=False))
    server.route("DELETE", "/api/doctors/4/delete/", status=204)

    created = await hospital_api.doctors.create(doctor_form())
    fetched = await hospital_api.doctors.get(4)
    updated = await hospital_api.doctors.update(4, doctor_form(is_available=False))
    await hospital_api.doctors.delete(4)

    assert created.id == fetched.id == 4
    assert fetched.consultation_fee == "150.00"
    assert updated.is_available is False
    assert server.calls_to("/api/doctors/create/")[0][3]["consultation_fee"] == 150.0
    assert [call[1] for call in server.calls] == [
        "/api/doctors/create/",
        "/api/doctors/4/",
        "/api/doctors/4/update/",
        "/api/doctors/4/delete/",
    ]


async def test_mapping_paths(hospital_api, server):
    server.route("GET", "/api/mappings/", body={"results": [mapping_payload(1), mapping_payload(2, "INACTIVE")]})
    server.route("POST", "/api/mappings/", status=201, body=mapping_payload(3))
    server.route("GET", "/api/mappings/patient/1/", body=[mapping_payload(1)])
    server.route("PUT", "/api/mappings/3/update/", body=mapping_payload(3, "COMPLETED"))
    server.route("DELETE", "/api/mappings/3/", status=204)

    mappings = await hospital_api.mappings.list()
    created = await hospital_api.mappings.create(MappingForm(patient=1, doctor=1))
    by_patient = await hospital_api.mappings.get_by_patient(1)
    updated = await hospital_api.mappings.update(3, MappingForm(patient=1, doctor=1, status="COMPLETED"))
    await hospital_api.mappings.delete(3)

    assert [mapping.status for mapping in mappings] == ["ACTIVE", "INACTIVE"]
    assert created.id == 3
    assert server.calls_to("/api/mappings/")[1][3] == {"patient": 1, "doctor": 1, "status": "ACTIVE"}
    assert [mapping.id for mapping in by_patient] == [1]
    assert updated.status == "COMPLETED"


async def test_profile_reads_user_envelope(hospital_api, server):
    server.route("GET", "/api/auth/profile/", body={"user": {"id": 1, "username": "admin", "email": "a@b.c"}})

    user = await hospital_api.auth.profile()

    assert user.username == "admin"
    assert user.email == "a@b.c"


async def test_explicit_refresh_does_not_store_token(hospital_api, server, store):
    access = await hospital_api.auth.refresh_token("refresh-1")

    assert access == "access-2"
    assert store.get_access_token() == "access-1"


async def test_endpoint_calls_recover_from_expired_token(hospital_api, server, store):
    server.valid_access = "fresh"
    server.issued_access = "fresh"
    server.route("GET", "/api/patients/", body=[patient_payload(1)])

    patients = await hospital_api.patients.list()

    assert len(patients) == 1
    assert store.get_access_token() == "fresh"
