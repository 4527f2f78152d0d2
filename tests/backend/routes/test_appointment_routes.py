import pytest
from fastapi import HTTPException
from httpx import AsyncClient
from sqlalchemy import text

from backend.routes.appointment_routes import CreateAppointmentRequest, create_appointment

JANE_DOE_APPOINTMENT = {
    'patient': 'Jane Doe',
    'patientEmail': 'jane@x.com',
    'doctor': 'Dr. Bob',
    'date': '2026-02-01',
    'time': '09:00',
}


async def test_list_appointments_returns_seeded_rows(client: AsyncClient) -> None:
    response = await client.get('/api/appointments')

    assert response.status_code == 200
    appointments = response.json()
    assert appointments[0] == {
        'id': 1,
        'patient': 'John Patient',
        'patientEmail': 'john@patient.com',
        'doctor': 'Dr. Alice',
        'date': '2026-01-10',
        'time': '10:00',
        'reason': 'Chest pain',
        'status': 'Scheduled',
        'notes': '',
    }
    assert appointments[1]['patient'] == 'Jane Doe'
    assert appointments[1]['doctor'] == 'Dr. Bob'


async def test_list_appointments_returns_empty_list_when_table_is_empty(app, client: AsyncClient) -> None:
    async with app.state.engine.begin() as connection:
        await connection.execute(text('DELETE FROM appointments'))

    response = await client.get('/api/appointments')

    assert response.status_code == 200
    assert response.json() == []


async def test_create_appointment_then_list_includes_it(client: AsyncClient) -> None:
    response = await client.post('/api/appointments', json=JANE_DOE_APPOINTMENT)

    assert response.status_code == 201
    created = response.json()
    assert created == {
        'id': 3,
        **JANE_DOE_APPOINTMENT,
        'reason': '',
        'status': 'Scheduled',
        'notes': '',
    }

    listed = (await client.get('/api/appointments')).json()
    assert created in listed


async def test_create_appointment_ignores_requested_status(client: AsyncClient) -> None:
    response = await client.post(
        '/api/appointments',
        json={**JANE_DOE_APPOINTMENT, 'reason': 'Follow-up', 'status': 'Completed', 'notes': 'early'},
    )

    assert response.status_code == 201
    body = response.json()
    assert body['status'] == 'Scheduled'
    assert body['notes'] == ''
    assert body['reason'] == 'Follow-up'


@pytest.mark.parametrize('missing_field', ['patient', 'patientEmail', 'doctor', 'date', 'time'])
async def test_create_appointment_rejects_missing_fields(client: AsyncClient, missing_field: str) -> None:
    payload = {key: value for key, value in JANE_DOE_APPOINTMENT.items() if key != missing_field}

    response = await client.post('/api/appointments', json=payload)

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing fields'}


def test_create_appointment_request_reads_camel_case_email() -> None:
    request = CreateAppointmentRequest(**JANE_DOE_APPOINTMENT)

    assert request.patient_email == 'jane@x.com'
    assert request.has_required_fields()


async def test_create_appointment_validates_before_touching_the_store() -> None:
    with pytest.raises(HTTPException) as exception_info:
        await create_appointment(CreateAppointmentRequest(patient='Jane Doe'), db=None)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Missing fields'


async def test_update_appointment_blanks_omitted_notes(client: AsyncClient) -> None:
    await client.put('/api/appointments/1', json={'status': 'Confirmed', 'notes': 'Bring ECG results'})

    response = await client.put('/api/appointments/1', json={'status': 'Completed'})

    assert response.status_code == 200
    body = response.json()
    assert body['id'] == 1
    assert body['status'] == 'Completed'
    assert body['notes'] == ''
    assert body['patient'] == 'John Patient'


async def test_update_appointment_accepts_any_status_text(client: AsyncClient) -> None:
    response = await client.put('/api/appointments/2', json={'status': 'waiting on lab', 'notes': 'call back'})

    assert response.status_code == 200
    assert response.json()['status'] == 'waiting on lab'
    assert response.json()['notes'] == 'call back'


async def test_update_appointment_without_body_blanks_both_fields(client: AsyncClient) -> None:
    response = await client.put('/api/appointments/2')

    assert response.status_code == 200
    assert response.json()['status'] == ''
    assert response.json()['notes'] == ''


async def test_update_appointment_persists_changes(client: AsyncClient) -> None:
    await client.put('/api/appointments/2', json={'status': 'Cancelled', 'notes': 'Patient called'})

    listed = (await client.get('/api/appointments')).json()
    updated = next(appointment for appointment in listed if appointment['id'] == 2)
    assert updated['status'] == 'Cancelled'
    assert updated['notes'] == 'Patient called'


async def test_update_missing_appointment_returns_not_found(client: AsyncClient) -> None:
    response = await client.put('/api/appointments/999', json={'status': 'Completed'})

    assert response.status_code == 404
    assert response.json() == {'error': 'Appointment not found'}


async def test_update_appointment_with_non_numeric_id_returns_not_found(client: AsyncClient) -> None:
    response = await client.put('/api/appointments/abc', json={'status': 'Completed'})

    assert response.status_code == 404
    assert response.json() == {'error': 'Appointment not found'}


async def test_update_appointment_stores_numeric_notes_as_text(client: AsyncClient) -> None:
    response = await client.put('/api/appointments/1', json={'status': 'Completed', 'notes': 5})

    assert response.status_code == 200
    assert response.json()['status'] == 'Completed'
    assert response.json()['notes'] == '5'
