import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.core.fields import parse_row_id, scalar_to_text
from backend.database import get_db, store_error_message
from backend.models.appointment import SCHEDULED_STATUS, Appointment

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)


class CreateAppointmentRequest(BaseModel):
    patient: str | None = None
    patient_email: str | None = Field(default=None, alias='patientEmail')
    doctor: str | None = None
    date: str | None = None
    time: str | None = None
    reason: str | None = None

    @field_validator('*', mode='before')
    @classmethod
    def accept_any_scalar(cls, value):
        return scalar_to_text(value)

    def has_required_fields(self) -> bool:
        return all((self.patient, self.patient_email, self.doctor, self.date, self.time))


class UpdateAppointmentRequest(BaseModel):
    status: str | None = None
    notes: str | None = None

    @field_validator('*', mode='before')
    @classmethod
    def accept_any_scalar(cls, value):
        return scalar_to_text(value)


class AppointmentResponse(BaseModel):
    id: int
    patient: str | None = None
    patient_email: str | None = Field(default=None, serialization_alias='patientEmail')
    doctor: str | None = None
    date: str | None = None
    time: str | None = None
    reason: str | None = None
    status: str | None = None
    notes: str | None = None

    class Config:
        from_attributes = True


@router.get('', response_model=list[AppointmentResponse])
async def list_appointments(db: AsyncSession = Depends(get_db)):
    try:
        result = await db.execute(select(Appointment).order_by(Appointment.id.asc()))
        return result.scalars().all()
    except SQLAlchemyError as exc:
        logger.warning('Listing appointments failed: %s', exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=store_error_message(exc),
        ) from exc


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(data: CreateAppointmentRequest | None = None, db: AsyncSession = Depends(get_db)):
    data = data or CreateAppointmentRequest()
    if not data.has_required_fields():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Missing fields',
        )

    try:
        # Callers cannot choose the initial status
        appointment = Appointment(
            patient=data.patient,
            patient_email=data.patient_email,
            doctor=data.doctor,
            date=data.date,
            time=data.time,
            reason=data.reason or '',
            status=SCHEDULED_STATUS,
            notes='',
        )
        db.add(appointment)
        await db.commit()
        await db.refresh(appointment)

        return appointment
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning('Creating appointment failed: %s', exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=store_error_message(exc),
        ) from exc


@router.put('/{appointment_id}', response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    data: UpdateAppointmentRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    data = data or UpdateAppointmentRequest()
    row_id = parse_row_id(appointment_id)
    appointment = None

    try:
        # Overwrite, not merge: an omitted field is blanked
        if row_id is not None:
            await db.execute(
                update(Appointment)
                .where(Appointment.id == row_id)
                .values(status=data.status or '', notes=data.notes or '')
            )
            await db.commit()

            appointment = await db.get(Appointment, row_id)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning('Updating appointment %s failed: %s', appointment_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=store_error_message(exc),
        ) from exc

    if appointment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Appointment not found',
        )

    return appointment
