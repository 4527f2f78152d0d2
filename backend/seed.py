import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.models.appointment import SCHEDULED_STATUS, Appointment
from backend.models.user import User

logger = logging.getLogger(__name__)

SEED_USERS = [
    ("Admin User", "admin@example.com", "Admin", ""),
    ("Dr. Alice", "alice@clinic.com", "Doctor", "Cardiology"),
    ("Dr. Bob", "bob@clinic.com", "Doctor", "Dermatology"),
    ("John Patient", "john@patient.com", "Patient", ""),
]

SEED_APPOINTMENTS = [
    ("John Patient", "john@patient.com", "Dr. Alice", "2026-01-10", "10:00", "Chest pain"),
    ("Jane Doe", "jane@patient.com", "Dr. Bob", "2026-01-12", "15:00", "Skin rash"),
]


async def count_rows(session: AsyncSession, model) -> int:
    return await session.scalar(select(func.count()).select_from(model))


async def seed_defaults(session: AsyncSession) -> None:
    """
    Populate default rows (idempotent):
    - users, only if the table is empty
    - appointments, only if the table is empty
    """
    if await count_rows(session, User) == 0:
        # Inserted one by one so ids follow list order
        for name, email, role, specialization in SEED_USERS:
            session.add(User(name=name, email=email, role=role, specialization=specialization))
            await session.flush()
        logger.info("Seeded %d default users", len(SEED_USERS))
    else:
        logger.info("Users table already populated, skipping seed")

    if await count_rows(session, Appointment) == 0:
        for patient, patient_email, doctor, date, time, reason in SEED_APPOINTMENTS:
            session.add(
                Appointment(
                    patient=patient,
                    patient_email=patient_email,
                    doctor=doctor,
                    date=date,
                    time=time,
                    reason=reason,
                    status=SCHEDULED_STATUS,
                    notes="",
                )
            )
            await session.flush()
        logger.info("Seeded %d default appointments", len(SEED_APPOINTMENTS))
    else:
        logger.info("Appointments table already populated, skipping seed")

    await session.commit()
