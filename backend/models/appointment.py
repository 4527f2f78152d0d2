"""Appointment model definitions."""

from sqlalchemy import Column, Integer, String
from backend.database import Base

SCHEDULED_STATUS = "Scheduled"


class Appointment(Base):
    """Represents a scheduled appointment."""
    __tablename__ = "appointments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient = Column(String)
    patient_email = Column("patientEmail", String)
    doctor = Column(String)
    date = Column(String)
    time = Column(String)
    reason = Column(String)
    status = Column(String)
    notes = Column(String)
