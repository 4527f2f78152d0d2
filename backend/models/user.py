"""User model definitions."""

from sqlalchemy import Column, Integer, String
from backend.database import Base


class User(Base):
    """Represents a clinic user (staff or patient)."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String)
    email = Column(String, unique=True)
    role = Column(String)  # Admin/Doctor/Patient
    specialization = Column(String)
