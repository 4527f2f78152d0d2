"""Setting model definitions."""

from sqlalchemy import Column, Integer, String
from backend.database import Base


class Setting(Base):
    """Represents a key/value setting row. Keys are not unique."""
    __tablename__ = "settings"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String)
    value = Column(String)
