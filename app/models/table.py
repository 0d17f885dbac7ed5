"""Dining table model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base


class TableType(str, enum.Enum):
    """Seating area of a table"""
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"

    @classmethod
    def parse(cls, value) -> "TableType":
        """Case-insensitive lookup by name or value"""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown seating type: {value}")


class DiningTable(Base):
    """Physical table with a fixed capacity"""
    __tablename__ = "tables"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    table_number = Column(Integer, unique=True, nullable=False)
    seats = Column(Integer, nullable=False)
    type = Column(Enum(TableType), nullable=False, default=TableType.INDOOR)

    # Manual block/release by staff; per-slot bookings live on reservations
    availability = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    reservations = relationship("Reservation", back_populates="table", passive_deletes=True)
