"""Reservation model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, DateTime, Enum, ForeignKey, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.table import TableType


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    # One reservation per table per slot
    __table_args__ = (
        UniqueConstraint("table_id", "date", "time", name="uq_reservations_table_slot"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    table_id = Column(UUID(as_uuid=True), ForeignKey("tables.id"), nullable=False)

    # Customer information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=False)

    # Reservation details
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM
    guests = Column(Integer, nullable=False)
    seating = Column(Enum(TableType), nullable=False)

    # Free text
    special_requests = Column(Text)
    occasion = Column(String(100))

    # Email confirmation
    confirmation_sent = Column(DateTime)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    table = relationship("DiningTable", back_populates="reservations", lazy="joined")
