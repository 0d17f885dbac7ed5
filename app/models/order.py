"""Order model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON, Text, Integer, Enum
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


class OrderStatus(str, enum.Enum):
    """Kitchen progress of an order"""
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class Order(Base):
    """Online food orders"""
    __tablename__ = "orders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Customer information
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    address = Column(Text)

    # Order details
    # [{"menu_item_id": "...", "name": "...", "quantity": 2, "price_cents": 1500, "line_total_cents": 3000}, ...]
    items_json = Column(JSON, nullable=False)

    # Pricing
    subtotal_cents = Column(Integer, nullable=False, default=0)
    tax_cents = Column(Integer, nullable=False, default=0)
    total_cents = Column(Integer, nullable=False, default=0)

    status = Column(Enum(OrderStatus), nullable=False, default=OrderStatus.IN_PROGRESS)
    notes = Column(Text)

    # Email confirmation
    confirmation_sent = Column(DateTime)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
