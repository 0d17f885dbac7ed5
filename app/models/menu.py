"""Menu model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


class MenuItem(Base):
    """Menu items"""
    __tablename__ = "menu_items"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    price_cents = Column(Integer, nullable=False)  # Price in cents to avoid float issues
    category = Column(String(100), nullable=False)  # Starters, Mains, Desserts, Drinks
    image_url = Column(String(500), default="")
    chef_choice = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
