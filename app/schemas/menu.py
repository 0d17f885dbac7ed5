"""Menu schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class MenuItemCreate(BaseModel):
    """Create menu item request"""
    name: str = Field(..., min_length=1)
    description: str = ""
    price_cents: int = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    image_url: str = ""
    chef_choice: bool = False


class MenuItemUpdate(BaseModel):
    """Update menu item request"""
    name: Optional[str] = None
    description: Optional[str] = None
    price_cents: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None
    chef_choice: Optional[bool] = None
    is_active: Optional[bool] = None


class MenuItemResponse(BaseModel):
    """Menu item response"""
    id: UUID
    name: str
    description: Optional[str]
    price_cents: int
    category: str
    image_url: Optional[str]
    chef_choice: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
