"""Order schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from app.models.order import OrderStatus


class OrderItemCreate(BaseModel):
    """Ordered item; the menu price wins when menu_item_id is given"""
    menu_item_id: Optional[UUID] = None
    name: Optional[str] = None
    quantity: int = Field(1, ge=1)
    price_cents: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class OrderCreate(BaseModel):
    """Create order request"""
    customer_name: str = Field(..., min_length=1)
    customer_email: EmailStr
    customer_phone: str = Field(..., min_length=1)
    address: Optional[str] = None
    items: List[OrderItemCreate] = Field(..., min_length=1)
    notes: Optional[str] = None


class OrderUpdate(BaseModel):
    """Update order request"""
    customer_name: Optional[str] = Field(None, min_length=1)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    items: Optional[List[OrderItemCreate]] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None
    notes: Optional[str] = None


class OrderItemResponse(BaseModel):
    """Order item in response"""
    menu_item_id: Optional[UUID] = None
    name: str
    quantity: int
    price_cents: int
    line_total_cents: int
    notes: Optional[str] = None


class OrderResponse(BaseModel):
    """Order response"""
    id: UUID
    customer_name: str
    customer_email: str
    customer_phone: str
    address: Optional[str]
    items: List[OrderItemResponse]
    subtotal_cents: int
    tax_cents: int
    total_cents: int
    status: OrderStatus
    notes: Optional[str]
    confirmation_sent: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class OrderListResponse(BaseModel):
    """Paginated order list"""
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int
