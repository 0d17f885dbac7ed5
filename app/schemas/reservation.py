"""Reservation schemas"""

from datetime import date as calendar_date, datetime
from typing import Optional, Union
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.table import TableType


class ReservationCreate(BaseModel):
    """Reservation request as submitted by the booking form; checked by the allocator"""
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Optional[Union[int, str]] = None
    seating: Optional[str] = None
    special_requests: Optional[str] = Field(None, alias="specialRequests")
    occasion: Optional[str] = None

    class Config:
        populate_by_name = True


class ReservationUpdate(BaseModel):
    """Administrative edit of a reservation"""
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Optional[Union[int, str]] = None
    special_requests: Optional[str] = Field(None, alias="specialRequests")
    occasion: Optional[str] = None
    table_id: Optional[UUID] = Field(None, alias="tableId")

    class Config:
        populate_by_name = True


class ReservedTable(BaseModel):
    """Table info nested in reservation responses"""
    id: UUID
    table_number: int
    seats: int
    type: TableType
    availability: bool

    class Config:
        from_attributes = True


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    date: calendar_date
    time: str
    guests: int
    seating: TableType
    special_requests: Optional[str]
    occasion: Optional[str]
    table: Optional[ReservedTable]
    confirmation_sent: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
