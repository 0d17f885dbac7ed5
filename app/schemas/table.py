"""Table schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.table import TableType


class TableCreate(BaseModel):
    """Create table request; table_number is assigned when omitted"""
    seats: int = Field(..., gt=0)
    type: TableType
    table_number: Optional[int] = Field(None, gt=0)
    availability: bool = True


class TablePatch(BaseModel):
    """Partial update; an empty body toggles availability"""
    availability: Optional[bool] = None
    seats: Optional[int] = Field(None, gt=0)
    type: Optional[TableType] = None
    table_number: Optional[int] = Field(None, gt=0)


class TableResponse(BaseModel):
    """Table response"""
    id: UUID
    table_number: int
    seats: int
    type: TableType
    availability: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TableSlotStatus(BaseModel):
    """Table bookability for one date and time"""
    id: UUID
    table_number: int
    seats: int
    type: TableType
    availability: bool
    available: bool


class TableAvailabilityResponse(BaseModel):
    date: str
    time: str
    tables: List[TableSlotStatus]
