"""Reservation API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.notifications import confirmation_details, notify_reservation_confirmed
from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
)
from app.services.allocator import TableAllocator
from app.api.auth import require_admin

router = APIRouter()


@router.get("", response_model=List[ReservationResponse])
async def list_reservations(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    time: Optional[str] = Query(None, description="HH:MM or h:MM AM/PM"),
    db: AsyncSession = Depends(get_db),
):
    """List reservations with their tables, ordered by date then time"""
    return await TableAllocator(db).list_reservations(date, time)


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    """Reserve the smallest available table that fits the party"""
    reservation = await TableAllocator(db).reserve(reservation_data)
    background_tasks.add_task(notify_reservation_confirmed, confirmation_details(reservation))
    return reservation


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Get reservation details"""
    return await TableAllocator(db).get_reservation(reservation_id)


@router.patch("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: UUID,
    reservation_data: ReservationUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update reservation details"""
    return await TableAllocator(db).update_reservation(reservation_id, reservation_data)


@router.delete("/{reservation_id}", status_code=204)
async def cancel_reservation(
    reservation_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a reservation and release its table for that slot"""
    await TableAllocator(db).cancel(reservation_id)
