"""Table catalog API endpoints"""

from typing import List
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.reservation import Reservation
from app.models.table import DiningTable
from app.models.user import User
from app.schemas.table import (
    TableCreate,
    TablePatch,
    TableResponse,
    TableAvailabilityResponse,
)
from app.services.allocator import TableAllocator
from app.api.auth import require_admin

router = APIRouter()
logger = structlog.get_logger()


async def _get_table_or_404(db: AsyncSession, table_id: UUID) -> DiningTable:
    result = await db.execute(select(DiningTable).where(DiningTable.id == table_id))
    table = result.scalar_one_or_none()

    if not table:
        raise NotFoundError("Table not found")

    return table


async def _next_table_number(db: AsyncSession) -> int:
    """Lowest positive table number not yet in use"""
    result = await db.execute(select(DiningTable.table_number))
    existing = set(result.scalars().all())
    table_number = 1
    while table_number in existing:
        table_number += 1
    return table_number


async def _check_reservations_fit(db: AsyncSession, table: DiningTable, updates: dict) -> None:
    """Refuse a type or seats change that existing reservations on the table would not fit"""
    if "type" in updates and updates["type"] != table.type:
        result = await db.execute(
            select(func.count(Reservation.id)).where(
                Reservation.table_id == table.id,
                Reservation.seating != updates["type"],
            )
        )
        if result.scalar():
            raise ConflictError(
                "Table has reservations for another seating type",
                reason="Move or cancel its reservations before changing the table type.",
            )

    if "seats" in updates and updates["seats"] < table.seats:
        result = await db.execute(
            select(func.max(Reservation.guests)).where(Reservation.table_id == table.id)
        )
        largest_party = result.scalar()
        if largest_party and largest_party > updates["seats"]:
            raise ConflictError(
                "Table has reservations larger than the new seat count",
                reason=f"A reservation on this table is for {largest_party} guests.",
            )


async def _commit_or_conflict(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("The table number already exists.")


@router.get("", response_model=List[TableResponse])
async def list_tables(db: AsyncSession = Depends(get_db)):
    """List all tables"""
    result = await db.execute(select(DiningTable).order_by(DiningTable.table_number))
    return result.scalars().all()


@router.get("/availability", response_model=TableAvailabilityResponse)
async def table_availability(
    date: str = Query(..., description="YYYY-MM-DD"),
    time: str = Query(..., description="HH:MM or h:MM AM/PM"),
    db: AsyncSession = Depends(get_db),
):
    """Which tables can be booked for a given slot"""
    day, slot, tables = await TableAllocator(db).table_availability(date, time)
    return TableAvailabilityResponse(date=day.isoformat(), time=slot, tables=tables)


@router.post("", response_model=TableResponse, status_code=201)
async def create_table(
    table_data: TableCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a table, assigning the next free table number if none is given"""
    table_number = table_data.table_number or await _next_table_number(db)

    table = DiningTable(
        table_number=table_number,
        seats=table_data.seats,
        type=table_data.type,
        availability=table_data.availability,
    )
    db.add(table)
    await _commit_or_conflict(db)
    await db.refresh(table)

    logger.info("Table created", table_number=table.table_number, seats=table.seats, type=table.type.value)
    return table


@router.get("/{table_id}", response_model=TableResponse)
async def get_table(
    table_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific table"""
    return await _get_table_or_404(db, table_id)


@router.patch("/{table_id}", response_model=TableResponse)
async def patch_table(
    table_id: UUID,
    table_data: TablePatch,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Partially update a table. An empty body toggles availability;
    an explicit availability value is set as given. A type or seats
    change that would strand existing reservations is refused.
    """
    table = await _get_table_or_404(db, table_id)
    updates = table_data.model_dump(exclude_unset=True)

    nulls = sorted(field for field, value in updates.items() if value is None)
    if nulls:
        raise ValidationError("Fields cannot be null", reason=", ".join(nulls))

    if not updates:
        table.availability = not table.availability
    else:
        await _check_reservations_fit(db, table, updates)
        for field, value in updates.items():
            setattr(table, field, value)

    await _commit_or_conflict(db)
    await db.refresh(table)

    logger.info("Table updated", table_number=table.table_number, availability=table.availability)
    return table


@router.delete("/{table_id}", status_code=204)
async def delete_table(
    table_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a table that has no reservations"""
    table = await _get_table_or_404(db, table_id)

    result = await db.execute(
        select(func.count(Reservation.id)).where(Reservation.table_id == table_id)
    )
    if result.scalar():
        raise ConflictError("Table has reservations", reason="Cancel its reservations before deleting the table.")

    table_number = table.table_number
    await db.delete(table)
    await db.commit()

    logger.info("Table deleted", table_number=table_number)
