"""Table allocation for reservations"""

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Set, Tuple
from uuid import UUID

import structlog
from sqlalchemy import select, exists
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import ValidationError, NoCapacityError, NotFoundError, ConflictError, StorageError
from app.models.reservation import Reservation
from app.models.table import DiningTable, TableType
from app.schemas.reservation import ReservationCreate, ReservationUpdate

logger = structlog.get_logger()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_FORMATS = ("%H:%M", "%I:%M %p", "%I:%M%p")

REQUIRED_FIELDS = (
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("email", "email"),
    ("phone", "phone"),
    ("date", "date"),
    ("time", "time"),
    ("guests", "guests"),
    ("seating", "seating"),
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_date(value: str) -> date:
    """Parse an ISO calendar date (a trailing time part is ignored)"""
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        raise ValidationError("Invalid date format, expected YYYY-MM-DD")


def normalize_time(value: str) -> str:
    """Normalize a slot such as "7:00 PM" or "19:00" to HH:MM and check it is offered"""
    text = str(value).strip().upper()
    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
            break
        except ValueError:
            continue
    else:
        raise ValidationError("Invalid time format")

    slot = parsed.strftime("%H:%M")
    if slot not in settings.time_slots_list:
        raise ValidationError(
            "Selected time is not an available reservation slot",
            reason=f"Available times: {', '.join(settings.time_slots_list)}",
        )
    return slot


def parse_guests(value: Any) -> int:
    """Coerce the party size to a positive integer within the allowed range"""
    try:
        guests = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError("Guest count must be a number")

    if guests < 1 or guests > settings.max_party_size:
        raise ValidationError(f"Guest count must be between 1 and {settings.max_party_size}")
    return guests


def parse_seating(value: Any) -> TableType:
    try:
        return TableType.parse(value)
    except ValueError:
        raise ValidationError("Seating must be Indoor or Outdoor")


def validate_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValidationError("Invalid email format")
    return value


def ensure_future(day: date, slot: str) -> None:
    slot_time = datetime.strptime(slot, "%H:%M").time()
    if datetime.combine(day, slot_time) <= datetime.now():
        raise ValidationError("Cannot reserve a table in the past.")


def validate_request(request: ReservationCreate) -> Dict[str, Any]:
    """
    Validate a reservation request and return Reservation column values.
    Raises ValidationError on the first problem found.
    """
    raw = request.model_dump()
    missing = [alias for field, alias in REQUIRED_FIELDS if _clean(raw.get(field)) is None]
    if missing:
        raise ValidationError("Missing required fields", reason=", ".join(missing))

    day = parse_date(raw["date"])
    slot = normalize_time(raw["time"])
    ensure_future(day, slot)

    return {
        "first_name": _clean(raw["first_name"]),
        "last_name": _clean(raw["last_name"]),
        "email": validate_email(_clean(raw["email"])),
        "phone": _clean(raw["phone"]),
        "date": day,
        "time": slot,
        "guests": parse_guests(raw["guests"]),
        "seating": parse_seating(raw["seating"]),
        "special_requests": _clean(raw.get("special_requests")),
        "occasion": _clean(raw.get("occasion")),
    }


class TableAllocator:
    """
    Matches reservation requests to tables.

    A table is bookable for a slot when staff have not blocked it
    (availability is true) and no reservation holds the same
    (table_id, date, time). The unique constraint on that tuple makes
    the reservation insert itself the claim on the table. A request that
    loses the race gets an IntegrityError, rolls back and tries the next
    candidate.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def reserve(self, request: ReservationCreate) -> Reservation:
        """Validate, pick the smallest fitting table, and persist the reservation"""
        values = validate_request(request)
        seating: TableType = values["seating"]
        guests: int = values["guests"]
        excluded: Set[UUID] = set()

        while True:
            table = await self._next_candidate(seating, guests, values["date"], values["time"], excluded)
            if table is None:
                logger.info(
                    "No table available",
                    seating=seating.value,
                    guests=guests,
                    date=values["date"].isoformat(),
                    time=values["time"],
                )
                raise NoCapacityError(seating.value, guests)

            table_id = table.id
            table_number = table.table_number
            reservation = Reservation(table_id=table_id, **values)
            self.db.add(reservation)

            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                excluded.add(table_id)
                logger.info(
                    "Table claimed by a concurrent request, retrying",
                    table_number=table_number,
                    date=values["date"].isoformat(),
                    time=values["time"],
                )
                continue
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error("Failed to create reservation", table_number=table_number, error=str(e))
                raise StorageError() from e

            logger.info(
                "Reservation created",
                reservation_id=str(reservation.id),
                table_number=table_number,
                guests=guests,
                seating=seating.value,
            )
            return await self.get_reservation(reservation.id)

    async def _next_candidate(
        self,
        seating: TableType,
        guests: int,
        day: date,
        slot: str,
        excluded: Set[UUID],
    ) -> Optional[DiningTable]:
        """Smallest table that fits the party and is free for the slot"""
        booked = exists().where(
            Reservation.table_id == DiningTable.id,
            Reservation.date == day,
            Reservation.time == slot,
        )
        query = (
            select(DiningTable)
            .where(
                DiningTable.type == seating,
                DiningTable.seats >= guests,
                DiningTable.availability.is_(True),
                ~booked,
            )
            .order_by(DiningTable.seats, DiningTable.table_number)
            .limit(1)
        )
        if excluded:
            query = query.where(DiningTable.id.notin_(excluded))

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to query tables", error=str(e))
            raise StorageError() from e
        return result.scalar_one_or_none()

    async def list_reservations(
        self,
        day: Optional[str] = None,
        slot: Optional[str] = None,
    ) -> List[Reservation]:
        """Reservations with their tables, ordered by date then time"""
        query = select(Reservation)
        if day:
            query = query.where(Reservation.date == parse_date(day))
        if slot:
            query = query.where(Reservation.time == normalize_time(slot))
        query = query.order_by(Reservation.date.asc(), Reservation.time.asc())

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Failed to fetch reservations", error=str(e))
            raise StorageError() from e
        return list(result.scalars().all())

    async def get_reservation(self, reservation_id: UUID) -> Reservation:
        try:
            result = await self.db.execute(
                select(Reservation)
                .where(Reservation.id == reservation_id)
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError as e:
            logger.error("Failed to fetch reservation", reservation_id=str(reservation_id), error=str(e))
            raise StorageError() from e

        reservation = result.scalar_one_or_none()
        if reservation is None:
            raise NotFoundError("Reservation not found")
        return reservation

    async def cancel(self, reservation_id: UUID) -> None:
        """Delete a reservation, which frees its table for that slot"""
        reservation = await self.get_reservation(reservation_id)
        table_number = reservation.table.table_number if reservation.table else None

        await self.db.delete(reservation)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to cancel reservation", reservation_id=str(reservation_id), error=str(e))
            raise StorageError() from e

        logger.info("Reservation cancelled", reservation_id=str(reservation_id), table_number=table_number)

    async def update_reservation(self, reservation_id: UUID, changes: ReservationUpdate) -> Reservation:
        """Apply an administrative edit, keeping the table and slot consistent"""
        reservation = await self.get_reservation(reservation_id)
        data = changes.model_dump(exclude_unset=True)
        updates: Dict[str, Any] = {}

        # Validate everything before touching the instance
        for field in ("first_name", "last_name", "phone"):
            if field in data:
                value = _clean(data[field])
                if value is None:
                    raise ValidationError(f"{field} cannot be empty")
                updates[field] = value
        if "email" in data:
            updates["email"] = validate_email(_clean(data["email"]) or "")
        for field in ("special_requests", "occasion"):
            if field in data:
                updates[field] = _clean(data[field])

        day = parse_date(data["date"]) if data.get("date") is not None else reservation.date
        slot = normalize_time(data["time"]) if data.get("time") is not None else reservation.time
        if (day, slot) != (reservation.date, reservation.time):
            ensure_future(day, slot)
            updates["date"], updates["time"] = day, slot

        table = reservation.table
        if data.get("table_id") is not None and data["table_id"] != reservation.table_id:
            table = await self._get_table(data["table_id"])
            updates["table_id"] = table.id
            updates["seating"] = table.type

        guests = parse_guests(data["guests"]) if data.get("guests") is not None else reservation.guests
        if guests > table.seats:
            raise ValidationError(f"Table {table.table_number} seats only {table.seats} guests")
        updates["guests"] = guests

        for field, value in updates.items():
            setattr(reservation, field, value)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictError(
                "Table is already reserved",
                reason="Another reservation holds this table for the selected date and time.",
            ) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to update reservation", reservation_id=str(reservation_id), error=str(e))
            raise StorageError() from e

        logger.info("Reservation updated", reservation_id=str(reservation_id), fields=sorted(data))
        return await self.get_reservation(reservation_id)

    async def _get_table(self, table_id: UUID) -> DiningTable:
        try:
            result = await self.db.execute(select(DiningTable).where(DiningTable.id == table_id))
        except SQLAlchemyError as e:
            logger.error("Failed to fetch table", table_id=str(table_id), error=str(e))
            raise StorageError() from e

        table = result.scalar_one_or_none()
        if table is None:
            raise NotFoundError("Table not found")
        return table

    async def table_availability(self, day: str, slot: str) -> Tuple[date, str, List[Dict[str, Any]]]:
        """Every table with whether it can be booked for the given slot"""
        parsed_day = parse_date(day)
        normalized = normalize_time(slot)

        try:
            tables_result = await self.db.execute(select(DiningTable).order_by(DiningTable.table_number))
            booked_result = await self.db.execute(
                select(Reservation.table_id).where(
                    Reservation.date == parsed_day,
                    Reservation.time == normalized,
                )
            )
        except SQLAlchemyError as e:
            logger.error("Failed to fetch table availability", date=parsed_day.isoformat(), time=normalized, error=str(e))
            raise StorageError() from e
        booked = set(booked_result.scalars().all())

        statuses = [
            {
                "id": table.id,
                "table_number": table.table_number,
                "seats": table.seats,
                "type": table.type,
                "availability": table.availability,
                "available": bool(table.availability) and table.id not in booked,
            }
            for table in tables_result.scalars().all()
        ]
        return parsed_day, normalized, statuses
