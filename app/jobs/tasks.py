"""Background job tasks"""

from datetime import datetime
from uuid import UUID
import asyncio
import structlog

from app.jobs.celery_app import celery_app
from app.config import settings

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


def mark_confirmation_sent(kind: str, record_id: str) -> None:
    """Stamp confirmation_sent on a reservation or an order"""

    async def _mark():
        from app.database import SessionLocal
        from app.models.order import Order
        from app.models.reservation import Reservation
        from sqlalchemy import update

        model = {"reservation": Reservation, "order": Order}[kind]

        async with SessionLocal() as db:
            await db.execute(
                update(model)
                .where(model.id == UUID(record_id))
                .values(confirmation_sent=datetime.utcnow())
            )
            await db.commit()

    run_async(_mark())


def _deliver(task, kind: str, record_id: str, build_message) -> bool:
    """Send one confirmation email, retrying through Celery on SMTP failure"""
    from app import notifications

    if not settings.smtp_host:
        logger.info("SMTP not configured, skipping confirmation", kind=kind, record_id=record_id)
        return False

    logger.info("Sending confirmation", kind=kind, record_id=record_id)

    try:
        notifications.send_email(build_message())
    except Exception as e:
        logger.warning(
            "Failed to send confirmation",
            kind=kind,
            record_id=record_id,
            error=str(e),
        )
        raise task.retry(exc=e)

    mark_confirmation_sent(kind, record_id)
    logger.info("Confirmation sent", kind=kind, record_id=record_id)
    return True


@celery_app.task(name="send_reservation_confirmation", bind=True, max_retries=3, default_retry_delay=30)
def send_reservation_confirmation(self, details: dict):
    """Email the reservation confirmation"""
    from app.notifications import build_confirmation_email

    return _deliver(self, "reservation", details["reservation_id"], lambda: build_confirmation_email(details))


@celery_app.task(name="send_order_confirmation", bind=True, max_retries=3, default_retry_delay=30)
def send_order_confirmation(self, details: dict):
    """Email the order confirmation"""
    from app.notifications import build_order_email

    return _deliver(self, "order", details["order_id"], lambda: build_order_email(details))
