"""Contact form API endpoints"""

from typing import List, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.content import ContactMessage
from app.models.user import User
from app.schemas.content import (
    ContactMessageCreate,
    ContactMessageUpdate,
    ContactMessageResponse,
)
from app.api.auth import require_admin, require_staff

router = APIRouter()
logger = structlog.get_logger()


async def _get_message_or_404(db: AsyncSession, message_id: UUID) -> ContactMessage:
    result = await db.execute(select(ContactMessage).where(ContactMessage.id == message_id))
    message = result.scalar_one_or_none()

    if not message:
        raise HTTPException(status_code=404, detail="Message not found")

    return message


@router.post("", response_model=ContactMessageResponse, status_code=201)
async def submit_message(
    message_data: ContactMessageCreate,
    db: AsyncSession = Depends(get_db),
):
    """Submit the contact form"""
    message = ContactMessage(**message_data.model_dump())
    db.add(message)
    await db.commit()
    await db.refresh(message)

    logger.info("Contact message received", message_id=str(message.id), subject=message.subject)
    return message


@router.get("", response_model=List[ContactMessageResponse])
async def list_messages(
    is_read: Optional[bool] = None,
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """List contact messages, newest first"""
    query = select(ContactMessage)

    if is_read is not None:
        query = query.where(ContactMessage.is_read == is_read)

    result = await db.execute(query.order_by(ContactMessage.created_at.desc()))
    return result.scalars().all()


@router.get("/{message_id}", response_model=ContactMessageResponse)
async def get_message(
    message_id: UUID,
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    return await _get_message_or_404(db, message_id)


@router.patch("/{message_id}", response_model=ContactMessageResponse)
async def update_message(
    message_id: UUID,
    message_data: ContactMessageUpdate,
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Mark a message read or unread"""
    message = await _get_message_or_404(db, message_id)

    for field, value in message_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(message, field, value)

    await db.commit()
    await db.refresh(message)

    return message


@router.delete("/{message_id}", status_code=204)
async def delete_message(
    message_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    message = await _get_message_or_404(db, message_id)

    await db.delete(message)
    await db.commit()
