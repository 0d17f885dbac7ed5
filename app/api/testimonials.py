"""Testimonial API endpoints"""

from typing import List
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.content import Testimonial
from app.models.user import User
from app.schemas.content import (
    TestimonialCreate,
    TestimonialUpdate,
    TestimonialResponse,
)
from app.api.auth import require_admin

router = APIRouter()
logger = structlog.get_logger()


async def _get_testimonial_or_404(db: AsyncSession, testimonial_id: UUID) -> Testimonial:
    result = await db.execute(select(Testimonial).where(Testimonial.id == testimonial_id))
    testimonial = result.scalar_one_or_none()

    if not testimonial:
        raise HTTPException(status_code=404, detail="Testimonial not found")

    return testimonial


@router.get("", response_model=List[TestimonialResponse])
async def list_testimonials(db: AsyncSession = Depends(get_db)):
    """List testimonials, newest first"""
    result = await db.execute(select(Testimonial).order_by(Testimonial.created_at.desc()))
    return result.scalars().all()


@router.post("", response_model=TestimonialResponse, status_code=201)
async def create_testimonial(
    testimonial_data: TestimonialCreate,
    db: AsyncSession = Depends(get_db),
):
    """Leave a testimonial"""
    testimonial = Testimonial(**testimonial_data.model_dump())
    db.add(testimonial)
    await db.commit()
    await db.refresh(testimonial)

    logger.info("Testimonial created", testimonial_id=str(testimonial.id), rating=testimonial.rating)
    return testimonial


@router.get("/{testimonial_id}", response_model=TestimonialResponse)
async def get_testimonial(
    testimonial_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await _get_testimonial_or_404(db, testimonial_id)


@router.patch("/{testimonial_id}", response_model=TestimonialResponse)
async def update_testimonial(
    testimonial_id: UUID,
    testimonial_data: TestimonialUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    testimonial = await _get_testimonial_or_404(db, testimonial_id)

    for field, value in testimonial_data.model_dump(exclude_unset=True).items():
        if value is None and field != "photo":
            continue
        setattr(testimonial, field, value)

    await db.commit()
    await db.refresh(testimonial)

    return testimonial


@router.delete("/{testimonial_id}", status_code=204)
async def delete_testimonial(
    testimonial_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Remove a testimonial"""
    testimonial = await _get_testimonial_or_404(db, testimonial_id)

    await db.delete(testimonial)
    await db.commit()

    logger.info("Testimonial deleted", testimonial_id=str(testimonial_id))
