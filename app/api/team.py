"""Team page API endpoints"""

from typing import List
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.content import TeamMember
from app.models.user import User
from app.schemas.content import (
    TeamMemberCreate,
    TeamMemberUpdate,
    TeamMemberResponse,
)
from app.api.auth import require_admin, require_staff

router = APIRouter()
logger = structlog.get_logger()


async def _get_member_or_404(db: AsyncSession, member_id: UUID) -> TeamMember:
    result = await db.execute(select(TeamMember).where(TeamMember.id == member_id))
    member = result.scalar_one_or_none()

    if not member:
        raise HTTPException(status_code=404, detail="Team member not found")

    return member


@router.get("", response_model=List[TeamMemberResponse])
async def list_team(
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """List team members in the order they were added"""
    result = await db.execute(select(TeamMember).order_by(TeamMember.created_at, TeamMember.name))
    return result.scalars().all()


@router.post("", response_model=TeamMemberResponse, status_code=201)
async def add_team_member(
    member_data: TeamMemberCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    member = TeamMember(**member_data.model_dump())
    db.add(member)
    await db.commit()
    await db.refresh(member)

    logger.info("Team member added", member_id=str(member.id), role=member.role)
    return member


@router.get("/{member_id}", response_model=TeamMemberResponse)
async def get_team_member(
    member_id: UUID,
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    return await _get_member_or_404(db, member_id)


@router.put("/{member_id}", response_model=TeamMemberResponse)
async def update_team_member(
    member_id: UUID,
    member_data: TeamMemberUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update a team member; required fields ignore null values"""
    member = await _get_member_or_404(db, member_id)

    for field, value in member_data.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "email", "role"):
            continue
        setattr(member, field, value)

    await db.commit()
    await db.refresh(member)

    return member


@router.delete("/{member_id}", status_code=204)
async def remove_team_member(
    member_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    member = await _get_member_or_404(db, member_id)

    await db.delete(member)
    await db.commit()

    logger.info("Team member removed", member_id=str(member_id))
