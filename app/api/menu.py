"""Menu management API endpoints"""

from typing import List, Optional, Union
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.menu import MenuItem
from app.models.user import User
from app.schemas.menu import (
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
)
from app.api.auth import require_admin

router = APIRouter()
logger = structlog.get_logger()


async def _get_item_or_404(db: AsyncSession, item_id: UUID) -> MenuItem:
    result = await db.execute(select(MenuItem).where(MenuItem.id == item_id))
    item = result.scalar_one_or_none()

    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")

    return item


@router.get("", response_model=List[MenuItemResponse])
async def list_menu_items(
    category: Optional[str] = None,
    is_active: Optional[bool] = True,
    db: AsyncSession = Depends(get_db),
):
    """List menu items, newest first"""
    query = select(MenuItem)

    if category:
        query = query.where(MenuItem.category == category)

    if is_active is not None:
        query = query.where(MenuItem.is_active == is_active)

    query = query.order_by(MenuItem.created_at.desc(), MenuItem.name)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=List[MenuItemResponse], status_code=201)
async def create_menu_items(
    item_data: Union[List[MenuItemCreate], MenuItemCreate],
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create one menu item or many at once"""
    items_data = item_data if isinstance(item_data, list) else [item_data]

    items = [MenuItem(**data.model_dump()) for data in items_data]
    db.add_all(items)
    await db.commit()

    for item in items:
        await db.refresh(item)

    logger.info("Menu items created", count=len(items))
    return items


@router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    item_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific menu item"""
    return await _get_item_or_404(db, item_id)


@router.put("/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: UUID,
    item_data: MenuItemUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update a menu item"""
    item = await _get_item_or_404(db, item_id)

    for field, value in item_data.model_dump(exclude_unset=True).items():
        setattr(item, field, value)

    await db.commit()
    await db.refresh(item)

    return item


@router.delete("/{item_id}", status_code=204)
async def delete_menu_item(
    item_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a menu item (soft delete)"""
    item = await _get_item_or_404(db, item_id)

    item.is_active = False
    await db.commit()
