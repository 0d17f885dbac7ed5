"""Order management API endpoints"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.errors import ValidationError
from app.models.menu import MenuItem
from app.models.order import Order, OrderStatus
from app.models.user import User
from app.notifications import notify_order_placed, order_details
from app.schemas.order import (
    OrderItemCreate,
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    OrderListResponse,
)
from app.api.auth import require_admin, require_staff

router = APIRouter()
logger = structlog.get_logger()


async def _price_items(db: AsyncSession, items: List[OrderItemCreate]) -> List[Dict[str, Any]]:
    """Resolve ordered items to name, unit price and line total"""
    menu_ids = {item.menu_item_id for item in items if item.menu_item_id}
    menu: Dict[UUID, MenuItem] = {}
    if menu_ids:
        result = await db.execute(
            select(MenuItem).where(MenuItem.id.in_(menu_ids), MenuItem.is_active.is_(True))
        )
        menu = {menu_item.id: menu_item for menu_item in result.scalars().all()}

    priced = []
    for index, item in enumerate(items):
        if item.menu_item_id:
            menu_item = menu.get(item.menu_item_id)
            if menu_item is None:
                raise ValidationError("Menu item not available", reason=str(item.menu_item_id))
            name, price_cents = menu_item.name, menu_item.price_cents
        elif item.name and item.price_cents is not None:
            name, price_cents = item.name, item.price_cents
        else:
            raise ValidationError(
                "Each item needs a menu_item_id or a name and price_cents",
                reason=f"items[{index}]",
            )

        priced.append({
            "menu_item_id": str(item.menu_item_id) if item.menu_item_id else None,
            "name": name,
            "quantity": item.quantity,
            "price_cents": price_cents,
            "line_total_cents": price_cents * item.quantity,
            "notes": item.notes,
        })
    return priced


def _apply_totals(order: Order, items_json: List[Dict[str, Any]]) -> None:
    subtotal = sum(item["line_total_cents"] for item in items_json)
    tax = round(subtotal * settings.order_tax_rate)

    order.items_json = items_json
    order.subtotal_cents = subtotal
    order.tax_cents = tax
    order.total_cents = subtotal + tax


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        address=order.address,
        items=order.items_json or [],
        subtotal_cents=order.subtotal_cents,
        tax_cents=order.tax_cents,
        total_cents=order.total_cents,
        status=order.status,
        notes=order.notes,
        confirmation_sent=order.confirmation_sent,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


async def _get_order_or_404(db: AsyncSession, order_id: UUID) -> Order:
    result = await db.execute(select(Order).where(Order.id == order_id))
    order = result.scalar_one_or_none()

    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    return order


@router.get("", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status: Optional[OrderStatus] = None,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """List orders, newest first, with pagination"""
    query = select(Order)
    count_query = select(func.count(Order.id))

    if status:
        query = query.where(Order.status == status)
        count_query = count_query.where(Order.status == status)

    if from_date:
        query = query.where(Order.created_at >= from_date)
        count_query = count_query.where(Order.created_at >= from_date)

    if to_date:
        query = query.where(Order.created_at <= to_date)
        count_query = count_query.where(Order.created_at <= to_date)

    total_result = await db.execute(count_query)
    total = total_result.scalar()

    offset = (page - 1) * page_size
    query = query.order_by(Order.created_at.desc()).offset(offset).limit(page_size)

    result = await db.execute(query)

    return OrderListResponse(
        items=[_order_response(order) for order in result.scalars().all()],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    order_data: OrderCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    """Place an order and queue its confirmation email"""
    order = Order(
        customer_name=order_data.customer_name,
        customer_email=order_data.customer_email,
        customer_phone=order_data.customer_phone,
        address=order_data.address,
        notes=order_data.notes,
        status=OrderStatus.IN_PROGRESS,
    )
    _apply_totals(order, await _price_items(db, order_data.items))

    db.add(order)
    await db.commit()
    await db.refresh(order)

    logger.info("Order created", order_id=str(order.id), total_cents=order.total_cents, items=len(order.items_json))
    background_tasks.add_task(notify_order_placed, order_details(order))
    return _order_response(order)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get order details"""
    return _order_response(await _get_order_or_404(db, order_id))


@router.api_route("/{order_id}", methods=["PUT", "PATCH"], response_model=OrderResponse)
async def update_order(
    order_id: UUID,
    order_data: OrderUpdate,
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Update order status or details; new items are re-priced"""
    order = await _get_order_or_404(db, order_id)
    updates = order_data.model_dump(exclude_unset=True)

    if not updates:
        raise ValidationError("No valid fields provided for update")

    nulls = sorted(
        field for field, value in updates.items()
        if value is None and field not in ("address", "notes")
    )
    if nulls:
        raise ValidationError("Fields cannot be null", reason=", ".join(nulls))

    if "items" in updates:
        _apply_totals(order, await _price_items(db, order_data.items))
        del updates["items"]

    for field, value in updates.items():
        setattr(order, field, value)

    await db.commit()
    await db.refresh(order)

    logger.info("Order updated", order_id=str(order.id), status=order.status.value, updated_by=str(current_user.id))
    return _order_response(order)


@router.delete("/{order_id}", status_code=204)
async def delete_order(
    order_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete an order"""
    order = await _get_order_or_404(db, order_id)

    await db.delete(order)
    await db.commit()

    logger.info("Order deleted", order_id=str(order_id))
