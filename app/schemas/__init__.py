"""Pydantic schemas for request/response validation"""

from app.schemas.auth import (
    Token,
    RefreshRequest,
    UserCreate,
    UserUpdate,
    UserResponse,
)
from app.schemas.table import (
    TableCreate,
    TablePatch,
    TableResponse,
    TableSlotStatus,
    TableAvailabilityResponse,
)
from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservedTable,
)
from app.schemas.menu import (
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
)
from app.schemas.order import (
    OrderItemCreate,
    OrderCreate,
    OrderUpdate,
    OrderItemResponse,
    OrderResponse,
    OrderListResponse,
)
from app.schemas.content import (
    ContactMessageCreate,
    ContactMessageUpdate,
    ContactMessageResponse,
    TestimonialCreate,
    TestimonialUpdate,
    TestimonialResponse,
    TeamMemberCreate,
    TeamMemberUpdate,
    TeamMemberResponse,
)

__all__ = [
    "Token",
    "RefreshRequest",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "TableCreate",
    "TablePatch",
    "TableResponse",
    "TableSlotStatus",
    "TableAvailabilityResponse",
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "ReservedTable",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemResponse",
    "OrderItemCreate",
    "OrderCreate",
    "OrderUpdate",
    "OrderItemResponse",
    "OrderResponse",
    "OrderListResponse",
    "ContactMessageCreate",
    "ContactMessageUpdate",
    "ContactMessageResponse",
    "TestimonialCreate",
    "TestimonialUpdate",
    "TestimonialResponse",
    "TeamMemberCreate",
    "TeamMemberUpdate",
    "TeamMemberResponse",
]
