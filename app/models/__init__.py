"""Database models"""

from app.models.table import DiningTable, TableType
from app.models.reservation import Reservation
from app.models.menu import MenuItem
from app.models.order import Order, OrderStatus
from app.models.content import ContactMessage, Testimonial, TeamMember
from app.models.user import User, UserRole

__all__ = [
    "DiningTable",
    "TableType",
    "Reservation",
    "MenuItem",
    "Order",
    "OrderStatus",
    "ContactMessage",
    "Testimonial",
    "TeamMember",
    "User",
    "UserRole",
]
