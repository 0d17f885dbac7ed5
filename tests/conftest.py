"""Test configuration and fixtures"""

from datetime import date, timedelta
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.main import app
from app.config import settings
from app.database import Base, get_db
from app.models.table import DiningTable, TableType
from app.models.user import User, UserRole
from app.models.menu import MenuItem
from app.api.auth import get_password_hash, create_access_token
from app.schemas.reservation import ReservationCreate


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

RESERVATION_DATE = (date.today() + timedelta(days=7)).isoformat()
RESERVATION_TIME = "19:00"


def reservation_payload(**overrides) -> dict:
    """Booking form body as the front end sends it"""
    payload = {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane@example.com",
        "phone": "+15559876543",
        "date": RESERVATION_DATE,
        "time": RESERVATION_TIME,
        "guests": 3,
        "seating": "Indoor",
        "specialRequests": "Window seat if possible",
        "occasion": "Birthday",
    }
    payload.update(overrides)
    return payload


def reservation_request(**overrides) -> ReservationCreate:
    return ReservationCreate(**reservation_payload(**overrides))


@pytest.fixture(autouse=True)
def disable_notifications(monkeypatch):
    """Keep the Celery broker out of unit tests unless a test opts in"""
    monkeypatch.setattr(settings, "notifications_enabled", False)


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def dining_tables(test_db):
    """Three indoor tables (2, 4 and 6 seats) and one 4-seat outdoor table"""
    tables = [
        DiningTable(id=uuid4(), table_number=1, seats=2, type=TableType.INDOOR, availability=True),
        DiningTable(id=uuid4(), table_number=2, seats=4, type=TableType.INDOOR, availability=True),
        DiningTable(id=uuid4(), table_number=3, seats=6, type=TableType.INDOOR, availability=True),
        DiningTable(id=uuid4(), table_number=4, seats=4, type=TableType.OUTDOOR, availability=True),
    ]
    test_db.add_all(tables)
    await test_db.commit()

    return {table.table_number: str(table.id) for table in tables}


@pytest.fixture
async def test_admin_user(test_db):
    """Create an admin user"""
    user = User(
        id=uuid4(),
        email="admin@example.com",
        hashed_password=get_password_hash("adminpass123"),
        full_name="Admin User",
        role=UserRole.ADMIN,
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
async def test_staff_user(test_db):
    """Create a staff user without admin rights"""
    user = User(
        id=uuid4(),
        email="host@example.com",
        hashed_password=get_password_hash("hostpass123"),
        full_name="Host User",
        role=UserRole.STAFF,
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
async def test_menu_items(test_db):
    """Create test menu items"""
    items = [
        MenuItem(name="Bruschetta", description="Tomato and basil", price_cents=850, category="Starters"),
        MenuItem(name="Ribeye Steak", description="12oz", price_cents=3400, category="Mains", chef_choice=True),
        MenuItem(name="Tiramisu", description="Espresso and mascarpone", price_cents=950, category="Desserts"),
    ]
    test_db.add_all(items)
    await test_db.commit()
    return items


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(test_db, test_admin_user):
    """Create admin authenticated test client"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    token = create_access_token(test_admin_user)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {token}"},
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def staff_client(test_db, test_staff_user):
    """Create staff authenticated test client"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    token = create_access_token(test_staff_user)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {token}"},
    ) as client:
        yield client

    app.dependency_overrides.clear()
