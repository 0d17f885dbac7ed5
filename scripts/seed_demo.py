#!/usr/bin/env python3
"""
Seed script to create demo tables, an admin account, a small menu and site content
"""

import asyncio
import uuid

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

DEMO_TABLES = [
    (1, 2, "INDOOR"),
    (2, 2, "INDOOR"),
    (3, 4, "INDOOR"),
    (4, 4, "INDOOR"),
    (5, 6, "INDOOR"),
    (6, 8, "INDOOR"),
    (7, 2, "OUTDOOR"),
    (8, 4, "OUTDOOR"),
    (9, 6, "OUTDOOR"),
]

DEMO_MENU = [
    ("Bruschetta", "Grilled bread, tomato, basil", 850, "Starters", False),
    ("Burrata", "Heirloom tomatoes, olive oil", 1400, "Starters", True),
    ("Ribeye Steak", "12oz, peppercorn sauce, fries", 3400, "Mains", True),
    ("Wild Mushroom Risotto", "Parmesan, truffle oil", 2200, "Mains", False),
    ("Tiramisu", "Espresso, mascarpone, cocoa", 950, "Desserts", False),
]

DEMO_TESTIMONIALS = [
    ("Maria L.", 5, "Best risotto in town and the staff remembered our anniversary."),
    ("Tom B.", 4, "Lovely terrace seating. We will be back for the steak."),
]

DEMO_TEAM = [
    ("Giulia Rossi", "giulia@forkandfriends.com", "Head Chef", "Good food is shared food."),
    ("Sam Carter", "sam@forkandfriends.com", "Restaurant Manager", None),
]


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from app.database import SessionLocal, engine, Base
    from app.models.table import DiningTable, TableType
    from app.models.menu import MenuItem
    from app.models.content import Testimonial, TeamMember
    from app.models.user import User, UserRole

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        result = await db.execute(select(DiningTable).limit(1))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating tables...")
        for number, seats, table_type in DEMO_TABLES:
            db.add(DiningTable(
                id=uuid.uuid4(),
                table_number=number,
                seats=seats,
                type=TableType[table_type],
                availability=True,
            ))

        print("Creating admin user...")
        db.add(User(
            id=uuid.uuid4(),
            email="admin@forkandfriends.com",
            hashed_password=pwd_context.hash("admin12345"),
            full_name="Restaurant Admin",
            role=UserRole.ADMIN,
            is_active=True,
        ))

        print("Creating menu items...")
        for name, description, price_cents, category, chef_choice in DEMO_MENU:
            db.add(MenuItem(
                name=name,
                description=description,
                price_cents=price_cents,
                category=category,
                chef_choice=chef_choice,
            ))

        print("Creating testimonials and team...")
        for name, rating, content in DEMO_TESTIMONIALS:
            db.add(Testimonial(name=name, rating=rating, content=content))
        for name, email, role, quote in DEMO_TEAM:
            db.add(TeamMember(name=name, email=email, role=role, quote=quote))

        await db.commit()

    print(f"""
Demo data created successfully!

Tables: {len(DEMO_TABLES)} created

Admin:
  Email: admin@forkandfriends.com
  Password: admin12345

Menu: {len(DEMO_MENU)} items created
Testimonials: {len(DEMO_TESTIMONIALS)}, team members: {len(DEMO_TEAM)}
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
