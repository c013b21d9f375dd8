#!/usr/bin/env python3
"""Load a small set of sample users, orders and items.

Skips everything if the database already has users, so it is safe to run
after every deploy. Expects the schema to exist (run migrations first).

Usage:
    cd api
    python -m scripts.seed_sample_data
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncEngine

from core.database import create_engine, dispose_engine
from models import Role
from repositories.item_repository import ItemRepository
from repositories.order_repository import OrderRepository
from repositories.user_repository import UserRepository
from schemas import Item, Order, User

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    User(
        username="aanderson",
        password="password",
        first_name="Alice",
        last_name="Anderson",
        email="aanderson@example.com",
        role=Role.ADMIN,
    ),
    User(
        username="bbailey",
        password="password",
        first_name="Bob",
        last_name="Bailey",
        email="bbailey@example.com",
        role=Role.USER,
    ),
    User(
        username="ccountryman",
        password="password",
        first_name="Charlie",
        last_name="Countryman",
        email="ccountryman@example.com",
        role=Role.USER,
    ),
    User(
        username="ddavis",
        password="password",
        first_name="Daniel",
        last_name="Davis",
        email="ddavis@example.com",
        role=Role.USER,
    ),
    User(
        username="eeinstein",
        password="password",
        first_name="Emily",
        last_name="Einstein",
        email="eeinstein@example.com",
        role=Role.USER,
    ),
]

# (customer index into SAMPLE_USERS, location, destination)
SAMPLE_ORDERS = [
    (0, "Seattle, Washington", "New York City, New York"),
    (1, "Seattle, Washington", "New York City, New York"),
]

# (order index into SAMPLE_ORDERS, name, description, cost, amount)
SAMPLE_ITEMS = [
    (0, "GoldGate Anti-cavity", "GoldGate Toothpaste 12oz", "3.99", 3),
    (0, "MalWart H2O", "Water 1L", "0.99", 50),
    (0, "Generic Brand Pasta", "Spaghetti 0.5 lbs", "3.99", 25),
    (1, "BlunderBread", "White bread", "2.99", 20),
    (1, "Jimmy Lean's Ham", "Thin sliced ham 24 slices", "5.99", 10),
    (1, "I Can't Believe It's Actually Butter", "Downfield brand butter 8oz", "3.99", 100),
]


async def seed(engine: AsyncEngine) -> bool:
    """Insert the sample data. Returns False if users already exist."""
    users = UserRepository(engine)
    orders = OrderRepository(engine)
    items = ItemRepository(engine)

    if await users.get_all():
        logger.info("Database already has users, skipping sample data")
        return False

    saved_users = [await users.save(user) for user in SAMPLE_USERS]

    saved_orders = []
    for customer_index, location, destination in SAMPLE_ORDERS:
        order = Order(
            customer_id=saved_users[customer_index].id,
            status=True,
            location=location,
            destination=destination,
        )
        saved_orders.append(await orders.save(order))

    for order_index, name, description, cost, amount in SAMPLE_ITEMS:
        item = Item(
            name=name, description=description, cost=Decimal(cost), amount=amount
        )
        await items.save(item, saved_orders[order_index].id)

    logger.info(
        "Seeded %d users, %d orders, %d items",
        len(saved_users),
        len(saved_orders),
        len(SAMPLE_ITEMS),
    )
    return True


async def main() -> None:
    engine = create_engine()
    try:
        await seed(engine)
    finally:
        await dispose_engine(engine)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
