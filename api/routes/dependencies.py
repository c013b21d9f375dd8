"""Repository providers for route handlers.

Each request gets a repository bound to the application's engine.
"""

from typing import Annotated

from fastapi import Depends

from core.database import DbEngine
from repositories.item_repository import ItemRepository
from repositories.order_repository import OrderRepository
from repositories.user_repository import UserRepository


def get_item_repository(engine: DbEngine) -> ItemRepository:
    return ItemRepository(engine)


def get_order_repository(engine: DbEngine) -> OrderRepository:
    return OrderRepository(engine)


def get_user_repository(engine: DbEngine) -> UserRepository:
    return UserRepository(engine)


ItemRepo = Annotated[ItemRepository, Depends(get_item_repository)]
OrderRepo = Annotated[OrderRepository, Depends(get_order_repository)]
UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
