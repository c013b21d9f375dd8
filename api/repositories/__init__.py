"""Repository layer for database operations.

Repositories own all SQL. Each one is built around the shared engine (the
connection pool), borrows a connection per call, and returns plain records
from ``schemas.py``. A missing row comes back as ``None``, an empty result
set as ``[]``; driver failures surface as ``InternalServerError``.
"""

from repositories.item_repository import ItemRepository
from repositories.order_repository import OrderRepository
from repositories.user_repository import UserRepository
from repositories.utils import db_operation

__all__ = [
    "ItemRepository",
    "OrderRepository",
    "UserRepository",
    "db_operation",
]
