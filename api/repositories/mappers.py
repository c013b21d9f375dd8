"""Row-to-record mapping for repository results.

Each mapper takes a row mapping (``result.mappings()``) or ``None`` and
returns the record, or ``None`` when there is no row. Column names that
differ from record fields are renamed here.
"""

from collections.abc import Mapping
from typing import Any

from models import Role
from schemas import Item, Order, User

Row = Mapping[str, Any]


def map_user_row(row: Row | None) -> User | None:
    if row is None:
        return None

    role_name = row.get("role_name")
    return User(
        id=row["id"],
        username=row["username"],
        password=row["password"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        role=Role(role_name) if role_name else None,
    )


def map_order_row(row: Row | None) -> Order | None:
    if row is None:
        return None

    return Order(
        id=row["id"],
        customer_id=row["customerid"],
        status=row["status"],
        location=row["location"],
        destination=row["destination"],
    )


def map_item_row(row: Row | None) -> Item | None:
    if row is None:
        return None

    return Item(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        cost=row["cost"],
        amount=row["amount"],
    )
