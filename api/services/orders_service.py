"""Order service: validates order input before it reaches the repository."""

from typing import Any

from core.errors import BadRequestError, NotFoundError
from core.logger import get_logger
from core.validators import is_empty_object, is_valid_id, is_valid_object
from core.wide_event import set_wide_event_fields
from repositories.order_repository import OrderRepository
from schemas import Item, Order

logger = get_logger(__name__)


async def get_all_orders(repo: OrderRepository) -> list[Order]:
    orders = await repo.get_all()

    if len(orders) == 0:
        raise NotFoundError()

    return orders


async def get_order_by_id(repo: OrderRepository, order_id: Any) -> Order:
    if not is_valid_id(order_id):
        raise BadRequestError()

    order = await repo.get_by_id(int(order_id))

    if is_empty_object(order):
        raise NotFoundError()

    return order


async def get_orders_by_user_id(repo: OrderRepository, user_id: Any) -> list[Order]:
    """Get every order placed by a user; NotFoundError if there are none."""
    if not is_valid_id(user_id):
        raise BadRequestError()

    orders = await repo.get_by_user_id(int(user_id))

    if is_empty_object(orders):
        raise NotFoundError()

    return orders


async def get_items_by_order_id(repo: OrderRepository, order_id: Any) -> list[Item]:
    if not is_valid_id(order_id):
        raise BadRequestError()

    items = await repo.get_items_by_order_id(int(order_id))

    if is_empty_object(items):
        raise NotFoundError()

    return items


async def add_new_order(repo: OrderRepository, new_order: Order) -> Order:
    if not is_valid_object(new_order, "id"):
        raise BadRequestError("Invalid property values found in provided order.")

    persisted = await repo.save(new_order)

    set_wide_event_fields(order_id=persisted.id)
    logger.info(
        "orders.created", order_id=persisted.id, customer_id=persisted.customer_id
    )
    return persisted


async def update_order(repo: OrderRepository, order_id: Any, updated_order: Order) -> bool:
    if not is_valid_object(updated_order):
        raise BadRequestError("Invalid order provided (invalid values found).")

    if not is_valid_id(order_id):
        raise BadRequestError()

    return await repo.update(updated_order.model_copy(update={"id": int(order_id)}))


async def delete_order_by_id(repo: OrderRepository, order_id: Any) -> bool:
    """Delete an order and its item links. True even if the order did not exist."""
    if not is_valid_id(order_id):
        raise BadRequestError()

    return await repo.delete_by_id(int(order_id))
