"""Item service: validates item input before it reaches the repository."""

from typing import Any

from core.errors import BadRequestError, NotFoundError
from core.logger import get_logger
from core.validators import is_empty_object, is_valid_id, is_valid_object
from core.wide_event import set_wide_event_fields
from repositories.item_repository import ItemRepository
from schemas import Item

logger = get_logger(__name__)


async def get_all_items(repo: ItemRepository) -> list[Item]:
    items = await repo.get_all()

    if len(items) == 0:
        raise NotFoundError()

    return items


async def get_item_by_id(repo: ItemRepository, item_id: Any) -> Item:
    if not is_valid_id(item_id):
        raise BadRequestError()

    item = await repo.get_by_id(int(item_id))

    if is_empty_object(item):
        raise NotFoundError()

    return item


async def add_new_item(repo: ItemRepository, new_item: Item, order_id: Any) -> Item:
    """Create an item and attach it to an existing order.

    The order itself is not looked up first; a dangling ``order_id`` fails
    on the join table's foreign key and surfaces as an internal error.
    """
    if not is_valid_object(new_item, "id"):
        raise BadRequestError("Invalid property values found in provided item.")

    if not is_valid_id(order_id):
        raise BadRequestError()

    persisted = await repo.save(new_item, int(order_id))

    set_wide_event_fields(item_id=persisted.id, order_id=int(order_id))
    logger.info("items.created", item_id=persisted.id, order_id=int(order_id))
    return persisted


async def update_item(repo: ItemRepository, item_id: Any, updated_item: Item) -> bool:
    if not is_valid_object(updated_item):
        raise BadRequestError("Invalid item provided (invalid values found).")

    if not is_valid_id(item_id):
        raise BadRequestError()

    return await repo.update(updated_item.model_copy(update={"id": int(item_id)}))


async def delete_item_by_id(repo: ItemRepository, item_id: Any) -> bool:
    if not is_valid_id(item_id):
        raise BadRequestError()

    return await repo.delete_by_id(int(item_id))
