"""Item repository for database operations."""

from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from models import AppItem, OrderItem
from repositories.mappers import map_item_row
from repositories.utils import db_operation
from schemas import Item


def _base_query() -> Select:
    return select(
        AppItem.id,
        AppItem.name,
        AppItem.description,
        AppItem.cost,
        AppItem.amount,
    )


class ItemRepository:
    """Repository for Item database operations."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @db_operation("items.get_all")
    async def get_all(self) -> list[Item]:
        async with self.engine.connect() as conn:
            result = await conn.execute(_base_query().order_by(AppItem.id))
            return [map_item_row(row) for row in result.mappings()]

    @db_operation("items.get_by_id")
    async def get_by_id(self, item_id: int) -> Item | None:
        async with self.engine.connect() as conn:
            result = await conn.execute(_base_query().where(AppItem.id == item_id))
            return map_item_row(result.mappings().first())

    @db_operation("items.save")
    async def save(self, new_item: Item, order_id: int) -> Item:
        """Insert an item and link it to ``order_id``.

        Both inserts share one transaction: either the item and its link
        exist afterwards, or neither does.
        """
        item_stmt = (
            insert(AppItem)
            .values(
                {
                    AppItem.name: new_item.name,
                    AppItem.description: new_item.description,
                    AppItem.cost: new_item.cost,
                    AppItem.amount: new_item.amount,
                }
            )
            .returning(AppItem.id)
        )
        async with self.engine.begin() as conn:
            result = await conn.execute(item_stmt)
            new_id = result.scalar_one()
            await conn.execute(
                insert(OrderItem).values(
                    {OrderItem.order_id: order_id, OrderItem.item_id: new_id}
                )
            )

        return new_item.model_copy(update={"id": new_id})

    @db_operation("items.update")
    async def update(self, updated_item: Item) -> bool:
        """Overwrite every mutable column. True even if no row matched."""
        stmt = (
            update(AppItem)
            .where(AppItem.id == updated_item.id)
            .values(
                {
                    AppItem.name: updated_item.name,
                    AppItem.description: updated_item.description,
                    AppItem.cost: updated_item.cost,
                    AppItem.amount: updated_item.amount,
                }
            )
        )
        async with self.engine.begin() as conn:
            await conn.execute(stmt)
        return True

    @db_operation("items.delete_by_id")
    async def delete_by_id(self, item_id: int) -> bool:
        """Delete an item's order links, then the item, in one transaction."""
        async with self.engine.begin() as conn:
            await conn.execute(delete(OrderItem).where(OrderItem.item_id == item_id))
            await conn.execute(delete(AppItem).where(AppItem.id == item_id))
        return True
