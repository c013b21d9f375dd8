"""Order repository for database operations."""

from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from models import AppItem, AppOrder, OrderItem
from repositories.mappers import map_item_row, map_order_row
from repositories.utils import db_operation
from schemas import Item, Order


def _base_query() -> Select:
    return select(
        AppOrder.id,
        AppOrder.customer_id.label("customerid"),
        AppOrder.status,
        AppOrder.location,
        AppOrder.destination,
    )


class OrderRepository:
    """Repository for Order database operations."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @db_operation("orders.get_all")
    async def get_all(self) -> list[Order]:
        async with self.engine.connect() as conn:
            result = await conn.execute(_base_query().order_by(AppOrder.id))
            return [map_order_row(row) for row in result.mappings()]

    @db_operation("orders.get_by_id")
    async def get_by_id(self, order_id: int) -> Order | None:
        async with self.engine.connect() as conn:
            result = await conn.execute(_base_query().where(AppOrder.id == order_id))
            return map_order_row(result.mappings().first())

    @db_operation("orders.get_by_user_id")
    async def get_by_user_id(self, user_id: int) -> list[Order]:
        """Get all orders placed by a user."""
        async with self.engine.connect() as conn:
            result = await conn.execute(
                _base_query()
                .where(AppOrder.customer_id == user_id)
                .order_by(AppOrder.id)
            )
            return [map_order_row(row) for row in result.mappings()]

    @db_operation("orders.get_items_by_order_id")
    async def get_items_by_order_id(self, order_id: int) -> list[Item]:
        """Get the items linked to an order through the join table."""
        stmt = (
            select(
                AppItem.id,
                AppItem.name,
                AppItem.description,
                AppItem.cost,
                AppItem.amount,
            )
            .join(OrderItem, OrderItem.item_id == AppItem.id)
            .join(AppOrder, AppOrder.id == OrderItem.order_id)
            .where(AppOrder.id == order_id)
            .order_by(AppItem.id)
        )
        async with self.engine.connect() as conn:
            result = await conn.execute(stmt)
            return [map_item_row(row) for row in result.mappings()]

    @db_operation("orders.save")
    async def save(self, new_order: Order) -> Order:
        """Insert an order and return it with its generated id."""
        stmt = (
            insert(AppOrder)
            .values(
                {
                    AppOrder.customer_id: new_order.customer_id,
                    AppOrder.status: new_order.status,
                    AppOrder.location: new_order.location,
                    AppOrder.destination: new_order.destination,
                }
            )
            .returning(AppOrder.id)
        )
        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            new_id = result.scalar_one()

        return new_order.model_copy(update={"id": new_id})

    @db_operation("orders.update")
    async def update(self, updated_order: Order) -> bool:
        """Overwrite every mutable column. True even if no row matched."""
        stmt = (
            update(AppOrder)
            .where(AppOrder.id == updated_order.id)
            .values(
                {
                    AppOrder.customer_id: updated_order.customer_id,
                    AppOrder.status: updated_order.status,
                    AppOrder.location: updated_order.location,
                    AppOrder.destination: updated_order.destination,
                }
            )
        )
        async with self.engine.begin() as conn:
            await conn.execute(stmt)
        return True

    @db_operation("orders.delete_by_id")
    async def delete_by_id(self, order_id: int) -> bool:
        """Delete an order's item links, then the order, in one transaction."""
        async with self.engine.begin() as conn:
            await conn.execute(delete(OrderItem).where(OrderItem.order_id == order_id))
            await conn.execute(delete(AppOrder).where(AppOrder.id == order_id))
        return True
