"""Integration tests for OrderRepository against in-memory SQLite."""

from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import func, select, text

from core.errors import InternalServerError
from models import OrderItem
from repositories import ItemRepository, OrderRepository
from schemas import Order
from tests.factories import ItemFactory, OrderFactory


@pytest_asyncio.fixture
async def saved_order(order_repo: OrderRepository, regular_user) -> Order:
    return await order_repo.save(
        Order(
            customer_id=regular_user.id,
            status=True,
            location="Seattle, Washington",
            destination="New York City, New York",
        )
    )


async def _join_rows(engine, order_id: int) -> int:
    async with engine.connect() as conn:
        result = await conn.execute(
            select(func.count()).where(OrderItem.order_id == order_id)
        )
        return result.scalar_one()


@pytest.mark.integration
class TestOrderReads:
    async def test_get_all_empty_table(self, order_repo):
        assert await order_repo.get_all() == []

    async def test_get_by_id_maps_customer_column(
        self, order_repo, saved_order, regular_user
    ):
        order = await order_repo.get_by_id(saved_order.id)
        assert order.customer_id == regular_user.id
        assert order.status is True
        assert order.location == "Seattle, Washington"

    async def test_get_by_id_missing_returns_none(self, order_repo):
        assert await order_repo.get_by_id(42) is None

    async def test_get_by_user_id(self, order_repo, admin_user, regular_user):
        mine = await order_repo.save(OrderFactory.build(customer_id=regular_user.id))
        await order_repo.save(OrderFactory.build(customer_id=admin_user.id))

        orders = await order_repo.get_by_user_id(regular_user.id)

        assert [o.id for o in orders] == [mine.id]

    async def test_get_by_user_id_without_orders(self, order_repo, saved_order):
        assert await order_repo.get_by_user_id(99) == []

    async def test_get_items_by_order_id(self, order_repo, item_repo, saved_order):
        other = await order_repo.save(
            OrderFactory.build(customer_id=saved_order.customer_id)
        )
        first = await item_repo.save(
            ItemFactory.build(cost=Decimal("3.99"), amount=3), saved_order.id
        )
        second = await item_repo.save(ItemFactory.build(), saved_order.id)
        await item_repo.save(ItemFactory.build(), other.id)

        items = await order_repo.get_items_by_order_id(saved_order.id)

        assert [i.id for i in items] == [first.id, second.id]
        assert items[0].cost == Decimal("3.99")
        assert items[0].amount == 3

    async def test_get_items_by_order_id_without_items(self, order_repo, saved_order):
        assert await order_repo.get_items_by_order_id(saved_order.id) == []


@pytest.mark.integration
class TestOrderWrites:
    async def test_save_returns_generated_id(self, order_repo, regular_user):
        saved = await order_repo.save(OrderFactory.build(customer_id=regular_user.id))
        assert saved.id is not None
        assert (await order_repo.get_by_id(saved.id)).customer_id == regular_user.id

    async def test_save_for_unknown_customer_is_internal_error(self, order_repo):
        with pytest.raises(InternalServerError):
            await order_repo.save(OrderFactory.build(customer_id=4242))
        assert await order_repo.get_all() == []

    async def test_update_to_unknown_customer_is_internal_error(
        self, order_repo, saved_order
    ):
        moved = saved_order.model_copy(update={"customer_id": 4242})
        with pytest.raises(InternalServerError):
            await order_repo.update(moved)
        stored = await order_repo.get_by_id(saved_order.id)
        assert stored.customer_id == saved_order.customer_id

    async def test_update(self, order_repo, saved_order):
        closed = saved_order.model_copy(update={"status": False, "location": "Tacoma"})

        assert await order_repo.update(closed) is True

        stored = await order_repo.get_by_id(saved_order.id)
        assert stored.status is False
        assert stored.location == "Tacoma"

    async def test_delete_removes_join_rows_then_order(
        self, test_engine, order_repo, item_repo: ItemRepository, saved_order
    ):
        item = await item_repo.save(ItemFactory.build(), saved_order.id)

        assert await order_repo.delete_by_id(saved_order.id) is True

        assert await order_repo.get_by_id(saved_order.id) is None
        assert await _join_rows(test_engine, saved_order.id) == 0
        # The item itself is kept
        assert await item_repo.get_by_id(item.id) is not None

    async def test_delete_unknown_id_still_true(self, order_repo):
        assert await order_repo.delete_by_id(12345) is True


@pytest.mark.integration
async def test_delete_is_atomic(test_engine, order_repo, item_repo, saved_order):
    """If the second statement fails, the join rows come back."""
    await item_repo.save(ItemFactory.build(), saved_order.id)
    async with test_engine.begin() as conn:
        await conn.execute(
            text(
                "CREATE TRIGGER block_order_delete BEFORE DELETE ON app_orders "
                "BEGIN SELECT RAISE(ABORT, 'blocked'); END"
            )
        )

    with pytest.raises(InternalServerError):
        await order_repo.delete_by_id(saved_order.id)

    assert await _join_rows(test_engine, saved_order.id) == 1
    assert await order_repo.get_by_id(saved_order.id) is not None
