"""Unit tests for orders_service."""

from unittest.mock import AsyncMock

import pytest

from core.errors import BadRequestError, InternalServerError, NotFoundError
from repositories import OrderRepository
from schemas import Order
from services import orders_service
from tests.factories import ItemFactory, OrderFactory


@pytest.fixture
def repo() -> AsyncMock:
    return AsyncMock(spec=OrderRepository)


@pytest.mark.unit
class TestOrderReads:
    async def test_get_all_orders_empty(self, repo):
        repo.get_all.return_value = []
        with pytest.raises(NotFoundError):
            await orders_service.get_all_orders(repo)

    async def test_get_all_orders(self, repo):
        orders = [OrderFactory.build(id=1), OrderFactory.build(id=2)]
        repo.get_all.return_value = orders
        assert await orders_service.get_all_orders(repo) == orders

    @pytest.mark.parametrize("bad_id", [0, 3.14, float("nan"), "2"])
    async def test_get_order_by_id_invalid(self, repo, bad_id):
        with pytest.raises(BadRequestError):
            await orders_service.get_order_by_id(repo, bad_id)
        repo.get_by_id.assert_not_awaited()

    async def test_get_order_by_id_not_found(self, repo):
        repo.get_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await orders_service.get_order_by_id(repo, 2)

    async def test_get_orders_by_user_id(self, repo):
        orders = [OrderFactory.build(id=1, customer_id=2)]
        repo.get_by_user_id.return_value = orders

        assert await orders_service.get_orders_by_user_id(repo, 2) == orders
        repo.get_by_user_id.assert_awaited_once_with(2)

    async def test_get_orders_by_user_id_none_found(self, repo):
        repo.get_by_user_id.return_value = []
        with pytest.raises(NotFoundError):
            await orders_service.get_orders_by_user_id(repo, 2)

    async def test_get_orders_by_user_id_invalid(self, repo):
        with pytest.raises(BadRequestError):
            await orders_service.get_orders_by_user_id(repo, -2)

    async def test_get_items_by_order_id(self, repo):
        items = [ItemFactory.build(id=1)]
        repo.get_items_by_order_id.return_value = items
        assert await orders_service.get_items_by_order_id(repo, 1) == items

    async def test_get_items_by_order_id_empty(self, repo):
        repo.get_items_by_order_id.return_value = []
        with pytest.raises(NotFoundError):
            await orders_service.get_items_by_order_id(repo, 1)


@pytest.mark.unit
class TestOrderWrites:
    async def test_add_new_order(self, repo):
        new_order = OrderFactory.build()
        repo.save.return_value = new_order.model_copy(update={"id": 5})

        created = await orders_service.add_new_order(repo, new_order)

        assert created.id == 5
        repo.save.assert_awaited_once_with(new_order)

    async def test_add_closed_order_is_rejected(self, repo):
        with pytest.raises(BadRequestError):
            await orders_service.add_new_order(repo, OrderFactory.build(status=False))
        repo.save.assert_not_awaited()

    async def test_add_new_order_blank_location(self, repo):
        with pytest.raises(BadRequestError):
            await orders_service.add_new_order(repo, OrderFactory.build(location=""))

    async def test_update_order_assigns_path_id(self, repo):
        repo.update.return_value = True

        assert await orders_service.update_order(repo, 4, OrderFactory.build()) is True

        updated: Order = repo.update.await_args.args[0]
        assert updated.id == 4

    async def test_update_order_with_explicit_null_id_is_rejected(self, repo):
        with pytest.raises(BadRequestError):
            await orders_service.update_order(repo, 4, OrderFactory.build(id=None))
        repo.update.assert_not_awaited()

    async def test_update_order_invalid_path_id(self, repo):
        with pytest.raises(BadRequestError):
            await orders_service.update_order(repo, 0, OrderFactory.build())

    async def test_delete_unknown_order_is_true(self, repo):
        repo.delete_by_id.return_value = True
        assert await orders_service.delete_order_by_id(repo, 999) is True

    async def test_delete_invalid_id(self, repo):
        with pytest.raises(BadRequestError):
            await orders_service.delete_order_by_id(repo, "x")
        repo.delete_by_id.assert_not_awaited()

    async def test_repository_errors_propagate(self, repo):
        repo.delete_by_id.side_effect = InternalServerError()
        with pytest.raises(InternalServerError):
            await orders_service.delete_order_by_id(repo, 1)
