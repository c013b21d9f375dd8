"""Order endpoints."""

from fastapi import APIRouter, Request, Response
from starlette import status

from core.auth import AdminPrincipal
from core.ratelimit import limiter
from core.validators import to_number
from routes.dependencies import OrderRepo
from schemas import ErrorResponse, Item, Order
from services import orders_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get(
    "",
    response_model=list[Order],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def get_all_orders(repo: OrderRepo, principal: AdminPrincipal) -> list[Order]:
    """List every order (admins only)."""
    return await orders_service.get_all_orders(repo)


@router.get(
    "/{order_id}",
    response_model=Order,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_order(order_id: str, repo: OrderRepo) -> Order:
    return await orders_service.get_order_by_id(repo, to_number(order_id))


@router.get(
    "/{order_id}/items",
    response_model=list[Item],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_order_items(order_id: str, repo: OrderRepo) -> list[Item]:
    """Items attached to an order."""
    return await orders_service.get_items_by_order_id(repo, to_number(order_id))


@router.post(
    "",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit("30/minute")
async def add_order(request: Request, order: Order, repo: OrderRepo) -> Order:
    return await orders_service.add_new_order(repo, order)


@router.patch(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
)
async def update_order(order_id: str, order: Order, repo: OrderRepo) -> Response:
    await orders_service.update_order(repo, to_number(order_id), order)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
)
async def delete_order(order_id: str, repo: OrderRepo) -> Response:
    """Delete an order together with its item links."""
    await orders_service.delete_order_by_id(repo, to_number(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
