"""Item endpoints."""

from fastapi import APIRouter, Request, Response
from starlette import status

from core.auth import AdminPrincipal
from core.ratelimit import limiter
from core.validators import to_number
from routes.dependencies import ItemRepo
from schemas import ErrorResponse, Item
from services import items_service

router = APIRouter(prefix="/items", tags=["items"])


@router.get(
    "",
    response_model=list[Item],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def get_all_items(repo: ItemRepo, principal: AdminPrincipal) -> list[Item]:
    """List every item (admins only)."""
    return await items_service.get_all_items(repo)


@router.get(
    "/{item_id}",
    response_model=Item,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_item(item_id: str, repo: ItemRepo) -> Item:
    return await items_service.get_item_by_id(repo, to_number(item_id))


@router.post(
    "/{order_id}",
    response_model=Item,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit("30/minute")
async def add_item(request: Request, order_id: str, item: Item, repo: ItemRepo) -> Item:
    """Create an item and attach it to the order ``order_id``."""
    return await items_service.add_new_item(repo, item, to_number(order_id))


@router.patch(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
)
async def update_item(item_id: str, item: Item, repo: ItemRepo) -> Response:
    await items_service.update_item(repo, to_number(item_id), item)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
)
async def delete_item(item_id: str, repo: ItemRepo) -> Response:
    await items_service.delete_item_by_id(repo, to_number(item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
