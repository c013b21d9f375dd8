"""User endpoints.

Reads are admin-only. Registration (``POST /users``) is open.
"""

from fastapi import APIRouter, Request, Response
from starlette import status

from core.auth import AdminPrincipal
from core.ratelimit import limiter
from core.validators import to_number
from routes.dependencies import OrderRepo, UserRepo
from schemas import ErrorResponse, Order, User, UserResponse
from services import orders_service, users_service

router = APIRouter(prefix="/users", tags=["users"])

_ADMIN_LOOKUP_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get(
    "",
    response_model=list[UserResponse] | UserResponse,
    responses=_ADMIN_LOOKUP_ERRORS,
)
async def get_users(
    request: Request, repo: UserRepo, principal: AdminPrincipal
) -> list[UserResponse] | UserResponse:
    """List all users, or look one up by a single query parameter.

    ``GET /users?username=aanderson`` returns that user;
    ``GET /users`` with no parameters returns everyone.
    """
    query = dict(request.query_params)
    if query:
        return await users_service.get_user_by_unique_key(repo, query)
    return await users_service.get_all_users(repo)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses=_ADMIN_LOOKUP_ERRORS,
)
async def get_user(
    user_id: str, repo: UserRepo, principal: AdminPrincipal
) -> UserResponse:
    return await users_service.get_user_by_id(repo, to_number(user_id))


@router.get(
    "/{user_id}/orders",
    response_model=list[Order],
    responses=_ADMIN_LOOKUP_ERRORS,
)
async def get_user_orders(
    user_id: str, repo: OrderRepo, principal: AdminPrincipal
) -> list[Order]:
    return await orders_service.get_orders_by_user_id(repo, to_number(user_id))


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
@limiter.limit("10/minute")
async def register_user(request: Request, user: User, repo: UserRepo) -> UserResponse:
    """Register a new user. The role is always ``User``."""
    return await users_service.add_new_user(repo, user)


@router.patch(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_user(user_id: str, user: User, repo: UserRepo) -> Response:
    await users_service.update_user(repo, to_number(user_id), user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
)
async def delete_user(user_id: str, repo: UserRepo) -> Response:
    await users_service.delete_user_by_id(repo, to_number(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
