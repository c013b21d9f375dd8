"""Login and logout."""

from fastapi import APIRouter, Request, Response
from starlette import status

from core.auth import clear_principal, store_principal
from core.ratelimit import AUTH_LIMIT, limiter
from routes.dependencies import UserRepo
from schemas import Credentials, ErrorResponse, Principal
from services import users_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "",
    response_model=Principal,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
@limiter.limit(AUTH_LIMIT)
async def login(request: Request, credentials: Credentials, repo: UserRepo) -> Principal:
    """Check credentials and store the principal in the session."""
    user = await users_service.authenticate_user(
        repo, credentials.username, credentials.password
    )
    principal = Principal(id=user.id, username=user.username, role=user.role)
    store_principal(request, principal)
    return principal


@router.get(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def logout(request: Request) -> Response:
    """End the session."""
    clear_principal(request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
