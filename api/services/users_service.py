"""User service for user-related business logic.

Every function takes the ``UserRepository`` as its first argument. Input is
checked with the predicates in ``core.validators`` before the repository is
touched, and passwords are stripped from everything handed back to callers.
"""

from collections.abc import Mapping
from typing import Any

from core.errors import (
    AuthenticationError,
    BadRequestError,
    NotFoundError,
    ResourcePersistenceError,
)
from core.logger import get_logger
from core.validators import (
    is_empty_object,
    is_property_of,
    is_valid_id,
    is_valid_object,
    is_valid_strings,
    to_number,
)
from core.wide_event import set_wide_event_fields
from models import Role
from repositories.user_repository import LOOKUP_COLUMNS, UserRepository
from schemas import User, UserResponse

logger = get_logger(__name__)

# Query keys may arrive in either spelling (``firstName`` or ``first_name``)
_FIELD_NAMES: dict[str, str] = {
    **{name: name for name in User.model_fields},
    **{
        field.alias: name
        for name, field in User.model_fields.items()
        if field.alias is not None
    },
}


def _remove_password(user: User) -> UserResponse:
    return UserResponse.model_validate(user.model_dump(exclude={"password"}))


async def get_all_users(repo: UserRepository) -> list[UserResponse]:
    users = await repo.get_all()

    if len(users) == 0:
        raise NotFoundError()

    return [_remove_password(user) for user in users]


async def get_user_by_id(repo: UserRepository, user_id: Any) -> UserResponse:
    if not is_valid_id(user_id):
        raise BadRequestError()

    user = await repo.get_by_id(int(user_id))

    if is_empty_object(user):
        raise NotFoundError()

    return _remove_password(user)


async def get_user_by_unique_key(
    repo: UserRepository, query: Mapping[str, Any]
) -> UserResponse:
    """Look a user up by a single unique key, e.g. ``{"username": "aanderson"}``.

    Only the first key is used. ``id`` lookups go through ``get_user_by_id``;
    ``password`` and ``role`` are declared fields but cannot be searched on.
    """
    if not query:
        raise BadRequestError()

    fields = [_FIELD_NAMES.get(key, key) for key in query]
    if not all(is_property_of(field, User) for field in fields):
        raise BadRequestError()

    key = fields[0]
    value = next(iter(query.values()))

    if key == "id":
        return await get_user_by_id(repo, to_number(value))

    if key not in LOOKUP_COLUMNS:
        raise BadRequestError(f"Users cannot be searched by {key}.")

    if not is_valid_strings(value):
        raise BadRequestError()

    user = await repo.get_by_unique_key(key, value)

    if is_empty_object(user):
        raise NotFoundError()

    return _remove_password(user)


async def authenticate_user(
    repo: UserRepository, username: Any, password: Any
) -> UserResponse:
    if not is_valid_strings(username, password):
        raise BadRequestError()

    user = await repo.get_by_credentials(username, password)

    if is_empty_object(user):
        logger.warning("auth.login.failed", username=username)
        raise AuthenticationError("Bad credentials provided.")

    logger.info("auth.login.success", user_id=user.id)
    return _remove_password(user)


async def add_new_user(repo: UserRepository, new_user: User) -> UserResponse:
    """Register a user. New users always get the ``User`` role."""
    if not is_valid_object(new_user, "id", "role"):
        raise BadRequestError("Invalid property values found in provided user.")

    if not await is_username_available(repo, new_user.username):
        raise ResourcePersistenceError("The provided username is already taken.")

    if not await is_email_available(repo, new_user.email):
        raise ResourcePersistenceError("The provided email is already taken.")

    persisted = await repo.save(new_user.model_copy(update={"role": Role.USER}))

    set_wide_event_fields(user_id=persisted.id)
    logger.info("users.registered", user_id=persisted.id)
    return _remove_password(persisted)


async def update_user(repo: UserRepository, user_id: Any, updated_user: User) -> bool:
    """Overwrite the user at ``user_id``. The body's own ``id`` is ignored."""
    if not is_valid_object(updated_user, "id", "role"):
        raise BadRequestError("Invalid property values found in provided user.")

    if not is_valid_id(user_id):
        raise BadRequestError()

    user_id = int(user_id)

    if not await is_username_available(repo, updated_user.username, user_id):
        raise ResourcePersistenceError("The provided username is already taken.")

    if not await is_email_available(repo, updated_user.email, user_id):
        raise ResourcePersistenceError("The provided email is already taken.")

    return await repo.update(
        updated_user.model_copy(update={"id": user_id, "role": Role.USER})
    )


async def delete_user_by_id(repo: UserRepository, user_id: Any) -> bool:
    if not is_valid_id(user_id):
        raise BadRequestError()

    return await repo.delete_by_id(int(user_id))


async def is_username_available(
    repo: UserRepository, username: str, user_id: int | None = None
) -> bool:
    """True if nobody else holds ``username``.

    A match on ``user_id`` itself counts as available, so a user can keep
    their own username on update.
    """
    try:
        found = await get_user_by_unique_key(repo, {"username": username})
    except (NotFoundError, BadRequestError):
        return True
    return found.id == user_id


async def is_email_available(
    repo: UserRepository, email: str, user_id: int | None = None
) -> bool:
    """True if nobody else holds ``email`` (ignoring ``user_id`` itself)."""
    try:
        found = await get_user_by_unique_key(repo, {"email": email})
    except (NotFoundError, BadRequestError):
        return True
    return found.id == user_id
