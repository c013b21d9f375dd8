"""Session-based authentication dependencies.

``POST /auth`` stores a ``Principal`` in the signed session cookie
(Starlette ``SessionMiddleware``). These dependencies read it back:

- ``get_principal``: the principal, or None. Never raises.
- ``require_principal``: 401 when nobody is logged in.
- ``require_admin``: 401 when nobody is logged in, 403 for non-admins.
"""

from typing import Annotated

from fastapi import Depends, Request
from pydantic import ValidationError

from core.errors import AuthenticationError, AuthorizationError
from core.logger import get_logger
from core.wide_event import set_wide_event_fields
from models import Role
from schemas import Principal

logger = get_logger(__name__)

SESSION_KEY = "principal"


def get_principal(request: Request) -> Principal | None:
    """Principal stored in the session, or None if absent or unreadable."""
    payload = request.session.get(SESSION_KEY)
    if not payload:
        return None

    try:
        principal = Principal.model_validate(payload)
    except ValidationError:
        logger.warning("auth.session.invalid")
        request.session.pop(SESSION_KEY, None)
        return None

    request.state.user_id = principal.id
    set_wide_event_fields(user_id=principal.id, user_role=principal.role.value)
    return principal


def store_principal(request: Request, principal: Principal) -> None:
    request.session[SESSION_KEY] = principal.model_dump(mode="json")


def clear_principal(request: Request) -> None:
    request.session.clear()


def require_principal(
    principal: Annotated[Principal | None, Depends(get_principal)],
) -> Principal:
    """Raises AuthenticationError if not logged in."""
    if principal is None:
        raise AuthenticationError("No session found! Please login.")
    return principal


def require_admin(
    principal: Annotated[Principal, Depends(require_principal)],
) -> Principal:
    """Raises AuthorizationError unless the principal is an Admin."""
    if principal.role != Role.ADMIN:
        set_wide_event_fields(auth_error="not_admin")
        raise AuthorizationError()
    return principal


AdminPrincipal = Annotated[Principal, Depends(require_admin)]
