"""Rate limiting with slowapi.

Counters live in ``RATELIMIT_STORAGE_URI``. The default ``memory://`` store
is per process, so deployments with more than one worker should point it at
Redis (``redis://host:port/db``).
"""

from datetime import UTC, datetime

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from core.config import get_settings
from core.logger import get_logger

logger = get_logger(__name__)

settings = get_settings()

if (
    settings.environment != "development"
    and settings.ratelimit_storage_uri == "memory://"
):
    logger.warning(
        "ratelimit.storage.in_memory",
        environment=settings.environment,
        hint="Set RATELIMIT_STORAGE_URI to a Redis URL for multiple workers",
    )

# Login attempts per client
AUTH_LIMIT = "20/minute"


def _client_key(request: Request) -> str:
    """Logged-in principals are limited per user id, everyone else per IP.

    ``request.state.user_id`` is set by the auth dependencies, so ``POST /auth``
    itself is always keyed by IP.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=_client_key,
    default_limits=["100/minute"],
    storage_uri=settings.ratelimit_storage_uri,
    # Fall back to memory while Redis is unreachable
    in_memory_fallback_enabled=settings.ratelimit_storage_uri.startswith("redis://"),
    key_prefix="orders:",
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Render 429s in the same shape as application errors."""
    logger.warning(
        "ratelimit.exceeded",
        client=_client_key(request),
        limit=exc.detail,
    )
    return JSONResponse(
        status_code=429,
        content={
            "statusCode": 429,
            "message": "Rate limit exceeded. Please slow down.",
            "timestamp": datetime.now(UTC).isoformat(),
        },
        headers={"Retry-After": str(getattr(exc, "retry_after", 60))},
    )
