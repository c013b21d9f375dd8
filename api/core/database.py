"""Async engine for the ordering database.

The engine doubles as the connection pool. It is built once in the lifespan,
kept on ``app.state.engine`` and handed to every repository, which borrows a
connection per call through ``engine.connect()`` or ``engine.begin()``.
"""

from __future__ import annotations

import asyncio
from typing import Annotated, NamedTuple, TypedDict

from fastapi import Depends, Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import QueuePool

from core.config import get_settings
from core.logger import get_logger

logger = get_logger(__name__)

_PING_TIMEOUT_SECONDS = 30


class Base(DeclarativeBase):
    pass


class PoolStatus(NamedTuple):
    pool_size: int
    checked_out: int
    overflow: int
    checked_in: int


class HealthCheckResult(TypedDict):
    database: bool
    pool: PoolStatus | None


def _watch_pool_saturation(engine: AsyncEngine) -> None:
    """Log a warning whenever a checkout leaves no idle connection."""
    pool = engine.sync_engine.pool
    if not isinstance(pool, QueuePool):
        return

    @event.listens_for(pool, "checkout")
    def _on_checkout(dbapi_conn, connection_record, connection_proxy):
        if pool.checkedout() >= pool.size():
            logger.warning(
                "db.pool.saturated",
                db_pool_checked_out=pool.checkedout(),
                db_pool_size=pool.size(),
                db_pool_overflow=pool.overflow(),
            )


def create_engine() -> AsyncEngine:
    """Build the bounded engine described by the current settings."""
    settings = get_settings()

    connect_args: dict = {}
    if settings.is_postgres:
        # asyncpg applies server settings to every new connection
        connect_args["server_settings"] = {
            "statement_timeout": str(settings.db_statement_timeout_ms)
        }

    engine = create_async_engine(
        settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    _watch_pool_saturation(engine)
    return engine


def get_engine(request: Request) -> AsyncEngine:
    return request.app.state.engine


DbEngine = Annotated[AsyncEngine, Depends(get_engine)]


async def check_db_connection(engine: AsyncEngine) -> None:
    """Run ``SELECT 1``; raises on failure or after the ping timeout."""
    async with asyncio.timeout(_PING_TIMEOUT_SECONDS):
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))


async def init_db(engine: AsyncEngine) -> None:
    """Fail startup early when the database cannot be reached.

    The schema itself is owned by Alembic, see ``alembic/versions``.
    """
    await check_db_connection(engine)
    logger.info("db.connectivity.verified", dialect=engine.dialect.name)


async def dispose_engine(engine: AsyncEngine) -> None:
    await engine.dispose()
    logger.info("db.engine.disposed")


def get_pool_status(engine: AsyncEngine) -> PoolStatus | None:
    """Pool counters, or None for pools that do not track them (e.g. StaticPool)."""
    pool = engine.sync_engine.pool
    if not isinstance(pool, QueuePool):
        return None
    return PoolStatus(
        pool_size=pool.size(),
        checked_out=pool.checkedout(),
        overflow=pool.overflow(),
        checked_in=pool.checkedin(),
    )


async def comprehensive_health_check(engine: AsyncEngine) -> HealthCheckResult:
    """Connectivity plus pool counters; never raises."""
    try:
        await check_db_connection(engine)
        reachable = True
    except Exception:
        logger.warning("db.health_check.failed", exc_info=True)
        reachable = False

    return {"database": reachable, "pool": get_pool_status(engine)}
