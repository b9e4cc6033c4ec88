"""
asyncpg pool for the hosted Postgres database.

One pool per process, opened by the application lifespan and shared by all
requests. Each request borrows a single connection through DBSessionDep
(see core/dependencies.py); services receive that connection as their first
argument and never touch the pool themselves.

Tables reached through it: years, semesters, sections, subjects,
registration_numbers, student_profiles, faculty, faculty_assignments,
faculty_credentials_ratings, ratings, and the faculty_stats view.

    await init_db()                 # lifespan startup
    pool = await get_db_pool()
    async with pool.acquire() as conn:
        await conn.fetch(LIST_YEARS_QUERY)
    await close_db()                # lifespan shutdown
"""

import logging
from typing import Optional

import asyncpg
from asyncpg import Pool

from faculty_rating.core.config import get_settings


logger = logging.getLogger(__name__)


# Set by init_db(), cleared by close_db()
_pool: Optional[Pool] = None


# =============================================================================
# Pool lifecycle
# =============================================================================

async def init_db() -> Pool:
    """
    Open the pool using the sizing, timeout and statement cache settings.

    A second call returns the pool already open.

    Raises:
        asyncpg.PostgresError: the server refused the connection.
        OSError: the host could not be reached.
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
            statement_cache_size=settings.db_statement_cache_size,
        )
        logger.info(
            f"Database pool created (min={settings.db_pool_min_size}, "
            f"max={settings.db_pool_max_size})"
        )

    return _pool


async def get_db_pool() -> Pool:
    """Return the open pool, opening it first when the lifespan did not."""
    if _pool is None:
        return await init_db()
    return _pool


async def close_db() -> None:
    """Close the pool; a no-op when it is not open."""
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Database pool closed")


# =============================================================================
# Command status
# =============================================================================

def affected_rows(status: str) -> int:
    """
    Row count of an asyncpg command status ('UPDATE 3' -> 3).

    Returns 0 for statuses without a trailing count.
    """
    try:
        return int(status.split()[-1])
    except (ValueError, IndexError, AttributeError):
        return 0
