"""
Database connection and pool management
"""

import asyncpg
import logging
from typing import Optional

from users_api.config import settings

logger = logging.getLogger(__name__)


async def init_database(database_url: Optional[str] = None) -> asyncpg.Pool:
    """Create the connection pool and verify the database is reachable"""
    dsn = database_url or settings.DATABASE_URL
    if not dsn:
        raise ValueError("DATABASE_URL environment variable is required")

    try:
        db_pool = await asyncpg.create_pool(
            dsn,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            command_timeout=settings.DB_COMMAND_TIMEOUT,
        )
    except Exception as e:
        logger.critical(f"failed to connect db: {e}")
        raise

    # Test connection
    try:
        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except Exception as e:
        logger.critical(f"failed to ping the db connection: {e}")
        await db_pool.close()
        raise

    logger.info("Database initialized successfully")
    return db_pool


async def close_database(db_pool: Optional[asyncpg.Pool]):
    """Close database connection pool"""
    if db_pool:
        await db_pool.close()
    logger.info("Database connections closed")
