import asyncpg
import logging
from typing import Optional

from activity_relay.core.config import get_settings

logger = logging.getLogger(__name__)

_pool: Optional[asyncpg.pool.Pool] = None

async def get_pool() -> asyncpg.pool.Pool:
    global _pool
    if _pool is None:
        settings = get_settings()
        logger.info("Creating Postgres connection pool")
        _pool = await asyncpg.create_pool(dsn=settings.DATABASE_URL, min_size=1, max_size=5)
    return _pool

async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None

async def init_db() -> None:
    pool = await get_pool()
    async with pool.acquire() as conn:
        await conn.execute(
            '''
            CREATE TABLE IF NOT EXISTS ip_topics (
                ip TEXT PRIMARY KEY,
                topic_id BIGINT NOT NULL,
                created_at TIMESTAMPTZ DEFAULT NOW()
            );
            '''
        )
    logger.info("DB schema ensured")
