import logging
from typing import Any, Dict, Optional

from activity_relay.db.session import get_pool

logger = logging.getLogger(__name__)


async def fetch_ip_topic(ip: str) -> Optional[Dict[str, Any]]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        row = await conn.fetchrow(
            '''
            SELECT ip, topic_id, created_at
            FROM ip_topics
            WHERE ip = $1;
            ''',
            ip,
        )
    return dict(row) if row else None


async def upsert_ip_topic(ip: str, topic_id: int) -> None:
    pool = await get_pool()
    async with pool.acquire() as conn:
        await conn.execute(
            '''
            INSERT INTO ip_topics (ip, topic_id)
            VALUES ($1, $2)
            ON CONFLICT (ip)
            DO UPDATE SET topic_id = EXCLUDED.topic_id;
            ''',
            ip,
            topic_id,
        )
