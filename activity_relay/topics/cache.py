"""IP-to-topic caches used by the topic resolver.

A cached ``None`` means topic creation already failed for that IP; the
resolver returns it as-is instead of trying again. Failures are never
written to the durable store.
"""
import logging
from typing import Dict, Optional, Protocol, Set

from activity_relay.db.repositories import fetch_ip_topic, upsert_ip_topic

logger = logging.getLogger(__name__)


class TopicCache(Protocol):
    async def contains(self, ip: str) -> bool: ...

    async def get(self, ip: str) -> Optional[int]: ...

    async def put(self, ip: str, topic_id: Optional[int]) -> None: ...


class InMemoryTopicCache:
    """Process-lifetime mapping; never evicts, lost on restart."""

    def __init__(self) -> None:
        self._topics: Dict[str, Optional[int]] = {}

    async def contains(self, ip: str) -> bool:
        return ip in self._topics

    async def get(self, ip: str) -> Optional[int]:
        return self._topics.get(ip)

    async def put(self, ip: str, topic_id: Optional[int]) -> None:
        self._topics[ip] = topic_id

    def __len__(self) -> int:
        return len(self._topics)


class PostgresTopicCache:
    """Mapping kept in the ``ip_topics`` table, shared by every invocation.

    Failed creations are remembered in this process only, so a restart
    retries topic creation for those IPs.
    """

    def __init__(self) -> None:
        self._failed: Set[str] = set()

    async def contains(self, ip: str) -> bool:
        if ip in self._failed:
            return True
        row = await fetch_ip_topic(ip)
        return row is not None and row["topic_id"] is not None

    async def get(self, ip: str) -> Optional[int]:
        if ip in self._failed:
            return None
        row = await fetch_ip_topic(ip)
        if row is None:
            return None
        return row["topic_id"]

    async def put(self, ip: str, topic_id: Optional[int]) -> None:
        if topic_id is None:
            self._failed.add(ip)
            return
        self._failed.discard(ip)
        await upsert_ip_topic(ip, topic_id)
        logger.debug("Stored topic %s for IP %s", topic_id, ip)
