import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Union

from telegram import Bot
from telegram.error import BadRequest, TelegramError

from activity_relay.core.errors import TopicCreationError
from activity_relay.topics.cache import TopicCache

logger = logging.getLogger(__name__)

TOPIC_LOOKUP_LIMIT = 100
DEFAULT_ICON_COLOR = 0x6FB9F0


class TopicSource(Enum):
    CACHE = "cache"
    EXISTING = "existing"
    CREATED = "created"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class TopicResolution:
    topic_id: Optional[int]
    source: TopicSource
    lookup_error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.topic_id is None


def topic_name_for_ip(ip: str) -> str:
    return f"IP: {ip}"


def find_topic_id(topics: Iterable[Any], name: str) -> Optional[int]:
    for topic in topics:
        if isinstance(topic, dict) and topic.get("name") == name:
            thread_id = topic.get("message_thread_id")
            if isinstance(thread_id, int):
                return thread_id
    return None


class TopicResolver:
    """Maps an IP address to the forum topic its messages are posted in.

    Looks in the cache first, then in the supergroup's existing topics, and
    creates a new topic as a last resort. Remote failures never propagate:
    the caller gets a degraded resolution and posts without a topic.
    """

    def __init__(
        self,
        bot: Bot,
        chat_id: Union[int, str],
        cache: TopicCache,
        icon_color: int = DEFAULT_ICON_COLOR,
    ) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self.cache = cache
        self.icon_color = icon_color

    async def resolve(self, ip: str) -> TopicResolution:
        if await self.cache.contains(ip):
            topic_id = await self.cache.get(ip)
            return TopicResolution(topic_id=topic_id, source=TopicSource.CACHE)

        name = topic_name_for_ip(ip)
        lookup_error = None
        try:
            existing = await self.find_existing_topic(name)
        except TelegramError as e:
            logger.error("Topic lookup failed for IP %s: %s", ip, e.message)
            lookup_error = e.message
            existing = None

        if existing is not None:
            logger.info("Found existing topic for IP %s: %s", ip, existing)
            await self.cache.put(ip, existing)
            return TopicResolution(topic_id=existing, source=TopicSource.EXISTING)

        try:
            created = await self.create_topic(name)
        except TopicCreationError as e:
            logger.error("Could not create topic for IP %s: %s", ip, e)
            await self.cache.put(ip, None)
            return TopicResolution(
                topic_id=None, source=TopicSource.DEGRADED, lookup_error=lookup_error
            )

        logger.info("Created topic %s for IP %s", created, ip)
        await self.cache.put(ip, created)
        return TopicResolution(
            topic_id=created, source=TopicSource.CREATED, lookup_error=lookup_error
        )

    async def find_existing_topic(self, name: str) -> Optional[int]:
        # getForumTopics is not part of every Bot API server; callers treat errors as no match
        result = await self.bot.do_api_request(
            "getForumTopics",
            api_kwargs={
                "chat_id": self.chat_id,
                "offset": 0,
                "limit": TOPIC_LOOKUP_LIMIT,
            },
        )
        if not isinstance(result, dict):
            return None
        topics = result.get("topics")
        if not isinstance(topics, list):
            return None
        return find_topic_id(topics, name)

    async def create_topic(self, name: str) -> int:
        try:
            topic = await self.bot.create_forum_topic(
                chat_id=self.chat_id,
                name=name,
                icon_color=self.icon_color,
            )
        except BadRequest as e:
            logger.debug("createForumTopic rejected: %s", e.message)
            raise TopicCreationError(
                "Topics ikke støttet - sjekk at gruppen er en supergruppe med topics aktivert"
            ) from e
        except TelegramError as e:
            raise TopicCreationError(f"Kunne ikke opprette topic: {e.message}") from e
        return topic.message_thread_id
