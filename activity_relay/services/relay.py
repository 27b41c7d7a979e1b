import logging
import uuid
from datetime import tzinfo
from functools import lru_cache
from typing import Union
from zoneinfo import ZoneInfo

from telegram import Bot

from activity_relay.bot.application import build_bot
from activity_relay.bot.delivery import deliver
from activity_relay.bot.formatting import DEFAULT_TZ, format_activity_message
from activity_relay.core.config import get_settings
from activity_relay.services.models import ActivityEvent, ActivityPayload, RelayResult
from activity_relay.topics.cache import InMemoryTopicCache, PostgresTopicCache, TopicCache
from activity_relay.topics.resolver import TopicResolver

logger = logging.getLogger(__name__)


class ActivityRelay:
    """Resolve the IP's topic, format the event and post it, in that order."""

    def __init__(
        self,
        bot: Bot,
        chat_id: Union[int, str],
        resolver: TopicResolver,
        cache: TopicCache,
        tz: tzinfo = DEFAULT_TZ,
    ) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self.resolver = resolver
        self.cache = cache
        self.tz = tz

    async def relay(self, payload: ActivityPayload, ip: str) -> RelayResult:
        session_uid = payload.session_uid
        if not session_uid:
            session_uid = str(uuid.uuid4())
            logger.info("Generated new session_uid on the server: %s", session_uid)
        else:
            logger.info("Received session_uid from client: %s", session_uid)

        # Decided before resolution, so an IP whose topic already exists
        # remotely but is unknown to this cache still gets the banner.
        is_new_ip = not await self.cache.contains(ip)

        resolution = await self.resolver.resolve(ip)

        event = ActivityEvent(
            page=payload.page,
            event_description=payload.event_description,
            klartekst_input=payload.klartekst_input,
            ip_adresse=ip,
            session_uid=session_uid,
        )
        text = format_activity_message(event, is_new_ip=is_new_ip, tz=self.tz)

        await deliver(self.bot, self.chat_id, text, resolution.topic_id)
        logger.info("Activity sent to Telegram for IP %s (topic=%s)", ip, resolution.topic_id)

        return RelayResult(
            session_uid=session_uid,
            ip_adresse=ip,
            is_new_ip=is_new_ip,
            resolution=resolution,
        )


def build_cache(backend: str) -> TopicCache:
    if backend == "postgres":
        return PostgresTopicCache()
    return InMemoryTopicCache()


@lru_cache()
def get_relay() -> ActivityRelay:
    settings = get_settings()
    settings.require_telegram()

    bot = build_bot()
    cache = build_cache(settings.TOPIC_CACHE_BACKEND)
    resolver = TopicResolver(
        bot,
        settings.TELEGRAM_CHAT_ID,
        cache,
        icon_color=settings.TOPIC_ICON_COLOR,
    )
    logger.info("Activity relay ready (cache=%s)", settings.TOPIC_CACHE_BACKEND)
    return ActivityRelay(
        bot,
        settings.TELEGRAM_CHAT_ID,
        resolver,
        cache,
        tz=ZoneInfo(settings.MESSAGE_TIMEZONE),
    )
