import logging
from functools import lru_cache

from telegram import Bot

from activity_relay.core.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache()
def build_bot() -> Bot:
    settings = get_settings()
    settings.require_telegram()
    bot = Bot(token=settings.TELEGRAM_BOT_TOKEN)
    logger.info("Telegram Bot built")
    return bot
