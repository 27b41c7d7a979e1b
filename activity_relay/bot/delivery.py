import logging
from typing import Optional, Union

from telegram import Bot, Message
from telegram.constants import ParseMode
from telegram.error import TelegramError

from activity_relay.core.errors import DeliveryError

logger = logging.getLogger(__name__)


async def deliver(
    bot: Bot,
    chat_id: Union[int, str],
    text: str,
    topic_id: Optional[int] = None,
) -> Message:
    """Post ``text`` to the chat, inside the topic thread when one is given."""
    kwargs = {}
    if topic_id is not None:
        kwargs["message_thread_id"] = topic_id

    try:
        return await bot.send_message(
            chat_id=chat_id,
            text=text,
            parse_mode=ParseMode.HTML,
            **kwargs,
        )
    except TelegramError as e:
        description = e.message or "transport error"
        raise DeliveryError(f"Telegram API error: {description}") from e
