import pytest
from telegram.error import BadRequest, TelegramError

from activity_relay.bot.delivery import deliver
from activity_relay.core.errors import DeliveryError
from conftest import CHAT_ID, FakeBot


@pytest.mark.anyio
async def test_deliver_without_topic_omits_thread_id(fake_bot: FakeBot) -> None:
    await deliver(fake_bot, CHAT_ID, "<b>hi</b>")

    assert fake_bot.sent == [
        {
            "chat_id": CHAT_ID,
            "text": "<b>hi</b>",
            "parse_mode": "HTML",
            "message_thread_id": None,
        }
    ]


@pytest.mark.anyio
async def test_deliver_scopes_to_topic(fake_bot: FakeBot) -> None:
    message = await deliver(fake_bot, CHAT_ID, "hi", topic_id=9)

    assert message.message_id == 1
    assert fake_bot.sent[0]["message_thread_id"] == 9


@pytest.mark.anyio
async def test_deliver_failure_uses_remote_description() -> None:
    bot = FakeBot(send_error=BadRequest("Message thread not found"))

    with pytest.raises(DeliveryError) as exc_info:
        await deliver(bot, CHAT_ID, "hi", topic_id=9)

    assert str(exc_info.value) == "Telegram API error: Message thread not found"


@pytest.mark.anyio
async def test_deliver_failure_without_description() -> None:
    bot = FakeBot(send_error=TelegramError(""))

    with pytest.raises(DeliveryError, match="Telegram API error: transport error"):
        await deliver(bot, CHAT_ID, "hi")
