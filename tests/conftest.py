from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from activity_relay.bot.formatting import DEFAULT_TZ
from activity_relay.services.relay import ActivityRelay
from activity_relay.topics.cache import InMemoryTopicCache
from activity_relay.topics.resolver import TopicResolver

CHAT_ID = "-1001234567890"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeBot:
    """Records Bot API calls; raises the configured telegram errors."""

    def __init__(
        self,
        topics: Optional[List[Dict[str, Any]]] = None,
        lookup_result: Any = None,
        lookup_error: Optional[Exception] = None,
        create_error: Optional[Exception] = None,
        send_error: Optional[Exception] = None,
        next_thread_id: int = 501,
    ) -> None:
        self.topics = topics or []
        self.lookup_result = lookup_result
        self.lookup_error = lookup_error
        self.create_error = create_error
        self.send_error = send_error
        self.next_thread_id = next_thread_id
        self.calls: List[tuple] = []
        self.sent: List[Dict[str, Any]] = []

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    async def do_api_request(self, endpoint, api_kwargs=None, return_type=None):
        self.calls.append(("do_api_request", endpoint, api_kwargs))
        if self.lookup_error is not None:
            raise self.lookup_error
        if self.lookup_result is not None:
            return self.lookup_result
        return {"topics": self.topics}

    async def create_forum_topic(self, chat_id, name, icon_color=None):
        self.calls.append(("create_forum_topic", chat_id, name, icon_color))
        if self.create_error is not None:
            raise self.create_error
        thread_id = self.next_thread_id
        self.next_thread_id += 1
        self.topics.append({"name": name, "message_thread_id": thread_id})
        return SimpleNamespace(message_thread_id=thread_id, name=name, icon_color=icon_color)

    async def send_message(self, chat_id, text, parse_mode=None, message_thread_id=None):
        self.calls.append(("send_message", chat_id, message_thread_id))
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(
            {
                "chat_id": chat_id,
                "text": text,
                "parse_mode": parse_mode,
                "message_thread_id": message_thread_id,
            }
        )
        return SimpleNamespace(message_id=len(self.sent))


def make_relay(bot: FakeBot, cache: Optional[InMemoryTopicCache] = None) -> ActivityRelay:
    cache = cache if cache is not None else InMemoryTopicCache()
    resolver = TopicResolver(bot, CHAT_ID, cache)
    return ActivityRelay(bot, CHAT_ID, resolver, cache, tz=DEFAULT_TZ)


@pytest.fixture
def fake_bot() -> FakeBot:
    return FakeBot()
