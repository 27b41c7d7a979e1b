import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

from activity_relay.core.errors import ConfigurationError

load_dotenv()

CACHE_BACKENDS = ("memory", "postgres")


class Settings:
    TELEGRAM_BOT_TOKEN: str
    TELEGRAM_CHAT_ID: str
    SERVICE_NAME: str
    LOG_LEVEL: str
    MESSAGE_TIMEZONE: str
    TOPIC_ICON_COLOR: int
    TOPIC_CACHE_BACKEND: str
    DATABASE_URL: Optional[str]

    def __init__(self) -> None:
        # Missing Telegram settings fail each relay request, not the import.
        self.TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "").strip()
        self.TELEGRAM_CHAT_ID = os.getenv("TELEGRAM_CHAT_ID", "").strip()

        self.SERVICE_NAME = os.getenv("SERVICE_NAME", "activity-relay").strip()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.MESSAGE_TIMEZONE = os.getenv("MESSAGE_TIMEZONE", "Europe/Oslo").strip()

        color_raw = os.getenv("TOPIC_ICON_COLOR", "").strip()
        self.TOPIC_ICON_COLOR = 0x6FB9F0
        if color_raw:
            try:
                self.TOPIC_ICON_COLOR = int(color_raw, 0)
            except ValueError:
                pass

        backend = os.getenv("TOPIC_CACHE_BACKEND", "memory").strip().lower()
        self.TOPIC_CACHE_BACKEND = backend if backend in CACHE_BACKENDS else "memory"
        self.DATABASE_URL = os.getenv("DATABASE_URL", "").strip() or None

    @property
    def has_telegram(self) -> bool:
        return bool(self.TELEGRAM_BOT_TOKEN and self.TELEGRAM_CHAT_ID)

    def missing(self) -> List[str]:
        names = []
        if not self.TELEGRAM_BOT_TOKEN:
            names.append("TELEGRAM_BOT_TOKEN")
        if not self.TELEGRAM_CHAT_ID:
            names.append("TELEGRAM_CHAT_ID")
        if self.TOPIC_CACHE_BACKEND == "postgres" and not self.DATABASE_URL:
            names.append("DATABASE_URL")
        return names

    def require_telegram(self) -> None:
        if not self.has_telegram:
            raise ConfigurationError(
                "TELEGRAM_BOT_TOKEN eller TELEGRAM_CHAT_ID er ikke satt i miljøvariabler"
            )
        if self.TOPIC_CACHE_BACKEND == "postgres" and not self.DATABASE_URL:
            raise ConfigurationError("DATABASE_URL er påkrevd når TOPIC_CACHE_BACKEND=postgres")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
