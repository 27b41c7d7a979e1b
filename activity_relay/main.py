import logging

from fastapi import FastAPI

from activity_relay.api.routes import router as activity_router
from activity_relay.bot.application import build_bot
from activity_relay.core.config import get_settings
from activity_relay.core.logging import setup_logging
from activity_relay.db.session import close_pool, init_db

logger = logging.getLogger(__name__)

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.SERVICE_NAME)

app = FastAPI(title=f"{settings.SERVICE_NAME} Activity Relay")
app.include_router(activity_router)


@app.on_event("startup")
async def on_startup() -> None:
    if settings.missing():
        logger.warning(
            "Missing settings: %s – /api/log_data will answer 500 until they are set",
            ", ".join(settings.missing()),
        )
        return

    logger.info("Starting up FastAPI + Telegram Bot")
    if settings.TOPIC_CACHE_BACKEND == "postgres":
        await init_db()

    bot = build_bot()
    await bot.initialize()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    if settings.missing():
        return

    logger.info("Shutting down Telegram Bot")
    await build_bot().shutdown()
    await close_pool()


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/meta")
async def meta():
    return {
        "service": settings.SERVICE_NAME,
        "has_bot_token": bool(settings.TELEGRAM_BOT_TOKEN),
        "has_chat_id": bool(settings.TELEGRAM_CHAT_ID),
        "topic_cache_backend": settings.TOPIC_CACHE_BACKEND,
        "message_timezone": settings.MESSAGE_TIMEZONE,
    }
