from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from telegram.ext import Application

from holiday_bot.bot_handlers import build_handlers
from holiday_bot.holiday_selector import HolidaySelector
from holiday_bot.holiday_source import build_holiday_source
from holiday_bot.keepalive import self_ping_callback
from holiday_bot.reminder_service import NotificationService, broadcast_callback
from holiday_bot.settings import Settings, load_settings
from holiday_bot.subscriber_registry import SubscriberRegistry
from holiday_bot.web_app import LivenessReporter, create_app

LOGGER = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every Telegram long-poll request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_application(settings: Settings) -> Application:
    application = Application.builder().token(settings.telegram_bot_token).build()

    registry = SubscriberRegistry()
    notification_service = NotificationService(
        bot=application.bot,
        registry=registry,
        selector=HolidaySelector(build_holiday_source(settings)),
        region_name=settings.region_name,
        timezone=settings.timezone,
        quiet_hours=(settings.quiet_hours_start, settings.quiet_hours_end),
        confirmation_delay=settings.confirmation_delay,
        job_queue=application.job_queue,
    )
    application.bot_data["settings"] = settings
    application.bot_data["subscriber_registry"] = registry
    application.bot_data["notification_service"] = notification_service

    for handler in build_handlers():
        application.add_handler(handler)

    application.job_queue.run_daily(
        broadcast_callback,
        time=settings.broadcast_time.replace(tzinfo=settings.tzinfo),
        name="daily-holiday-broadcast",
    )

    if settings.public_url:
        application.job_queue.run_repeating(
            self_ping_callback,
            interval=settings.self_ping_interval,
            first=settings.self_ping_interval,
            name="self-ping",
        )
        LOGGER.info("Self-ping scheduled to keep service alive")

    return application


def build_lifespan(application: Application):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await application.initialize()
        await application.start()
        await application.updater.start_polling()
        LOGGER.info("Bot is running...")

        yield

        LOGGER.info("Stopping bot...")
        await application.updater.stop()
        await application.stop()
        await application.shutdown()

    return lifespan


def main() -> None:
    load_dotenv()
    configure_logging()

    settings = load_settings()
    application = build_application(settings)

    reporter = LivenessReporter(application.bot_data["subscriber_registry"])
    app = create_app(reporter, lifespan=build_lifespan(application))

    LOGGER.info("HTTP server is running on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
