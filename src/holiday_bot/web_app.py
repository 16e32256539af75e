from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from holiday_bot.subscriber_registry import SubscriberRegistry

LOGGER = logging.getLogger(__name__)

ROOT_TEXT = "Germany Holiday Reminder Bot is running!"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LivenessReporter:
    def __init__(
        self,
        registry: SubscriberRegistry,
        *,
        monotonic: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._registry = registry
        self._monotonic = monotonic
        self._wall_clock = wall_clock
        self._started = monotonic()

    def report(self) -> dict[str, Any]:
        timestamp = self._wall_clock().astimezone(timezone.utc)
        return {
            "status": "ok",
            "uptime": round(self._monotonic() - self._started, 3),
            "timestamp": timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "activeChats": self._registry.count(),
        }


def create_app(reporter: LivenessReporter, *, lifespan=None) -> FastAPI:
    app = FastAPI(title="Holiday Reminder Bot", lifespan=lifespan)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        LOGGER.debug("Health probe received")
        return reporter.report()

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        LOGGER.debug("Root probe received")
        return ROOT_TEXT

    return app
