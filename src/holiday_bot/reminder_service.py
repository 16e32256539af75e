from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from telegram import Bot
from telegram.error import Forbidden, TelegramError
from telegram.ext import CallbackContext, JobQueue

from holiday_bot.date_logic import is_quiet_hours
from holiday_bot.holiday_selector import HolidaySelector
from holiday_bot.messages import (
    format_broadcast_message,
    format_confirmation_message,
    format_upcoming_list,
    format_welcome_message,
)
from holiday_bot.models import BroadcastReport, DeliveryResult, DeliveryStatus
from holiday_bot.subscriber_registry import SubscriberRegistry

LOGGER = logging.getLogger(__name__)

WELCOME_HOLIDAY_COUNT = 2


def confirmation_job_name(chat_id: int) -> str:
    return f"confirmation-{chat_id}"


class NotificationService:
    """Subscriber lifecycle and every outbound message the bot sends.

    Sends are best-effort and produce a ``DeliveryResult`` each. A result of
    ``UNREACHABLE`` (the chat blocked or removed the bot) drops the chat from
    the registry and cancels its pending confirmation; any other failure is
    logged and otherwise ignored.
    """

    def __init__(
        self,
        *,
        bot: Bot,
        registry: SubscriberRegistry,
        selector: HolidaySelector,
        region_name: str,
        timezone: str,
        quiet_hours: tuple[time, time],
        confirmation_delay: timedelta,
        job_queue: JobQueue | None = None,
    ) -> None:
        self._bot = bot
        self._registry = registry
        self._selector = selector
        self._region_name = region_name
        self._tz = ZoneInfo(timezone)
        self._quiet_hours = quiet_hours
        self._confirmation_delay = confirmation_delay
        self._job_queue = job_queue

    @property
    def registry(self) -> SubscriberRegistry:
        return self._registry

    def now(self) -> datetime:
        return datetime.now(self._tz)

    async def deliver(self, chat_id: int, text: str) -> DeliveryResult:
        try:
            await self._bot.send_message(chat_id=chat_id, text=text)
        except Forbidden as exc:
            LOGGER.warning("Chat %s is unreachable: %s", chat_id, exc)
            return DeliveryResult(chat_id=chat_id, status=DeliveryStatus.UNREACHABLE, error=str(exc))
        except TelegramError as exc:
            LOGGER.warning("Failed to send message to %s: %s", chat_id, exc)
            return DeliveryResult(chat_id=chat_id, status=DeliveryStatus.TRANSIENT_FAILURE, error=str(exc))
        return DeliveryResult(chat_id=chat_id, status=DeliveryStatus.DELIVERED)

    async def subscribe(self, chat_id: int, now: datetime) -> DeliveryResult:
        self._registry.add(chat_id)
        upcoming = await self._selector.upcoming(now, WELCOME_HOLIDAY_COUNT)
        result = await self.deliver(chat_id, format_welcome_message(upcoming, self._region_name))
        if result.status is DeliveryStatus.UNREACHABLE:
            self.unsubscribe(chat_id)
            return result

        self._arm_confirmation(chat_id)
        LOGGER.info("User %s subscribed", chat_id)
        return result

    def unsubscribe(self, chat_id: int) -> bool:
        removed = self._registry.remove(chat_id)
        self._cancel_confirmation(chat_id)
        if removed:
            LOGGER.info("User %s unsubscribed", chat_id)
        return removed

    async def describe_upcoming(self, now: date | datetime) -> str:
        upcoming = await self._selector.upcoming(now, WELCOME_HOLIDAY_COUNT)
        return format_upcoming_list(upcoming)

    async def run_confirmation_check(self, chat_id: int, now: datetime) -> DeliveryResult | None:
        if chat_id not in self._registry:
            LOGGER.info("Test message dropped for %s (no longer subscribed)", chat_id)
            return None

        start, end = self._quiet_hours
        if is_quiet_hours(now, start, end) or await self._selector.is_holiday_today(now):
            LOGGER.info("Test message skipped for %s (night time or holiday)", chat_id)
            return None

        result = await self.deliver(chat_id, format_confirmation_message(self._region_name))
        if result.status is DeliveryStatus.UNREACHABLE:
            self.unsubscribe(chat_id)
        elif result.delivered:
            LOGGER.info("Test message sent to %s", chat_id)
        return result

    async def broadcast(self, now: datetime) -> BroadcastReport:
        report = BroadcastReport()
        chat_ids = sorted(self._registry.all())
        if not chat_ids:
            return report

        upcoming = await self._selector.upcoming(now, 1)
        if not upcoming:
            LOGGER.info("Broadcast skipped: no upcoming holidays known")
            return report

        text = format_broadcast_message(upcoming[0], self._region_name)
        results = await asyncio.gather(*(self.deliver(chat_id, text) for chat_id in chat_ids))

        for result in results:
            if result.status is DeliveryStatus.DELIVERED:
                report.delivered.append(result.chat_id)
            elif result.status is DeliveryStatus.UNREACHABLE:
                self.unsubscribe(result.chat_id)
                report.removed.append(result.chat_id)
            else:
                report.failed.append(result.chat_id)

        LOGGER.info(
            "Broadcast for %s: %s delivered, %s removed, %s failed",
            upcoming[0].name,
            len(report.delivered),
            len(report.removed),
            len(report.failed),
        )
        return report

    def _arm_confirmation(self, chat_id: int) -> None:
        if self._job_queue is None:
            return
        self._cancel_confirmation(chat_id)
        self._job_queue.run_once(
            confirmation_callback,
            when=self._confirmation_delay,
            chat_id=chat_id,
            name=confirmation_job_name(chat_id),
        )

    def _cancel_confirmation(self, chat_id: int) -> None:
        if self._job_queue is None:
            return
        for job in self._job_queue.get_jobs_by_name(confirmation_job_name(chat_id)):
            job.schedule_removal()


async def confirmation_callback(context: CallbackContext) -> None:
    service: NotificationService = context.application.bot_data["notification_service"]
    await service.run_confirmation_check(context.job.chat_id, service.now())


async def broadcast_callback(context: CallbackContext) -> None:
    service: NotificationService = context.application.bot_data["notification_service"]
    await service.broadcast(service.now())
