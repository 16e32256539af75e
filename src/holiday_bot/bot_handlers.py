from __future__ import annotations

import logging

from telegram import Update
from telegram.ext import BaseHandler, CallbackContext, CommandHandler

from holiday_bot.messages import format_help_message, format_unsubscribed_message
from holiday_bot.reminder_service import NotificationService

LOGGER = logging.getLogger(__name__)


def _service(context: CallbackContext) -> NotificationService:
    return context.application.bot_data["notification_service"]


async def start_command(update: Update, context: CallbackContext) -> None:
    if update.effective_chat is None:
        return
    service = _service(context)
    await service.subscribe(update.effective_chat.id, service.now())


async def stop_command(update: Update, context: CallbackContext) -> None:
    if update.effective_chat is None:
        return
    _service(context).unsubscribe(update.effective_chat.id)
    if update.effective_message:
        await update.effective_message.reply_text(format_unsubscribed_message())


async def next_command(update: Update, context: CallbackContext) -> None:
    if update.effective_message is None:
        return
    service = _service(context)
    await update.effective_message.reply_text(await service.describe_upcoming(service.now()))


async def help_command(update: Update, context: CallbackContext) -> None:
    if update.effective_message:
        await update.effective_message.reply_text(format_help_message())


def build_handlers() -> list[BaseHandler]:
    return [
        CommandHandler("start", start_command),
        CommandHandler("stop", stop_command),
        CommandHandler("next", next_command),
        CommandHandler("help", help_command),
    ]
