from __future__ import annotations

import logging

import httpx
from telegram.ext import CallbackContext

LOGGER = logging.getLogger(__name__)

PING_TIMEOUT_SECONDS = 30.0


async def self_ping(base_url: str, client: httpx.AsyncClient | None = None) -> int | None:
    """Hit our own health endpoint so the host does not idle the process out."""
    url = f"{base_url.rstrip('/')}/health"
    try:
        if client is not None:
            response = await client.get(url, timeout=PING_TIMEOUT_SECONDS)
        else:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(url, timeout=PING_TIMEOUT_SECONDS)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        LOGGER.error("Self-ping failed: %s", exc)
        return None

    LOGGER.info("Self-ping successful: %s", response.status_code)
    return response.status_code


async def self_ping_callback(context: CallbackContext) -> None:
    settings = context.application.bot_data["settings"]
    if settings.public_url:
        await self_ping(settings.public_url)
