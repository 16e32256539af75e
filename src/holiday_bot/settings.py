from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx

DEFAULT_HOLIDAY_API_URL = "https://date.nager.at/api/v3/PublicHolidays"
HOLIDAY_SOURCES = {"nager", "bundled"}


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    port: int
    public_url: str | None
    country_code: str
    subdivision_code: str
    region_name: str
    timezone: str
    quiet_hours_start: time
    quiet_hours_end: time
    confirmation_delay: timedelta
    broadcast_time: time
    self_ping_interval: timedelta
    holiday_source: str
    holiday_api_url: str

    @property
    def region_code(self) -> str:
        return f"{self.country_code}-{self.subdivision_code}"

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        raise ValueError(f"Missing required environment variable: {name}")
    return value.strip()


def _optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _positive_int_env(name: str, default: int) -> int:
    raw = _optional_env(name)
    if raw is None:
        return default
    if not raw.isdigit() or int(raw) <= 0:
        raise ValueError(f"{name} must be a positive integer")
    return int(raw)


def parse_time_string(value: str) -> time:
    pieces = value.strip().split(":")
    if len(pieces) != 2:
        raise ValueError(f"Time must be in HH:MM format: {value!r}")

    hour, minute = pieces
    if not hour.isdigit() or not minute.isdigit():
        raise ValueError(f"Time must contain numeric hour/minute: {value!r}")

    hour_i = int(hour)
    minute_i = int(minute)
    if hour_i > 23 or minute_i > 59:
        raise ValueError(f"Time must be a valid 24-hour time: {value!r}")
    return time(hour=hour_i, minute=minute_i)


def parse_quiet_hours(value: str) -> tuple[time, time]:
    pieces = value.split("-")
    if len(pieces) != 2:
        raise ValueError(f"QUIET_HOURS must look like 22:00-08:00: {value!r}")
    return parse_time_string(pieces[0]), parse_time_string(pieces[1])


def parse_region_code(value: str) -> tuple[str, str]:
    pieces = value.strip().upper().split("-")
    if len(pieces) != 2 or not all(pieces):
        raise ValueError(f"REGION_CODE must look like DE-BW: {value!r}")
    return pieces[0], pieces[1]


def _validate_public_url(value: str) -> str:
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise ValueError(f"RENDER_URL is not a valid URL: {value!r}") from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise ValueError(f"RENDER_URL must be an absolute http(s) URL: {value!r}")
    return value


def _validate_timezone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name}") from exc
    return name


def load_settings() -> Settings:
    token = _required_env("BOT_TOKEN")
    country_code, subdivision_code = parse_region_code(os.getenv("REGION_CODE", "DE-BW"))
    quiet_start, quiet_end = parse_quiet_hours(os.getenv("QUIET_HOURS", "22:00-08:00"))

    holiday_source = os.getenv("HOLIDAY_SOURCE", "nager").strip().lower()
    if holiday_source not in HOLIDAY_SOURCES:
        raise ValueError(f"HOLIDAY_SOURCE must be one of {sorted(HOLIDAY_SOURCES)}")

    public_url = _optional_env("RENDER_URL")
    if public_url is not None:
        public_url = _validate_public_url(public_url.rstrip("/"))

    return Settings(
        telegram_bot_token=token,
        port=_positive_int_env("PORT", 3000),
        public_url=public_url,
        country_code=country_code,
        subdivision_code=subdivision_code,
        region_name=os.getenv("REGION_NAME", "Баден-Вюртемберг, Германия"),
        timezone=_validate_timezone(os.getenv("TIMEZONE", "Europe/Berlin").strip()),
        quiet_hours_start=quiet_start,
        quiet_hours_end=quiet_end,
        confirmation_delay=timedelta(hours=_positive_int_env("CONFIRMATION_DELAY_HOURS", 6)),
        broadcast_time=parse_time_string(os.getenv("BROADCAST_TIME", "09:00")),
        self_ping_interval=timedelta(minutes=_positive_int_env("SELF_PING_INTERVAL_MINUTES", 10)),
        holiday_source=holiday_source,
        holiday_api_url=os.getenv("HOLIDAY_API_URL", DEFAULT_HOLIDAY_API_URL).rstrip("/"),
    )
