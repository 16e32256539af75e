from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time

from holiday_bot.models import HolidayRecord, UpcomingHoliday


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def select_upcoming(records: Iterable[HolidayRecord], now: date | datetime, count: int) -> list[HolidayRecord]:
    today = as_date(now)
    future = [record for record in records if record.date > today]
    # sorted() is stable, so holidays sharing a date keep source order
    future.sort(key=lambda record: record.date)
    return future[: max(count, 0)]


def days_until(target: date, now: date | datetime) -> int:
    return (target - as_date(now)).days


def to_upcoming(record: HolidayRecord, now: date | datetime) -> UpcomingHoliday:
    return UpcomingHoliday(name=record.name, date=record.date, days_until=days_until(record.date, now))


def is_holiday_on(records: Iterable[HolidayRecord], now: date | datetime) -> bool:
    today = as_date(now)
    return any(record.date == today for record in records)


def is_quiet_hours(now: datetime, start: time, end: time) -> bool:
    current = now.time().replace(tzinfo=None)
    if start <= end:
        return start <= current < end
    return current >= start or current < end
