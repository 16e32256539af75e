from __future__ import annotations

from datetime import date, datetime

from holiday_bot.date_logic import as_date, is_holiday_on, select_upcoming, to_upcoming
from holiday_bot.models import HolidayRecord, UpcomingHoliday


class HolidaySelector:
    def __init__(self, source) -> None:
        self._source = source

    async def next_holidays(self, now: date | datetime, count: int) -> list[HolidayRecord]:
        year = as_date(now).year
        current_year = await self._source.get_holidays_for_region(year)
        next_year = await self._source.get_holidays_for_region(year + 1)
        return select_upcoming([*current_year, *next_year], now, count)

    async def upcoming(self, now: date | datetime, count: int) -> list[UpcomingHoliday]:
        records = await self.next_holidays(now, count)
        return [to_upcoming(record, now) for record in records]

    async def is_holiday_today(self, now: date | datetime) -> bool:
        records = await self._source.get_holidays_for_region(as_date(now).year)
        return is_holiday_on(records, now)
