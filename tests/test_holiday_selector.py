import asyncio
from datetime import date, datetime
from zoneinfo import ZoneInfo

from holiday_bot.holiday_selector import HolidaySelector
from holiday_bot.models import HolidayRecord, UpcomingHoliday


def test_next_holidays_spans_current_and_next_year(christmas_source) -> None:
    selector = HolidaySelector(christmas_source)

    records = asyncio.run(selector.next_holidays(date(2025, 12, 20), 2))

    assert [record.name for record in records] == ["Christmas", "New Year"]
    assert christmas_source.requested_years == [2025, 2026]


def test_upcoming_computes_days_until(christmas_source) -> None:
    selector = HolidaySelector(christmas_source)
    now = datetime(2025, 12, 20, 10, 0, tzinfo=ZoneInfo("Europe/Berlin"))

    upcoming = asyncio.run(selector.upcoming(now, 2))

    assert upcoming == [
        UpcomingHoliday(name="Christmas", date=date(2025, 12, 25), days_until=5),
        UpcomingHoliday(name="New Year", date=date(2026, 1, 1), days_until=12),
    ]


def test_next_holidays_reevaluates_now_on_every_call(christmas_source) -> None:
    selector = HolidaySelector(christmas_source)

    before = asyncio.run(selector.next_holidays(date(2025, 12, 20), 1))
    after = asyncio.run(selector.next_holidays(date(2025, 12, 25), 1))

    assert before[0].name == "Christmas"
    assert after[0].name == "New Year"


def test_is_holiday_today(christmas_source) -> None:
    selector = HolidaySelector(christmas_source)

    assert asyncio.run(selector.is_holiday_today(date(2025, 12, 25))) is True
    assert asyncio.run(selector.is_holiday_today(date(2025, 12, 24))) is False


def test_empty_source_yields_no_holidays(christmas_source) -> None:
    christmas_source.by_year = {2025: [HolidayRecord(date=date(2025, 1, 1), name="Past")]}
    selector = HolidaySelector(christmas_source)

    assert asyncio.run(selector.next_holidays(date(2025, 12, 20), 2)) == []
