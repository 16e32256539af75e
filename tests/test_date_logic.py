from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from holiday_bot.date_logic import days_until, is_holiday_on, is_quiet_hours, select_upcoming
from holiday_bot.models import HolidayRecord

BERLIN = ZoneInfo("Europe/Berlin")


def _records() -> list[HolidayRecord]:
    return [
        HolidayRecord(date=date(2026, 1, 6), name="Heilige Drei Könige"),
        HolidayRecord(date=date(2025, 12, 25), name="Christmas"),
        HolidayRecord(date=date(2025, 12, 20), name="Today"),
        HolidayRecord(date=date(2026, 1, 1), name="New Year"),
        HolidayRecord(date=date(2025, 5, 1), name="Past"),
    ]


def test_select_upcoming_only_strictly_future_sorted() -> None:
    now = datetime(2025, 12, 20, 8, 0, tzinfo=BERLIN)

    selected = select_upcoming(_records(), now, 10)

    assert [record.name for record in selected] == ["Christmas", "New Year", "Heilige Drei Könige"]
    assert all(record.date > now.date() for record in selected)


def test_select_upcoming_limits_count() -> None:
    selected = select_upcoming(_records(), date(2025, 12, 20), 2)
    assert [record.name for record in selected] == ["Christmas", "New Year"]


def test_select_upcoming_is_stable_for_equal_dates() -> None:
    records = [
        HolidayRecord(date=date(2026, 1, 1), name="First"),
        HolidayRecord(date=date(2026, 1, 1), name="Second"),
    ]
    first = select_upcoming(records, date(2025, 12, 20), 2)
    second = select_upcoming(records, date(2025, 12, 20), 2)

    assert [record.name for record in first] == ["First", "Second"]
    assert first == second


def test_select_upcoming_zero_count_and_empty_input() -> None:
    assert select_upcoming(_records(), date(2025, 12, 20), 0) == []
    assert select_upcoming([], date(2025, 12, 20), 2) == []


def test_days_until_uses_calendar_dates() -> None:
    late_evening = datetime(2025, 12, 20, 23, 59, tzinfo=BERLIN)
    assert days_until(date(2025, 12, 25), late_evening) == 5
    assert days_until(date(2026, 1, 1), date(2025, 12, 20)) == 12


def test_is_holiday_on_matches_calendar_date() -> None:
    records = _records()
    assert is_holiday_on(records, datetime(2025, 12, 25, 18, 30, tzinfo=BERLIN)) is True
    assert is_holiday_on(records, date(2025, 12, 24)) is False


def test_quiet_hours_wrapping_midnight() -> None:
    start, end = time(22, 0), time(8, 0)

    assert is_quiet_hours(datetime(2025, 12, 20, 22, 0, tzinfo=BERLIN), start, end) is True
    assert is_quiet_hours(datetime(2025, 12, 20, 3, 15, tzinfo=BERLIN), start, end) is True
    assert is_quiet_hours(datetime(2025, 12, 20, 8, 0, tzinfo=BERLIN), start, end) is False
    assert is_quiet_hours(datetime(2025, 12, 20, 21, 59, tzinfo=BERLIN), start, end) is False


def test_quiet_hours_same_day_window() -> None:
    start, end = time(13, 0), time(15, 0)

    assert is_quiet_hours(datetime(2025, 12, 20, 14, 0), start, end) is True
    assert is_quiet_hours(datetime(2025, 12, 20, 15, 0), start, end) is False
