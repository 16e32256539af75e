from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import pytest

from holiday_bot.models import HolidayRecord


@dataclass
class FakeHolidaySource:
    by_year: dict[int, list[HolidayRecord]] = field(default_factory=dict)
    requested_years: list[int] = field(default_factory=list)

    async def get_holidays_for_region(self, year: int) -> list[HolidayRecord]:
        self.requested_years.append(year)
        return list(self.by_year.get(year, []))


@pytest.fixture
def christmas_source() -> FakeHolidaySource:
    return FakeHolidaySource(
        by_year={
            2025: [
                HolidayRecord(date=date(2025, 12, 25), name="Christmas"),
                HolidayRecord(date=date(2025, 10, 3), name="Tag der Deutschen Einheit"),
            ],
            2026: [HolidayRecord(date=date(2026, 1, 1), name="New Year")],
        }
    )
