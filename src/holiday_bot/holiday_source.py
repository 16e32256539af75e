from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

import holidays
import httpx

from holiday_bot.models import HolidayRecord
from holiday_bot.settings import Settings

LOGGER = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 20.0


def parse_nager_payload(payload: Any) -> list[HolidayRecord]:
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of holidays, got {type(payload).__name__}")

    records: list[HolidayRecord] = []
    for item in payload:
        counties = item.get("counties") or ()
        records.append(
            HolidayRecord(
                date=date.fromisoformat(item["date"]),
                name=item.get("localName") or item["name"],
                is_global=bool(item.get("global", False)),
                counties=tuple(str(county) for county in counties),
            )
        )
    return records


def filter_for_region(records: list[HolidayRecord], region_code: str) -> list[HolidayRecord]:
    return [record for record in records if record.applies_to(region_code)]


class NagerHolidaySource:
    """Public holidays from the Nager.Date API, cached per year in memory.

    The whole cache is dropped once the wall-clock year moves on, and an
    empty result is never cached so that a failed fetch is retried on the
    next call.
    """

    def __init__(
        self,
        *,
        country_code: str,
        subdivision_code: str,
        api_url: str,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._country_code = country_code
        self._region_code = f"{country_code}-{subdivision_code}"
        self._api_url = api_url.rstrip("/")
        self._client = client
        self._clock = clock
        self._cache: dict[int, list[HolidayRecord]] = {}
        self._cache_year: int | None = None

    async def get_holidays_for_region(self, year: int) -> list[HolidayRecord]:
        current_year = self._clock().year
        if self._cache_year != current_year:
            self._cache.clear()
            self._cache_year = current_year

        cached = self._cache.get(year)
        if cached:
            return list(cached)

        try:
            records = await self._fetch(year)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as exc:
            LOGGER.warning("Failed to fetch holidays for %s/%s: %s", year, self._country_code, exc)
            return []

        regional = filter_for_region(records, self._region_code)
        if regional:
            self._cache[year] = regional
        LOGGER.info("Loaded %s holidays for %s in %s", len(regional), self._region_code, year)
        return list(regional)

    async def _fetch(self, year: int) -> list[HolidayRecord]:
        url = f"{self._api_url}/{year}/{self._country_code}"
        if self._client is not None:
            response = await self._client.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return parse_nager_payload(response.json())


class BundledHolidaySource:
    """Regional calendar from the ``holidays`` package, no network involved."""

    def __init__(self, *, country_code: str, subdivision_code: str) -> None:
        self._country_code = country_code
        self._subdivision_code = subdivision_code

    async def get_holidays_for_region(self, year: int) -> list[HolidayRecord]:
        try:
            calendar = holidays.country_holidays(
                self._country_code,
                subdiv=self._subdivision_code,
                years=year,
            )
        except (NotImplementedError, KeyError, ValueError, TypeError) as exc:
            LOGGER.warning(
                "No bundled calendar for %s-%s: %s", self._country_code, self._subdivision_code, exc
            )
            return []

        region_code = f"{self._country_code}-{self._subdivision_code}"
        return [
            HolidayRecord(date=day, name=name, is_global=False, counties=(region_code,))
            for day, name in sorted(calendar.items())
        ]


def build_holiday_source(settings: Settings) -> NagerHolidaySource | BundledHolidaySource:
    if settings.holiday_source == "bundled":
        return BundledHolidaySource(
            country_code=settings.country_code,
            subdivision_code=settings.subdivision_code,
        )
    return NagerHolidaySource(
        country_code=settings.country_code,
        subdivision_code=settings.subdivision_code,
        api_url=settings.holiday_api_url,
        clock=lambda: datetime.now(settings.tzinfo).date(),
    )
