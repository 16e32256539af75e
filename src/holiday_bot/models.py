from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class HolidayRecord:
    date: date
    name: str
    is_global: bool = True
    counties: tuple[str, ...] = ()

    def applies_to(self, region_code: str) -> bool:
        return self.is_global or region_code in self.counties


@dataclass(frozen=True)
class UpcomingHoliday:
    name: str
    date: date
    days_until: int


class DeliveryStatus(enum.Enum):
    DELIVERED = "delivered"
    UNREACHABLE = "unreachable"
    TRANSIENT_FAILURE = "transient_failure"


@dataclass(frozen=True)
class DeliveryResult:
    chat_id: int
    status: DeliveryStatus
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.status is DeliveryStatus.DELIVERED


@dataclass
class BroadcastReport:
    delivered: list[int] = field(default_factory=list)
    removed: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.delivered) + len(self.removed) + len(self.failed)
