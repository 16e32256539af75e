from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from holiday_bot.models import UpcomingHoliday

MONTHS_GENITIVE = (
    "января",
    "февраля",
    "марта",
    "апреля",
    "мая",
    "июня",
    "июля",
    "августа",
    "сентября",
    "октября",
    "ноября",
    "декабря",
)

WEEKDAYS = (
    "понедельник",
    "вторник",
    "среда",
    "четверг",
    "пятница",
    "суббота",
    "воскресенье",
)

DAY_FORMS = ("день", "дня", "дней")

WELCOME_HEADER = "🎉 Добро пожаловать в бот напоминаний о праздниках!"
UPCOMING_HEADER = "🗓 Ближайшие праздники:"
NO_HOLIDAYS_LINE = "К сожалению, не найдено ближайших праздников."
TEST_MESSAGE_NOTICE = (
    "📬 Через некоторое время может прийти тестовое сообщение, "
    "для проверки работоспособности систем"
)


def plural_form(n: int, forms: tuple[str, str, str]) -> str:
    """Pick the Russian plural form for ``n`` from (one, few, many)."""
    if n % 10 == 1 and n % 100 != 11:
        return forms[0]
    if n % 10 in (2, 3, 4) and n % 100 not in (12, 13, 14):
        return forms[1]
    return forms[2]


def format_days_until(n: int) -> str:
    if n < 0:
        raise ValueError(f"Day count must be non-negative: {n}")
    return f"{n} {plural_form(n, DAY_FORMS)}"


def format_long_date(value: date) -> str:
    return f"{value.day} {MONTHS_GENITIVE[value.month - 1]} {value.year} г."


def format_weekday(value: date) -> str:
    return WEEKDAYS[value.weekday()]


def _render_holiday_lines(holiday: UpcomingHoliday, *, indent: str = "") -> list[str]:
    return [
        f"{indent}📅 {format_long_date(holiday.date)} ({format_weekday(holiday.date)})",
        f"{indent}⏰ Через {format_days_until(holiday.days_until)}",
    ]


def format_upcoming_list(upcoming: Sequence[UpcomingHoliday]) -> str:
    if not upcoming:
        return NO_HOLIDAYS_LINE

    blocks = [UPCOMING_HEADER]
    for index, holiday in enumerate(upcoming, start=1):
        lines = [f"{index}. {holiday.name}", *_render_holiday_lines(holiday, indent="   ")]
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def format_welcome_message(upcoming: Sequence[UpcomingHoliday], region_name: str) -> str:
    return "\n\n".join(
        (
            WELCOME_HEADER,
            f"📍 Регион: {region_name}",
            format_upcoming_list(upcoming),
            TEST_MESSAGE_NOTICE,
        )
    )


def format_broadcast_message(holiday: UpcomingHoliday, region_name: str) -> str:
    lines = [f"🎉 {holiday.name}", *_render_holiday_lines(holiday)]
    return "\n\n".join(
        (
            "🔔 Напоминание о ближайшем празднике!",
            "\n".join(lines),
            f"📍 Регион: {region_name}",
        )
    )


def format_confirmation_message(region_name: str) -> str:
    return (
        "✅ Тестовое сообщение!\n\n"
        f"Бот работает исправно. Вы будете получать напоминания о праздниках (регион: {region_name}).\n\n"
        "💚 Все системы в норме!"
    )


def format_unsubscribed_message() -> str:
    return "🔕 Вы отписались от напоминаний. Чтобы подписаться снова, отправьте /start."


def format_help_message() -> str:
    return (
        "Команды:\n"
        "/start - Подписаться на напоминания о праздниках\n"
        "/next - Показать ближайшие праздники\n"
        "/stop - Отписаться от напоминаний\n"
        "/help - Показать это сообщение"
    )
