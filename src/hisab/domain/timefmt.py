import calendar
import datetime as dt


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def format_day_label(day: dt.date) -> str:
    return day.strftime("%d.%m.%Y")


def parse_iso_date(value: str | dt.date | None) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not value:
        return dt.date.today()
    return dt.date.fromisoformat(value.strip()[:10])
