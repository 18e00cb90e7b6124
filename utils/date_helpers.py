from datetime import datetime
import calendar
from utils.constants import DATE_FORMAT


def to_local_naive(dt: datetime) -> datetime:
    """Aware datetimes become naive local time; naive ones pass through."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def parse_date(date_str: str) -> datetime | None:
    """Parse a YYYY-MM-DD (or full ISO-8601) string, returning None on failure.

    An explicit UTC offset is converted to naive local time so the result
    compares with stored dates.
    """
    if not date_str:
        return None
    for fmt in (DATE_FORMAT, "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue
    try:
        return to_local_naive(datetime.fromisoformat(date_str))
    except ValueError:
        return None


def to_storage(dt: datetime) -> str:
    return dt.isoformat()


def from_storage(value: str) -> datetime:
    return datetime.fromisoformat(value)


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: datetime, n: int) -> datetime:
    """Add n months to d, clamping day to month end. Time and tzinfo are kept."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def start_of_month(d: datetime) -> datetime:
    return d.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def month_period(reference: datetime) -> tuple[datetime, datetime]:
    """Half-open [start, end) covering the calendar month of reference."""
    start = start_of_month(reference)
    return start, add_months(start, 1)
