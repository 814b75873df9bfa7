"""Fixed-offset calendar boundaries

Day, week, month and year boundaries are computed in a fixed UTC offset
(Philippine time, UTC+8, by default) and returned as aware UTC instants. The
host timezone is never consulted. Naive datetimes are read as UTC.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

PH_OFFSET = timedelta(hours=8)

ONE_MS = timedelta(milliseconds=1)
ONE_DAY = timedelta(days=1)

PLACEHOLDER = "—"

_DATE_LITERAL = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def _local_midnight_to_utc(day: date, offset: timedelta) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc) - offset


def to_local(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    """Wall-clock time in the offset, as an aware datetime"""
    return _as_utc(instant).astimezone(timezone(offset))


def local_date(instant: datetime, offset: timedelta = PH_OFFSET) -> date:
    """Calendar date of an instant in the offset"""
    return to_local(instant, offset).date()


def local_iso_date(instant: datetime, offset: timedelta = PH_OFFSET) -> str:
    """YYYY-MM-DD of the local calendar date"""
    return local_date(instant, offset).isoformat()


def start_of_day(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    return _local_midnight_to_utc(local_date(instant, offset), offset)


def end_of_day(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    return start_of_day(instant, offset) + ONE_DAY - ONE_MS


def start_of_week(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    """Monday 00:00:00 local of the week containing the instant"""
    day = local_date(instant, offset)
    monday = day - timedelta(days=day.weekday())
    return _local_midnight_to_utc(monday, offset)


def end_of_week(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    """Exactly start_of_week + 7 days - 1ms"""
    return start_of_week(instant, offset) + 7 * ONE_DAY - ONE_MS


def start_of_month(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    day = local_date(instant, offset)
    return _local_midnight_to_utc(day.replace(day=1), offset)


def end_of_month(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    day = local_date(instant, offset)
    if day.month == 12:
        first_next = date(day.year + 1, 1, 1)
    else:
        first_next = date(day.year, day.month + 1, 1)
    return _local_midnight_to_utc(first_next, offset) - ONE_MS


def start_of_year(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    day = local_date(instant, offset)
    return _local_midnight_to_utc(date(day.year, 1, 1), offset)


def end_of_year(instant: datetime, offset: timedelta = PH_OFFSET) -> datetime:
    day = local_date(instant, offset)
    return _local_midnight_to_utc(date(day.year + 1, 1, 1), offset) - ONE_MS


def start_of_date_string(value: str, offset: timedelta = PH_OFFSET) -> datetime:
    """
    Local midnight of a YYYY-MM-DD literal, as a UTC instant

    The literal is read as a calendar date in the offset, so "2024-03-15"
    always maps to 2024-03-14T16:00:00Z for UTC+8 whatever the host timezone.

    Raises:
        ValueError: If the literal is not a valid YYYY-MM-DD date
    """
    literal = value.strip()
    if not _DATE_LITERAL.fullmatch(literal):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return _local_midnight_to_utc(date.fromisoformat(literal), offset)


def end_of_date_string(value: str, offset: timedelta = PH_OFFSET) -> datetime:
    return start_of_date_string(value, offset) + ONE_DAY - ONE_MS


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a stored timestamp into an aware UTC datetime

    Accepts datetimes and ISO-8601 strings ("2024-03-15T06:30:00Z",
    "2024-03-15 06:30:00", "2024-03-15T14:30:00+08:00"). Naive values are
    UTC. Returns None for anything missing or unparsable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def parse_calendar_date(value: Any) -> Optional[date]:
    """Parse a date-only value (date object or YYYY-MM-DD), None if invalid"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def format_ph_datetime(value: Any, offset: timedelta = PH_OFFSET) -> str:
    """Local date and time, e.g. "Mar 15, 2024, 02:30 PM"; placeholder if missing"""
    instant = parse_timestamp(value)
    if instant is None:
        return PLACEHOLDER
    return to_local(instant, offset).strftime("%b %d, %Y, %I:%M %p")
