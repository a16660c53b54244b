"""Calendar date resolution in the user's timezone.

An entry belongs to an explicit date parsed from its text when one is
present and valid; otherwise to the local calendar date of the submission
instant. There is no late-night rollover rule.
"""

import re
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from intake_tracker.domain.entries import ResolvedDate

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class InvalidTimezoneError(ValueError):
    """Raised when a timezone identifier is not a known IANA zone."""


def load_timezone(name: str) -> ZoneInfo:
    """Return the zone for an IANA identifier or raise InvalidTimezoneError."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimezoneError(f"Unknown timezone: {name!r}") from exc


def resolve_date(
    explicit_date_text: str | None,
    submitted_at: datetime | str,
    timezone: str,
) -> ResolvedDate:
    """Pick the calendar day an entry counts toward."""
    zone = load_timezone(timezone)
    if explicit_date_text:
        explicit = parse_date_string(explicit_date_text)
        if explicit is not None:
            return ResolvedDate(date=explicit, was_explicit=True)
    return ResolvedDate(date=_local_date(submitted_at, zone), was_explicit=False)


def parse_date_string(text: str) -> date | None:
    """Parse a strict YYYY-MM-DD string, returning None for anything else."""
    if not _DATE_PATTERN.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def is_valid_date_string(text: str) -> bool:
    """Return True for a real calendar date in YYYY-MM-DD form."""
    return parse_date_string(text) is not None


def today_in_timezone(timezone: str, now: datetime | None = None) -> date:
    """Return today's date in the given timezone."""
    instant = now if now is not None else datetime.now(tz=UTC)
    return _local_date(instant, load_timezone(timezone))


def yesterday_in_timezone(timezone: str, now: datetime | None = None) -> date:
    """Return yesterday's date in the given timezone."""
    return today_in_timezone(timezone, now) - timedelta(days=1)


def relative_date_label(
    day: date, timezone: str, now: datetime | None = None
) -> str:
    """Return "Today", "Yesterday" or a short label like "Jan 29"."""
    today = today_in_timezone(timezone, now)
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return format_date_short(day)


def format_date_short(day: date) -> str:
    """Format a date as a short month/day label."""
    return f"{day:%b} {day.day}"


def _local_date(submitted_at: datetime | str, zone: ZoneInfo) -> date:
    instant = (
        datetime.fromisoformat(submitted_at)
        if isinstance(submitted_at, str)
        else submitted_at
    )
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(zone).date()
