"""Football week windows.

NFL games are scheduled from Thursday through Monday, so a week is taken to run
from the Thursday of a date's ISO week (00:00 UTC) to the following Wednesday
(23:59:59 UTC).
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Optional

from .errors import InvalidDateError

THURSDAY_OFFSET = 3  # days after the ISO week's Monday
WEEK_LENGTH = timedelta(days=6, hours=23, minutes=59, seconds=59)
ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%m-%d-%Y")


def ordinal(day: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value) -> str:
    """Human readable date, e.g. 'Thursday, September 5th'."""
    return f"{value:%A}, {value:%B} {ordinal(value.day)}"


def parse_date(value: Optional[str], today: Optional[date] = None) -> date:
    """Parse a user supplied date. Blank input means today."""
    if value is None or not value.strip():
        return today or date.today()

    value = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidDateError(f"Could not understand the date {value!r}. Try YYYY-MM-DD.") from None


@dataclass(frozen=True)
class WeekWindow:
    """Thursday to Wednesday window of one football week, in UTC."""
    start: datetime
    end: datetime

    @property
    def start_date(self) -> str:
        return self.start.strftime(ISO_FORMAT)

    @property
    def end_date(self) -> str:
        return self.end.strftime(ISO_FORMAT)

    @property
    def start_date_formatted(self) -> str:
        return format_long_date(self.start)

    @property
    def end_date_formatted(self) -> str:
        return format_long_date(self.end)

    def as_dict(self) -> Dict[str, str]:
        return {
            "startDate": self.start_date,
            "endDate": self.end_date,
            "startDateFormatted": self.start_date_formatted,
            "endDateFormatted": self.end_date_formatted,
        }


def week_for(day: date) -> WeekWindow:
    monday = day - timedelta(days=day.weekday())
    thursday = monday + timedelta(days=THURSDAY_OFFSET)
    start = datetime.combine(thursday, time.min, tzinfo=timezone.utc)
    return WeekWindow(start=start, end=start + WEEK_LENGTH)


def resolve_week(value: Optional[str] = None, today: Optional[date] = None) -> WeekWindow:
    """Resolve the football week enclosing a date string (blank for this week)."""
    return week_for(parse_date(value, today))
