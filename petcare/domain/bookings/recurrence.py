"""
Recurring booking expansion

Patterns:
    weekly_<interval>_<day,day,...>          e.g. weekly_1_monday,friday
    monthly_<interval>_<nth>_<day,day,...>   e.g. monthly_1_2_saturday

Both expand into dated sessions inside [start, end], sorted by date and
numbered from 1.
"""

import calendar
from dataclasses import dataclass
from datetime import date

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

WEEKDAYS = {name.lower(): index for index, name in enumerate(calendar.day_name)}
DAY_OFFSETS = (MO, TU, WE, TH, FR, SA, SU)


@dataclass(frozen=True)
class SessionSlot:
    date: date
    time: str
    sequence_number: int


def _parse_interval(value: str) -> int:
    try:
        interval = int(value)
    except ValueError as e:
        raise ValueError(f"Invalid recurrence interval: {value}") from e
    if interval < 1:
        raise ValueError(f"Invalid recurrence interval: {value}")
    return interval


def _parse_weekdays(value: str) -> list[int]:
    days = []
    for name in value.split(","):
        key = name.strip().lower()
        if key not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {name}")
        days.append(WEEKDAYS[key])
    return days


def nth_weekday_of_month(year: int, month: int, weekday: int, nth: int):
    """nth occurrence of a weekday in a month, or None when the month has fewer"""
    candidate = date(year, month, 1) + relativedelta(weekday=DAY_OFFSETS[weekday](nth))
    if candidate.month != month:
        return None
    return candidate


def _weekly_dates(start: date, end: date, interval: int, weekdays: list[int]) -> set[date]:
    dates = set()
    current = start
    while current <= end:
        for weekday in weekdays:
            candidate = current + relativedelta(weekday=DAY_OFFSETS[weekday])
            if start <= candidate <= end:
                dates.add(candidate)
        current += relativedelta(weeks=interval)
    return dates


def _monthly_dates(start: date, end: date, interval: int, nth: int, weekdays: list[int]) -> set[date]:
    dates = set()
    current = start
    while current <= end:
        for weekday in weekdays:
            candidate = nth_weekday_of_month(current.year, current.month, weekday, nth)
            if candidate and start <= candidate <= end:
                dates.add(candidate)
        current += relativedelta(day=1, months=interval)
    return dates


def expand_recurring_pattern(start: date, end: date, pattern: str, time: str) -> list[SessionSlot]:
    """
    Expand a recurrence pattern into session slots.

    Unknown pattern kinds expand to nothing. A known kind with a malformed
    body raises ValueError.
    """
    parts = pattern.strip().split("_")
    kind = parts[0].lower()

    if kind == "weekly":
        if len(parts) != 3:
            raise ValueError(f"Invalid weekly pattern: {pattern}")
        dates = _weekly_dates(start, end, _parse_interval(parts[1]), _parse_weekdays(parts[2]))
    elif kind == "monthly":
        if len(parts) != 4:
            raise ValueError(f"Invalid monthly pattern: {pattern}")
        nth = _parse_interval(parts[2])
        if nth > 5:
            raise ValueError(f"Invalid week of month: {parts[2]}")
        dates = _monthly_dates(start, end, _parse_interval(parts[1]), nth, _parse_weekdays(parts[3]))
    else:
        return []

    return [
        SessionSlot(date=day, time=time, sequence_number=index)
        for index, day in enumerate(sorted(dates), start=1)
    ]
