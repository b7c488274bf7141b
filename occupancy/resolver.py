"""
Due-date arithmetic for recurring rent.

The due day is the day of month of the original join date. It is never
stored; every caller re-derives it from the join date.

Overflow policy: a due day that does not exist in the target month is
clamped to that month's last day (31 -> 30 in April, 31 -> 28/29 in
February). It never rolls into the following month.
"""
import calendar
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Protocol, Tuple


class RentBearing(Protocol):
    """What payment generation needs to know about a stay"""
    rent_amount: Decimal
    join_date: date
    status: str
    room_id: Optional[int]
    bed_number: Optional[str]


def due_day(join_date: date) -> int:
    """Day of month on which rent falls due, derived from the join date"""
    return join_date.day


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def due_date_for(year: int, month: int, day: int) -> date:
    """Due date in the given month, clamping `day` to the month's last day"""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return date(year, month, min(day, days_in_month(year, month)))


def period_of(value: date) -> Tuple[int, int]:
    """(month, year) of a date"""
    return value.month, value.year


def next_period(month: int, year: int) -> Tuple[int, int]:
    """Calendar month after (month, year); December rolls into January"""
    if month >= 12:
        return 1, year + 1
    return month + 1, year


def is_within_lead_window(due_date: date, today: date, lead_days: int) -> bool:
    """True when today <= due_date <= today + lead_days (inclusive)"""
    return today <= due_date <= today + timedelta(days=lead_days)
