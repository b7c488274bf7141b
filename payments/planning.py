"""
Pure planning helpers for payment generation.

Nothing here touches the database: the functions take the latest known
billing period, the stay's join date and today's date, and answer what
(if anything) should be created next.
"""
from datetime import date
from decimal import Decimal
from typing import Optional

from core.constants import PaymentStatus
from core.dto import PaymentPeriod
from occupancy.resolver import (
    RentBearing, due_date_for, due_day, is_within_lead_window, next_period, period_of
)


def is_billable(stay: RentBearing) -> bool:
    """A stay bills rent when it holds a room and has a positive rent"""
    return bool(stay.room_id) and stay.rent_amount is not None and stay.rent_amount > 0


def derive_payment_status(amount_paid, rent_amount) -> str:
    """PAID once the rent is covered, PARTIAL for anything in between, else PENDING"""
    amount_paid = amount_paid or Decimal('0')
    if rent_amount is not None and amount_paid >= rent_amount:
        return PaymentStatus.PAID
    if amount_paid > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.PENDING


def initial_period(join_date: date) -> PaymentPeriod:
    """Billing period of the joining month, due on the join day"""
    month, year = period_of(join_date)
    return PaymentPeriod(month=month, year=year, due_date=due_date_for(year, month, due_day(join_date)))


def following_period(month: int, year: int, join_date: date) -> PaymentPeriod:
    """Billing period after (month, year) with its clamped due date"""
    next_month, next_year = next_period(month, year)
    return PaymentPeriod(
        month=next_month,
        year=next_year,
        due_date=due_date_for(next_year, next_month, due_day(join_date)),
    )


def plan_upcoming_payment(latest_month: int, latest_year: int, join_date: date,
                          today: date, lead_days: int) -> Optional[PaymentPeriod]:
    """
    Period to create ahead of time, or None when its due date is still
    outside the lead window.
    """
    period = following_period(latest_month, latest_year, join_date)
    if is_within_lead_window(period.due_date, today, lead_days):
        return period
    return None
