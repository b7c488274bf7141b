# tests/test_planning.py - pure payment planning

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from core.constants import PaymentStatus
from core.dto import PaymentPeriod
from payments.planning import (
    derive_payment_status,
    following_period,
    initial_period,
    is_billable,
    plan_upcoming_payment,
)


class TestPlanUpcomingPayment:
    def test_due_date_on_lead_boundary_is_planned(self):
        period = plan_upcoming_payment(2, 2025, date(2024, 11, 5), today=date(2025, 3, 1), lead_days=4)
        assert period == PaymentPeriod(month=3, year=2025, due_date=date(2025, 3, 5))

    def test_due_date_past_lead_boundary_is_not_planned(self):
        assert plan_upcoming_payment(2, 2025, date(2024, 11, 6), today=date(2025, 3, 1), lead_days=4) is None

    def test_december_rolls_into_january(self):
        period = plan_upcoming_payment(12, 2024, date(2024, 6, 2), today=date(2024, 12, 30), lead_days=4)
        assert (period.month, period.year, period.due_date) == (1, 2025, date(2025, 1, 2))

    def test_due_day_31_clamped_in_april(self):
        period = plan_upcoming_payment(3, 2025, date(2025, 1, 31), today=date(2025, 4, 27), lead_days=4)
        assert period.due_date == date(2025, 4, 30)


class TestPeriods:
    def test_initial_period_uses_join_month(self):
        assert initial_period(date(2025, 1, 31)) == PaymentPeriod(1, 2025, date(2025, 1, 31))

    def test_following_period_clamps(self):
        assert following_period(1, 2025, date(2024, 10, 31)).due_date == date(2025, 2, 28)


class TestDerivePaymentStatus:
    rent = Decimal('5000.00')

    def test_nothing_paid_is_pending(self):
        assert derive_payment_status(Decimal('0'), self.rent) == PaymentStatus.PENDING

    def test_part_paid_is_partial(self):
        assert derive_payment_status(Decimal('1.00'), self.rent) == PaymentStatus.PARTIAL

    def test_full_or_over_is_paid(self):
        assert derive_payment_status(self.rent, self.rent) == PaymentStatus.PAID
        assert derive_payment_status(Decimal('6000.00'), self.rent) == PaymentStatus.PAID

    def test_missing_amount_is_pending(self):
        assert derive_payment_status(None, self.rent) == PaymentStatus.PENDING


class TestIsBillable:
    def stay(self, room_id=1, rent_amount=Decimal('4000.00')):
        return SimpleNamespace(room_id=room_id, rent_amount=rent_amount, join_date=date(2025, 1, 5),
                               status='ACTIVE', bed_number=None)

    def test_room_and_rent(self):
        assert is_billable(self.stay())

    def test_no_room(self):
        assert not is_billable(self.stay(room_id=None))

    def test_zero_or_missing_rent(self):
        assert not is_billable(self.stay(rent_amount=Decimal('0')))
        assert not is_billable(self.stay(rent_amount=None))
