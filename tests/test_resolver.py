# tests/test_resolver.py - due-day derivation and calendar arithmetic

from datetime import date

import pytest

from occupancy.resolver import (
    days_in_month,
    due_date_for,
    due_day,
    is_within_lead_window,
    next_period,
    period_of,
)


class TestDueDay:
    def test_due_day_is_join_day_of_month(self):
        assert due_day(date(2024, 6, 17)) == 17

    def test_period_of(self):
        assert period_of(date(2025, 3, 9)) == (3, 2025)


class TestDueDateFor:
    def test_day_that_exists_is_kept(self):
        assert due_date_for(2025, 3, 5) == date(2025, 3, 5)

    def test_day_31_clamps_to_30_day_month(self):
        assert due_date_for(2025, 4, 31) == date(2025, 4, 30)

    def test_day_31_clamps_to_february(self):
        assert due_date_for(2025, 2, 31) == date(2025, 2, 28)
        assert due_date_for(2024, 2, 31) == date(2024, 2, 29)

    def test_never_rolls_into_next_month(self):
        for month in range(1, 13):
            assert due_date_for(2025, month, 31).month == month

    def test_invalid_month_rejected(self):
        with pytest.raises(ValueError):
            due_date_for(2025, 13, 1)

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2025, 11) == 30


class TestNextPeriod:
    def test_mid_year(self):
        assert next_period(5, 2025) == (6, 2025)

    def test_december_rolls_to_january_of_next_year(self):
        assert next_period(12, 2024) == (1, 2025)


class TestLeadWindow:
    today = date(2025, 3, 1)

    def test_upper_bound_is_inclusive(self):
        assert is_within_lead_window(date(2025, 3, 5), self.today, 4)

    def test_beyond_upper_bound(self):
        assert not is_within_lead_window(date(2025, 3, 6), self.today, 4)

    def test_today_is_inclusive(self):
        assert is_within_lead_window(self.today, self.today, 4)

    def test_past_due_date_is_outside(self):
        assert not is_within_lead_window(date(2025, 2, 28), self.today, 4)
