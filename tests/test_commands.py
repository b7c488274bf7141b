# tests/test_commands.py - payment management commands

from datetime import date
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from payments.models import Payment


def run(name, *args):
    out = StringIO()
    call_command(name, *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestGenerateUpcomingPayments:
    @pytest.fixture
    def due_soon(self, tenant, whole_room, make_occupancy, make_payment):
        occupancy = make_occupancy(tenant, whole_room, join_date=date(2025, 1, 5))
        make_payment(occupancy, 2, 2025, amount_paid=occupancy.rent_amount)
        return occupancy

    def test_creates_payments(self, due_soon):
        output = run('generate_upcoming_payments', '--date', '2025-03-01', '--lead-days', '4')

        assert "Created: 1" in output
        assert Payment.objects.filter(tenant=due_soon.tenant, month=3, year=2025).exists()

    def test_dry_run(self, due_soon):
        output = run('generate_upcoming_payments', '--date', '2025-03-01', '--dry-run')

        assert "Would create: 1" in output
        assert not Payment.objects.filter(month=3).exists()

    def test_bad_date(self, db):
        with pytest.raises(CommandError):
            run('generate_upcoming_payments', '--date', '01/03/2025')

    def test_negative_lead_days(self, db):
        with pytest.raises(CommandError):
            run('generate_upcoming_payments', '--lead-days', '-1')


@pytest.mark.django_db
class TestOtherCommands:
    def test_send_reminders(self, db):
        output = run('send_payment_reminders', '--days', '2')
        assert "Sent 0 payment reminder(s) for the next 2 day(s)" in output

    def test_backfill(self, tenant, whole_room, make_occupancy, make_payment):
        payment = make_payment(make_occupancy(tenant, whole_room, join_date=date(2025, 1, 31)), 2, 2025)

        output = run('backfill_payment_due_dates')

        assert "Updated: 1" in output
        payment.refresh_from_db()
        assert payment.due_date == date(2025, 2, 28)
