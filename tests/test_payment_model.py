# tests/test_payment_model.py - Payment status derivation and the uniqueness backstop

from datetime import date
from decimal import Decimal

import pytest
from django.utils import timezone

from core.constants import PaymentStatus
from core.exceptions import DuplicateKeyError
from payments.repositories import PaymentRepository


@pytest.mark.django_db
class TestPaymentStatus:
    @pytest.fixture
    def occupancy(self, tenant, whole_room, make_occupancy):
        return make_occupancy(tenant, whole_room)

    def test_new_payment_is_pending(self, occupancy, make_payment):
        payment = make_payment(occupancy, 2, 2025)
        assert payment.status == PaymentStatus.PENDING
        assert payment.payment_date is None
        assert payment.pending_amount == occupancy.rent_amount

    def test_partial_payment(self, occupancy, make_payment):
        payment = make_payment(occupancy, 2, 2025, amount_paid=Decimal('1000.00'),
                               payment_date=date(2025, 2, 3))
        assert payment.status == PaymentStatus.PARTIAL
        # payment_date is only kept on PAID rows
        assert payment.payment_date is None

    def test_full_payment_sets_payment_date(self, occupancy, make_payment):
        payment = make_payment(occupancy, 2, 2025, amount_paid=occupancy.rent_amount)
        assert payment.status == PaymentStatus.PAID
        assert payment.payment_date == timezone.localdate()
        assert payment.is_outstanding is False

    def test_status_follows_amount_on_update(self, occupancy, make_payment):
        payment = make_payment(occupancy, 2, 2025, amount_paid=occupancy.rent_amount)
        payment.amount_paid = Decimal('10.00')
        payment.save()
        payment.refresh_from_db()
        assert payment.status == PaymentStatus.PARTIAL
        assert payment.payment_date is None


@pytest.mark.django_db
class TestPaymentUniqueness:
    def test_second_row_for_same_month_is_duplicate_key(self, tenant, whole_room, make_occupancy, make_payment):
        occupancy = make_occupancy(tenant, whole_room)
        make_payment(occupancy, 3, 2025)

        with pytest.raises(DuplicateKeyError):
            PaymentRepository().create(owner=occupancy.owner, tenant=tenant, occupancy=occupancy,
                                       month=3, year=2025, rent_amount=Decimal('100.00'))

    def test_store_stays_usable_after_rejection(self, tenant, whole_room, make_occupancy, make_payment):
        occupancy = make_occupancy(tenant, whole_room)
        make_payment(occupancy, 3, 2025)
        repo = PaymentRepository()

        with pytest.raises(DuplicateKeyError):
            repo.create(owner=occupancy.owner, tenant=tenant, month=3, year=2025, rent_amount=Decimal('1'))

        assert repo.count(tenant=tenant) == 1
