"""
Payment repository - Data access layer for the monthly rent ledger.
"""
from datetime import date, timedelta
from typing import Optional
from django.db.models import QuerySet
from core.constants import PaymentStatus
from core.repositories import BaseRepository
from .models import Payment


class PaymentRepository(BaseRepository[Payment]):
    """Repository for Payment model"""

    def __init__(self, model: type[Payment] = Payment):
        super().__init__(model)

    def get_for_update(self, payment_id: int) -> Optional[Payment]:
        """Lock the payment row. Must run inside a transaction."""
        return self.model.objects.select_for_update().filter(id=payment_id).first()

    def find_for_period(self, tenant_id: int, month: int, year: int) -> Optional[Payment]:
        """The payment for a tenant's billing month, if it exists"""
        return self.find_one(tenant_id=tenant_id, month=month, year=year)

    def latest_for_tenant(self, tenant_id: int) -> Optional[Payment]:
        """Most recent billing month on record for the tenant"""
        return self.find_one(('-year', '-month'), tenant_id=tenant_id)

    def _scoped(self, owner=None) -> QuerySet[Payment]:
        queryset = self.get_queryset().select_related('tenant', 'occupancy')
        if owner is not None:
            queryset = queryset.filter(owner=owner)
        return queryset

    def upcoming(self, today: date, days_ahead: int, owner=None) -> QuerySet[Payment]:
        """Outstanding payments due between today and today + days_ahead, inclusive"""
        return self._scoped(owner).filter(
            status__in=PaymentStatus.OUTSTANDING,
            due_date__gte=today,
            due_date__lte=today + timedelta(days=days_ahead),
        ).order_by('due_date', 'id')

    def overdue(self, today: date, owner=None) -> QuerySet[Payment]:
        """Outstanding payments whose due date has passed"""
        return self._scoped(owner).filter(
            status__in=PaymentStatus.OUTSTANDING,
            due_date__lt=today,
        ).order_by('due_date', 'id')

    def missing_due_date(self) -> QuerySet[Payment]:
        return self._scoped().filter(due_date__isnull=True).order_by('id')
