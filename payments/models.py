from decimal import Decimal
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils import timezone
from core.constants import PaymentStatus
from .planning import derive_payment_status


class Payment(models.Model):
    """
    Monthly rent ledger - one row per tenant per billing month.

    rent_amount is a snapshot taken when the row is created. Status is
    always derived from amount_paid on save.
    """
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='payments')
    tenant = models.ForeignKey('tenants.Tenant', on_delete=models.SET_NULL, related_name='payments',
                               null=True, blank=True)
    occupancy = models.ForeignKey('occupancy.Occupancy', on_delete=models.SET_NULL, related_name='payments',
                                  null=True, blank=True)
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveIntegerField()

    rent_amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)],
                                      help_text="Rent expected for this month")
    amount_paid = models.DecimalField(max_digits=10, decimal_places=2, default=0,
                                      validators=[MinValueValidator(0)])
    due_date = models.DateField(null=True, blank=True)
    payment_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=PaymentStatus.CHOICES, default=PaymentStatus.PENDING)

    reminder_count = models.PositiveIntegerField(default=0)
    last_reminder_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-year', '-month']
        unique_together = ['tenant', 'year', 'month']
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        indexes = [
            models.Index(fields=['owner', 'status'], name='payment_owner_status_idx'),
            models.Index(fields=['status', 'due_date'], name='payment_status_due_idx'),
            models.Index(fields=['tenant', 'year', 'month'], name='payment_tenant_period_idx'),
        ]

    def __str__(self):
        tenant_name = self.tenant.name if self.tenant else "Unknown tenant"
        return f"{tenant_name} - {self.month:02d}/{self.year} - {self.get_status_display()}"

    def save(self, *args, **kwargs):
        """Auto-update status based on amount_paid"""
        self.status = derive_payment_status(self.amount_paid, self.rent_amount)
        if self.status == PaymentStatus.PAID:
            if not self.payment_date:
                self.payment_date = timezone.localdate()
        else:
            self.payment_date = None
        super().save(*args, **kwargs)

    @property
    def pending_amount(self):
        """Calculate pending amount"""
        if self.rent_amount is None:
            return Decimal('0')
        return max(self.rent_amount - (self.amount_paid or Decimal('0')), Decimal('0'))

    @property
    def is_outstanding(self):
        return self.status in PaymentStatus.OUTSTANDING
