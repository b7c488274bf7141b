import builtins
from decimal import Decimal
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from core.constants import OccupancyStatus
from .resolver import due_day


class Occupancy(models.Model):
    """
    MOST IMPORTANT TABLE - Links a tenant to a room (whole room) or a bed in it

    - Whole room: room is set, bed_number is None
    - Per bed: room is set, bed_number names the bed within the room

    The join date anchors the monthly due day. COMPLETED is terminal for
    payment generation.
    """
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='occupancies')
    tenant = models.ForeignKey('tenants.Tenant', on_delete=models.CASCADE, related_name='occupancies')
    property = models.ForeignKey('properties.Property', on_delete=models.SET_NULL, related_name='occupancies',
                                 null=True, blank=True)
    room = models.ForeignKey('rooms.Room', on_delete=models.SET_NULL, related_name='occupancies',
                             null=True, blank=True)
    bed_number = models.CharField(max_length=20, null=True, blank=True, default=None)

    rent_amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    advance_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0,
                                         validators=[MinValueValidator(0)])
    advance_left = models.DecimalField(max_digits=10, decimal_places=2, default=0,
                                       help_text="Derived: advance minus first month's rent, never negative")

    join_date = models.DateField()
    leave_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=OccupancyStatus.CHOICES, default=OccupancyStatus.ACTIVE)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['status', '-created_at']
        verbose_name = "Occupancy"
        verbose_name_plural = "Occupancies"
        indexes = [
            models.Index(fields=['owner', 'status'], name='occupancy_owner_status_idx'),
            models.Index(fields=['tenant', 'status'], name='occupancy_tenant_status_idx'),
            models.Index(fields=['room', 'status'], name='occupancy_room_status_idx'),
        ]

    def __str__(self):
        return f"{self.tenant.name} - {self.location}"

    def save(self, *args, **kwargs):
        """Keep advance_left derived from advance and rent"""
        advance = self.advance_amount or Decimal('0')
        rent = self.rent_amount or Decimal('0')
        self.advance_left = max(advance - rent, Decimal('0'))
        super().save(*args, **kwargs)

    @builtins.property
    def is_active(self):
        return self.status == OccupancyStatus.ACTIVE

    @builtins.property
    def due_day(self):
        """Day of month rent falls due, re-derived from the join date"""
        return due_day(self.join_date)

    @builtins.property
    def location(self):
        """Get human-readable location"""
        if not self.room:
            return "Unassigned"
        if self.bed_number:
            return f"Room {self.room.room_number} - Bed {self.bed_number}"
        return f"Room {self.room.room_number}"
