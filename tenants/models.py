import builtins
from django.db import models
from django.conf import settings
from django.utils import timezone
from core.constants import Gender, OccupancyStatus


class Tenant(models.Model):
    """
    Tenant - the person renting a room or bed.

    Room, bed and rent details live on the tenant's Occupancy; the
    properties below read them from the current (latest) occupancy so the
    tenant exposes the same rent-bearing attributes as the occupancy itself.
    """
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='tenants')
    property = models.ForeignKey('properties.Property', on_delete=models.SET_NULL, related_name='tenants',
                                 null=True, blank=True)
    name = models.CharField(max_length=255)
    mobile = models.CharField(max_length=15)
    email = models.EmailField(blank=True)
    adhar_no = models.CharField(max_length=20, blank=True)
    adhar_img = models.CharField(max_length=500, blank=True, help_text="Stored image path or URL")
    photo = models.CharField(max_length=500, blank=True, help_text="Stored image path or URL")
    dob = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=Gender.CHOICES, blank=True)
    joining_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Tenant"
        verbose_name_plural = "Tenants"
        indexes = [
            models.Index(fields=['owner', 'name'], name='tenant_owner_name_idx'),
            models.Index(fields=['owner', 'mobile'], name='tenant_owner_mobile_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.mobile})"

    @builtins.property
    def current_occupancy(self):
        """Active occupancy if any, else the most recent one"""
        active = self.occupancies.filter(status=OccupancyStatus.ACTIVE).order_by('-join_date', '-id').first()
        if active:
            return active
        return self.occupancies.order_by('-join_date', '-id').first()

    @builtins.property
    def status(self):
        occupancy = self.current_occupancy
        return occupancy.status if occupancy else None

    @builtins.property
    def rent_amount(self):
        occupancy = self.current_occupancy
        return occupancy.rent_amount if occupancy else None

    @builtins.property
    def join_date(self):
        occupancy = self.current_occupancy
        return occupancy.join_date if occupancy else self.joining_date

    @builtins.property
    def room_id(self):
        occupancy = self.current_occupancy
        return occupancy.room_id if occupancy else None

    @builtins.property
    def bed_number(self):
        occupancy = self.current_occupancy
        return occupancy.bed_number if occupancy else None
