import builtins
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from core.constants import RentType, AvailabilityStatus


class Room(models.Model):
    """
    Room - rented whole (PER_ROOM) or bed by bed (PER_BED).

    For PER_ROOM rooms the room-level status is authoritative and there is
    no bed list. For PER_BED rooms availability lives on each Bed.
    """
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='rooms')
    property = models.ForeignKey('properties.Property', on_delete=models.PROTECT, related_name='rooms',
                                 null=True, blank=True)
    room_number = models.CharField(max_length=50, help_text="e.g., '101', 'A-2'")
    floor = models.IntegerField(null=True, blank=True)

    rent_type = models.CharField(max_length=10, choices=RentType.CHOICES)
    rent_amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    capacity = models.PositiveIntegerField(default=1)

    status = models.CharField(max_length=20, choices=AvailabilityStatus.CHOICES, default=AvailabilityStatus.AVAILABLE)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['room_number']
        unique_together = ['owner', 'property', 'room_number']
        verbose_name = "Room"
        verbose_name_plural = "Rooms"
        indexes = [
            models.Index(fields=['owner', 'status'], name='room_owner_status_idx'),
            models.Index(fields=['property', 'status'], name='room_property_status_idx'),
        ]

    def __str__(self):
        return f"Room {self.room_number} ({self.get_rent_type_display()})"

    @builtins.property
    def is_per_bed(self):
        return self.rent_type == RentType.PER_BED

    @builtins.property
    def occupied_beds(self):
        """Count of occupied beds"""
        return self.beds.filter(status=AvailabilityStatus.OCCUPIED).count()

    @builtins.property
    def available_beds(self):
        """Count of available beds"""
        return self.beds.filter(status=AvailabilityStatus.AVAILABLE).count()


class Bed(models.Model):
    """Bed in a PER_BED room, kept in insertion order"""
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='beds')
    bed_number = models.CharField(max_length=20, help_text="e.g., '1', 'B'")
    status = models.CharField(max_length=20, choices=AvailabilityStatus.CHOICES, default=AvailabilityStatus.AVAILABLE)

    class Meta:
        ordering = ['id']
        unique_together = ['room', 'bed_number']
        verbose_name = "Bed"
        verbose_name_plural = "Beds"

    def __str__(self):
        return f"{self.room} - Bed {self.bed_number}"
