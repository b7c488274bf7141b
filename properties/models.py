from django.db import models
from django.conf import settings
from core.constants import PropertyType, RentType, AvailabilityStatus


class Property(models.Model):
    """A hostel, residence or shop owned by a user"""
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='properties')
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    property_type = models.CharField(max_length=20, choices=PropertyType.CHOICES, default=PropertyType.HOSTEL)
    image = models.CharField(max_length=500, blank=True, default='', help_text="Stored image path or URL")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        unique_together = ['owner', 'name']
        verbose_name = "Property"
        verbose_name_plural = "Properties"
        indexes = [
            models.Index(fields=['owner', 'property_type'], name='property_owner_type_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.location})"

    def room_stats(self):
        """Room and bed availability counts for this property"""
        from rooms.models import Bed

        rooms = self.rooms.all()
        total_rooms = rooms.count()
        available_rooms = rooms.filter(
            rent_type=RentType.PER_ROOM, status=AvailabilityStatus.AVAILABLE
        ).count()
        beds = Bed.objects.filter(room__property=self)
        return {
            'total_rooms': total_rooms,
            'available_rooms': available_rooms,
            'occupied_rooms': rooms.filter(
                rent_type=RentType.PER_ROOM, status=AvailabilityStatus.OCCUPIED
            ).count(),
            'total_beds': beds.count(),
            'available_beds': beds.filter(status=AvailabilityStatus.AVAILABLE).count(),
        }
