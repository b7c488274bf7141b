from django.contrib import admin
from .models import Room, Bed


class BedInline(admin.TabularInline):
    model = Bed
    extra = 0
    fields = ['bed_number', 'status']


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['room_number', 'property', 'owner', 'rent_type', 'rent_amount', 'capacity', 'status']
    list_filter = ['rent_type', 'status', 'owner']
    search_fields = ['room_number', 'property__name', 'owner__username']
    inlines = [BedInline]

    fieldsets = (
        ('Room', {
            'fields': ('owner', 'property', 'room_number', 'floor')
        }),
        ('Rent', {
            'fields': ('rent_type', 'rent_amount', 'capacity', 'status'),
            'description': 'Status applies to PER_ROOM rooms. PER_BED rooms track status per bed.'
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('owner', 'property')
