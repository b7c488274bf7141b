from django.contrib import admin
from .models import Occupancy


@admin.register(Occupancy)
class OccupancyAdmin(admin.ModelAdmin):
    list_display = ['tenant', 'location', 'rent_amount', 'join_date', 'leave_date', 'status']
    list_filter = ['status', 'join_date', 'owner']
    search_fields = ['tenant__name', 'room__room_number', 'bed_number']
    readonly_fields = ['location', 'advance_left']

    fieldsets = (
        ('Tenant', {
            'fields': ('owner', 'tenant')
        }),
        ('Location', {
            'fields': ('property', 'room', 'bed_number', 'location'),
            'description': 'Leave bed number empty for whole-room rentals.'
        }),
        ('Rent Information', {
            'fields': ('rent_amount', 'advance_amount', 'advance_left')
        }),
        ('Dates', {
            'fields': ('join_date', 'leave_date', 'status')
        }),
        ('Notes', {
            'fields': ('notes',),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('tenant', 'room', 'property')
