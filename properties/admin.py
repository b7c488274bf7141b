from django.contrib import admin
from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'location', 'property_type', 'created_at']
    list_filter = ['property_type', 'owner']
    search_fields = ['name', 'location', 'owner__username']

    fieldsets = (
        ('Basic Information', {
            'fields': ('owner', 'name', 'location', 'property_type')
        }),
        ('Media', {
            'fields': ('image',),
            'classes': ('collapse',)
        }),
    )
