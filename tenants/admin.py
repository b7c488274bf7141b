from django.contrib import admin
from .models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ['name', 'mobile', 'email', 'owner', 'joining_date', 'created_at']
    list_filter = ['owner', 'gender', 'created_at']
    search_fields = ['name', 'mobile', 'email', 'adhar_no']

    fieldsets = (
        ('Basic Information', {
            'fields': ('owner', 'property', 'name', 'mobile', 'email')
        }),
        ('Identity', {
            'fields': ('adhar_no', 'adhar_img', 'photo', 'dob', 'gender')
        }),
        ('Stay', {
            'fields': ('joining_date',)
        }),
    )
