from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    User management - create Owners and Admins.

    Public registration is disabled. Owners manage their own properties,
    rooms, tenants and payments; Admins see every owner's data.
    """
    list_display = ['username', 'email', 'full_name', 'role', 'is_active', 'is_staff', 'date_joined']
    list_filter = ['role', 'is_active', 'is_staff']
    search_fields = ['username', 'email', 'full_name', 'mobile']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Role', {
            'fields': ('role', 'full_name', 'mobile'),
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Role', {
            'fields': ('role', 'full_name', 'mobile'),
            'description': 'Role: OWNER for property owners, ADMIN for platform staff.'
        }),
    )
