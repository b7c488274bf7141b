from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['tenant', 'month', 'year', 'rent_amount', 'amount_paid', 'due_date', 'status']
    list_filter = ['status', 'year', 'month', 'owner']
    search_fields = ['tenant__name', 'tenant__mobile']
    readonly_fields = ['status', 'reminder_count', 'last_reminder_date']
    date_hierarchy = 'due_date'

    fieldsets = (
        ('Tenant', {
            'fields': ('owner', 'tenant', 'occupancy')
        }),
        ('Period', {
            'fields': ('month', 'year', 'due_date')
        }),
        ('Amounts', {
            'fields': ('rent_amount', 'amount_paid', 'payment_date', 'status'),
            'description': 'Status follows the amount paid.'
        }),
        ('Reminders', {
            'fields': ('reminder_count', 'last_reminder_date', 'notes'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('tenant', 'occupancy')
