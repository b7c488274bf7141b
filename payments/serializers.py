from decimal import Decimal
from rest_framework import serializers
from .models import Payment


def get_tenant_queryset():
    """Get tenant queryset - will be filtered in __init__"""
    from tenants.models import Tenant
    return Tenant.objects.all()


class PaymentSerializer(serializers.ModelSerializer):
    """Serializer for Payment. Status is derived from amount_paid and never written directly."""
    tenant_id = serializers.PrimaryKeyRelatedField(queryset=get_tenant_queryset(), source='tenant')
    tenant_name = serializers.CharField(source='tenant.name', read_only=True, default=None)
    pending_amount = serializers.ReadOnlyField()

    class Meta:
        model = Payment
        fields = [
            'id', 'owner', 'tenant_id', 'tenant_name', 'occupancy', 'month', 'year',
            'rent_amount', 'amount_paid', 'pending_amount', 'due_date', 'payment_date',
            'status', 'reminder_count', 'last_reminder_date', 'notes', 'created_at', 'updated_at'
        ]
        read_only_fields = [
            'id', 'owner', 'occupancy', 'status', 'reminder_count', 'last_reminder_date',
            'created_at', 'updated_at'
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        request = self.context.get('request')
        if request and request.user.is_authenticated and not getattr(request.user, 'is_admin', False):
            self.fields['tenant_id'].queryset = self.fields['tenant_id'].queryset.filter(owner=request.user)

    def validate(self, data):
        rent_amount = data.get('rent_amount', self.instance.rent_amount if self.instance else None)
        amount_paid = data.get('amount_paid', self.instance.amount_paid if self.instance else 0)
        if rent_amount is not None and amount_paid is not None and amount_paid > rent_amount:
            raise serializers.ValidationError({'amount_paid': "Amount paid cannot exceed the rent amount."})
        return data


class PaymentListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    tenant_name = serializers.CharField(source='tenant.name', read_only=True, default=None)

    class Meta:
        model = Payment
        fields = [
            'id', 'tenant', 'tenant_name', 'month', 'year', 'rent_amount',
            'amount_paid', 'due_date', 'payment_date', 'status'
        ]


class MarkPaidSerializer(serializers.Serializer):
    payment_date = serializers.DateField(required=False, allow_null=True)


class RecordPaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    payment_date = serializers.DateField(required=False, allow_null=True)
