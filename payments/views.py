from django.apps import apps
from django.conf import settings
from django.db import transaction
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from core.constants import DefaultLimits
from core.exceptions import ValidationError as AppValidationError
from api.permissions import IsOwnerOrAdmin, IsAdmin, is_admin_user
from api.filters import OwnerFilterBackend, resolve_owner
from .models import Payment
from .serializers import (
    PaymentSerializer, PaymentListSerializer, MarkPaidSerializer, RecordPaymentSerializer
)
from .services import PaymentGenerator


def _int_param(request, name, default):
    value = request.query_params.get(name)
    if value in (None, ''):
        return default
    try:
        return int(value)
    except ValueError:
        raise AppValidationError(message=f"{name} must be an integer", code="INVALID_PARAMETER",
                                 details={name: value})


class PaymentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for monthly rent payments

    ?status=, ?month=, ?year= and ?tenant= narrow the list.
    """
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    filter_backends = [OwnerFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['tenant__name', 'tenant__mobile']
    ordering_fields = ['due_date', 'year', 'month', 'created_at']
    ordering = ['-year', '-month']

    def get_serializer_class(self):
        if self.action in ('list', 'upcoming', 'overdue'):
            return PaymentListSerializer
        return PaymentSerializer

    def get_queryset(self):
        queryset = Payment.objects.all().select_related('tenant', 'occupancy')
        params = self.request.query_params
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])
        if params.get('month'):
            queryset = queryset.filter(month=_int_param(self.request, 'month', None))
        if params.get('year'):
            queryset = queryset.filter(year=_int_param(self.request, 'year', None))
        if params.get('tenant'):
            queryset = queryset.filter(tenant_id=_int_param(self.request, 'tenant', None))
        return queryset

    def _owner_scope(self):
        """None for admins (every owner), else the requesting user"""
        return None if is_admin_user(self.request.user) else self.request.user

    def perform_create(self, serializer):
        tenant = serializer.validated_data['tenant']
        serializer.save(owner=resolve_owner(self.request), occupancy=tenant.current_occupancy)

    @transaction.atomic
    def update(self, request, *args, **kwargs):
        """Update payment; settling it in full generates the next month"""
        payment = self.get_object()
        payment = Payment.objects.select_for_update().get(pk=payment.pk)
        serializer = self.get_serializer(payment, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        changes = dict(serializer.validated_data)
        changes.pop('tenant', None)
        payment = PaymentGenerator().update_payment(payment, **changes)
        return Response(PaymentSerializer(payment, context=self.get_serializer_context()).data)

    @action(detail=True, methods=['post'], url_path='mark-paid')
    def mark_paid(self, request, pk=None):
        """Settle the payment in full and create next month's"""
        payment = self.get_object()
        serializer = MarkPaidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment, next_payment = PaymentGenerator().mark_as_paid(
            payment.id, serializer.validated_data.get('payment_date')
        )
        context = self.get_serializer_context()
        return Response({
            'payment': PaymentSerializer(payment, context=context).data,
            'next_payment': PaymentSerializer(next_payment, context=context).data if next_payment else None,
        })

    @action(detail=True, methods=['post'])
    def pay(self, request, pk=None):
        """
        Record a (partial) payment.

        Body: { "amount": "2500.00", "payment_date": "2025-05-05" }
        """
        payment = self.get_object()
        serializer = RecordPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment, next_payment = PaymentGenerator().record_payment(
            payment.id, serializer.validated_data['amount'], serializer.validated_data.get('payment_date')
        )
        context = self.get_serializer_context()
        return Response({
            'payment': PaymentSerializer(payment, context=context).data,
            'next_payment': PaymentSerializer(next_payment, context=context).data if next_payment else None,
        })

    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        """Outstanding payments due within ?days= (default from settings)"""
        default_days = getattr(settings, 'PAYMENT_UPCOMING_DAYS', DefaultLimits.PAYMENT_UPCOMING_DAYS)
        days = _int_param(request, 'days', default_days)
        payments = PaymentGenerator().get_upcoming(days_ahead=days, owner=self._owner_scope())
        return Response(PaymentListSerializer(payments, many=True).data)

    @action(detail=False, methods=['get'])
    def overdue(self, request):
        """Outstanding payments past their due date"""
        payments = PaymentGenerator().get_overdue(owner=self._owner_scope())
        return Response(PaymentListSerializer(payments, many=True).data)

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated, IsAdmin])
    def generate(self, request):
        """Run the upcoming-payment scan now (admin only)"""
        summary = apps.get_app_config('common').scheduler.run_generation_now()
        if summary is None:
            return Response(
                {'detail': 'Payment generation did not complete: another run is in progress or it failed.'},
                status=status.HTTP_409_CONFLICT
            )
        return Response({
            'total': summary.total,
            'created': summary.created,
            'already_exists': summary.already_exists,
            'no_base_payment': summary.no_base_payment,
            'not_due': summary.not_due,
            'failed': summary.failed,
            'created_ids': summary.created_ids,
        }, status=status.HTTP_200_OK)
