from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import transaction
from core.dto import OccupancyDTO
from api.permissions import IsOwnerOrAdmin
from api.filters import OwnerFilterBackend, resolve_owner
from occupancy.serializers import OccupancySerializer
from payments.serializers import PaymentListSerializer
from .models import Tenant
from .serializers import TenantSerializer, TenantListSerializer
from .services import TenantService


class TenantViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Tenant management
    Room/bed/rent fields are routed to the tenant's current occupancy
    """
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    filter_backends = [OwnerFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'mobile', 'email', 'adhar_no']
    ordering_fields = ['name', 'joining_date', 'created_at']
    ordering = ['-created_at']

    def get_serializer_class(self):
        if self.action == 'list':
            return TenantListSerializer
        return TenantSerializer

    def get_queryset(self):
        queryset = Tenant.objects.all().select_related('property').prefetch_related('occupancies')
        property_id = self.request.query_params.get('property')
        if property_id:
            queryset = queryset.filter(property_id=property_id)
        return queryset

    def create(self, request, *args, **kwargs):
        """Register tenant; a room in the payload also creates the stay and its first payment"""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        person_data, assignment, _status, _leave_date = serializer.split()

        dto = None
        if assignment.get('room_id'):
            dto = OccupancyDTO(**assignment)
        tenant = TenantService().register_tenant(resolve_owner(request), person_data, dto)
        return Response(TenantSerializer(tenant, context=self.get_serializer_context()).data,
                        status=status.HTTP_201_CREATED)

    @transaction.atomic
    def update(self, request, *args, **kwargs):
        """Update tenant with row-level locking"""
        tenant = self.get_object()
        tenant = Tenant.objects.select_for_update().get(pk=tenant.pk)
        serializer = self.get_serializer(tenant, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        person_data, assignment, tenant_status, leave_date = serializer.split()
        tenant = TenantService().update_tenant(tenant, person_data, assignment,
                                               status=tenant_status, leave_date=leave_date)
        return Response(TenantSerializer(tenant, context=self.get_serializer_context()).data)

    def perform_destroy(self, instance):
        """Free the tenant's room/bed before deleting"""
        TenantService().delete_tenant(instance)

    @action(detail=True, methods=['get'])
    def occupancy(self, request, pk=None):
        """Get current occupancy for this tenant"""
        tenant = self.get_object()
        occupancy = tenant.current_occupancy
        if occupancy:
            return Response(OccupancySerializer(occupancy, context=self.get_serializer_context()).data)
        return Response({'detail': 'No occupancy'}, status=status.HTTP_404_NOT_FOUND)

    @action(detail=True, methods=['get'])
    def payments(self, request, pk=None):
        """Payment history for this tenant, newest month first"""
        tenant = self.get_object()
        payments = tenant.payments.order_by('-year', '-month')
        return Response(PaymentListSerializer(payments, many=True).data)
