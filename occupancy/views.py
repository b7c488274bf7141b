from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import transaction
from api.permissions import IsOwnerOrAdmin
from api.filters import OwnerFilterBackend, resolve_owner
from .models import Occupancy
from .serializers import OccupancySerializer, OccupancyListSerializer, CompleteOccupancySerializer
from .services import OccupancyService


class OccupancyViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Occupancy management
    MOST IMPORTANT - Handles tenant assignment to rooms/beds
    """
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    filter_backends = [OwnerFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['tenant__name', 'room__room_number']
    ordering_fields = ['join_date', 'created_at']
    ordering = ['status', '-created_at']

    def get_serializer_class(self):
        if self.action == 'list':
            return OccupancyListSerializer
        return OccupancySerializer

    def get_queryset(self):
        queryset = Occupancy.objects.all().select_related('tenant', 'room', 'property')
        occupancy_status = self.request.query_params.get('status')
        if occupancy_status:
            queryset = queryset.filter(status=occupancy_status)
        return queryset

    def create(self, request, *args, **kwargs):
        """Create occupancy, occupy the room/bed and record the joining month"""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        occupancy = OccupancyService().create_occupancy(resolve_owner(request), serializer.to_dto())
        return Response(OccupancySerializer(occupancy, context=self.get_serializer_context()).data,
                        status=status.HTTP_201_CREATED)

    @transaction.atomic
    def update(self, request, *args, **kwargs):
        """
        Update occupancy (e.g., move tenant to a different room/bed)
        Uses row-level locking to prevent concurrent modifications
        """
        occupancy = self.get_object()
        occupancy = Occupancy.objects.select_for_update().get(pk=occupancy.pk)
        serializer = self.get_serializer(occupancy, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        occupancy = OccupancyService().update_occupancy(occupancy, **serializer.changes())
        return Response(OccupancySerializer(occupancy, context=self.get_serializer_context()).data)

    def perform_destroy(self, instance):
        OccupancyService().delete_occupancy(instance)

    @transaction.atomic
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        """
        End the occupancy - set leave_date and status COMPLETED
        Frees the room/bed
        """
        occupancy = self.get_object()
        occupancy = Occupancy.objects.select_for_update().get(pk=occupancy.pk)
        serializer = CompleteOccupancySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        occupancy = OccupancyService().complete_occupancy(occupancy, serializer.validated_data.get('leave_date'))
        return Response(OccupancySerializer(occupancy, context=self.get_serializer_context()).data)
