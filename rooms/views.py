from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import transaction
from core.constants import AvailabilityStatus
from api.permissions import IsOwnerOrAdmin
from api.filters import OwnerFilterBackend, resolve_owner
from .models import Room
from .serializers import RoomSerializer, RoomListSerializer, BedSerializer
from .services import RoomService


class RoomViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Room management

    ?status= filters by room status, ?property= by property id.
    """
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    filter_backends = [OwnerFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['room_number']
    ordering_fields = ['room_number', 'floor', 'created_at']
    ordering = ['room_number']

    def get_serializer_class(self):
        if self.action == 'list':
            return RoomListSerializer
        return RoomSerializer

    def get_queryset(self):
        queryset = Room.objects.all().select_related('property').prefetch_related('beds')
        room_status = self.request.query_params.get('status')
        if room_status:
            queryset = queryset.filter(status=room_status)
        property_id = self.request.query_params.get('property')
        if property_id:
            queryset = queryset.filter(property_id=property_id)
        return queryset

    def create(self, request, *args, **kwargs):
        """Create room and its beds"""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        bed_numbers = data.pop('bed_numbers', None)
        room = RoomService().create_room(resolve_owner(request), bed_numbers=bed_numbers, **data)
        return Response(RoomSerializer(room, context=self.get_serializer_context()).data,
                        status=status.HTTP_201_CREATED)

    @transaction.atomic
    def update(self, request, *args, **kwargs):
        """Update room with row-level locking"""
        room = self.get_object()
        room = Room.objects.select_for_update().get(pk=room.pk)
        serializer = self.get_serializer(room, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @transaction.atomic
    @action(detail=True, methods=['patch'], url_path=r'beds/(?P<bed_id>\d+)')
    def bed(self, request, pk=None, bed_id=None):
        """
        Set a bed's status manually.

        Body: { "status": "AVAILABLE" | "OCCUPIED" }
        """
        room = self.get_object()
        bed = RoomService().update_bed_status(room, bed_id, request.data.get('status'))
        return Response(BedSerializer(bed).data)

    @action(detail=False, methods=['get'])
    def available(self, request):
        """Rooms with at least one free slot"""
        rooms = self.filter_queryset(self.get_queryset())
        free = [room for room in rooms
                if (room.available_beds > 0 if room.is_per_bed else room.status == AvailabilityStatus.AVAILABLE)]
        serializer = RoomListSerializer(free, many=True)
        return Response(serializer.data)
