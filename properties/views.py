from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import IntegrityError, transaction
from core.exceptions import BusinessLogicError, DuplicateKeyError
from api.permissions import IsOwnerOrAdmin
from api.filters import OwnerFilterBackend, resolve_owner
from .models import Property
from .serializers import PropertySerializer, PropertyListSerializer


class PropertyViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Property management
    Owners only see their own properties, admins see all
    """
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    filter_backends = [OwnerFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'location']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return PropertyListSerializer
        return PropertySerializer

    def get_queryset(self):
        return Property.objects.all().select_related('owner')

    def perform_create(self, serializer):
        """Auto-assign owner when creating property"""
        self._save_unique(serializer, owner=resolve_owner(self.request))

    def perform_update(self, serializer):
        self._save_unique(serializer)

    def _save_unique(self, serializer, **extra):
        try:
            with transaction.atomic():
                serializer.save(**extra)
        except IntegrityError as e:
            raise DuplicateKeyError(
                message="A property with this name already exists",
                code="DUPLICATE_PROPERTY",
                details={'name': serializer.validated_data.get('name')}
            ) from e

    def perform_destroy(self, instance):
        """Refuse to delete a property that still has rooms"""
        if instance.rooms.exists():
            raise BusinessLogicError(
                message="Cannot delete property with existing rooms. Please delete all rooms first.",
                code="PROPERTY_HAS_ROOMS",
                details={'property_id': instance.id}
            )
        instance.delete()

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Room and bed availability per property"""
        properties = self.filter_queryset(self.get_queryset())
        data = []
        for prop in properties:
            entry = {
                'id': prop.id,
                'name': prop.name,
                'location': prop.location,
                'property_type': prop.property_type,
                'image': prop.image,
            }
            entry.update(prop.room_stats())
            data.append(entry)
        return Response(data, status=status.HTTP_200_OK)
