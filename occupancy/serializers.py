from rest_framework import serializers
from core.constants import OccupancyStatus, RentType
from core.dto import OccupancyDTO
from .models import Occupancy


def get_tenant_queryset():
    """Get tenant queryset - will be filtered in __init__"""
    from tenants.models import Tenant
    return Tenant.objects.all()


def get_room_queryset():
    """Get room queryset - will be filtered in __init__"""
    from rooms.models import Room
    return Room.objects.all()


def get_property_queryset():
    """Get property queryset - will be filtered in __init__"""
    from properties.models import Property
    return Property.objects.all()


def scope_to_owner(serializer, field_names):
    """Limit related-object choices to the requesting owner's rows (admins see all)"""
    request = serializer.context.get('request')
    if not (request and request.user.is_authenticated) or getattr(request.user, 'is_admin', False):
        return
    for name in field_names:
        if name in serializer.fields:
            field = serializer.fields[name]
            field.queryset = field.queryset.filter(owner=request.user)


def validate_slot(room, bed_number):
    """A bed number must name one of the room's beds; whole-room rentals take none"""
    if room is None:
        if bed_number:
            raise serializers.ValidationError({'bed_number': "A bed requires a room."})
        return
    if room.rent_type == RentType.PER_ROOM and bed_number:
        raise serializers.ValidationError({'bed_number': "This room is rented as a whole; omit the bed number."})
    if room.rent_type == RentType.PER_BED:
        if not bed_number:
            raise serializers.ValidationError({'bed_number': "This room is rented per bed; a bed number is required."})
        if not room.beds.filter(bed_number=str(bed_number)).exists():
            raise serializers.ValidationError({'bed_number': f"Room {room.room_number} has no bed {bed_number}."})


class OccupancySerializer(serializers.ModelSerializer):
    """Serializer for Occupancy"""
    tenant_id = serializers.PrimaryKeyRelatedField(queryset=get_tenant_queryset(), source='tenant')
    tenant_name = serializers.CharField(source='tenant.name', read_only=True)
    room_id = serializers.PrimaryKeyRelatedField(
        queryset=get_room_queryset(), source='room', required=False, allow_null=True
    )
    room_number = serializers.CharField(source='room.room_number', read_only=True, default=None)
    property_id = serializers.PrimaryKeyRelatedField(
        queryset=get_property_queryset(), source='property', required=False, allow_null=True
    )
    bed_number = serializers.CharField(max_length=20, required=False, allow_null=True, allow_blank=True)
    location = serializers.ReadOnlyField()
    due_day = serializers.ReadOnlyField()

    class Meta:
        model = Occupancy
        fields = [
            'id', 'owner', 'tenant_id', 'tenant_name', 'property_id', 'room_id', 'room_number',
            'bed_number', 'rent_amount', 'advance_amount', 'advance_left', 'join_date',
            'leave_date', 'status', 'notes', 'location', 'due_day', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'owner', 'advance_left', 'created_at', 'updated_at']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        scope_to_owner(self, ['tenant_id', 'room_id', 'property_id'])

    def validate(self, data):
        room = data.get('room', self.instance.room if self.instance else None)
        bed_number = data.get('bed_number', self.instance.bed_number if self.instance else None)
        if self.instance is None or 'room' in data or 'bed_number' in data:
            validate_slot(room, bed_number)
        if self.instance is None and data.get('status', OccupancyStatus.ACTIVE) != OccupancyStatus.ACTIVE:
            raise serializers.ValidationError({'status': "New occupancies start ACTIVE."})
        return data

    def to_dto(self) -> OccupancyDTO:
        data = self.validated_data
        room = data.get('room')
        prop = data.get('property')
        return OccupancyDTO(
            tenant_id=data['tenant'].id,
            room_id=room.id if room else None,
            bed_number=data.get('bed_number') or None,
            property_id=prop.id if prop else None,
            rent_amount=data.get('rent_amount'),
            advance_amount=data.get('advance_amount') or 0,
            join_date=data.get('join_date'),
            leave_date=data.get('leave_date'),
            notes=data.get('notes', ''),
        )

    def changes(self) -> dict:
        """validated_data keyed the way OccupancyService.update_occupancy expects"""
        changes = dict(self.validated_data)
        changes.pop('tenant', None)
        if 'room' in changes:
            room = changes.pop('room')
            changes['room_id'] = room.id if room else None
        if 'property' in changes:
            prop = changes.pop('property')
            changes['property_id'] = prop.id if prop else None
        if 'bed_number' in changes:
            changes['bed_number'] = changes['bed_number'] or None
        return changes


class OccupancyListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    tenant_name = serializers.CharField(source='tenant.name', read_only=True)
    location = serializers.ReadOnlyField()

    class Meta:
        model = Occupancy
        fields = [
            'id', 'tenant', 'tenant_name', 'location', 'rent_amount',
            'join_date', 'leave_date', 'status'
        ]


class CompleteOccupancySerializer(serializers.Serializer):
    leave_date = serializers.DateField(required=False, allow_null=True)
