from rest_framework import serializers
from core.constants import OccupancyStatus
from occupancy.serializers import get_room_queryset, get_property_queryset, scope_to_owner, validate_slot
from .models import Tenant

# Stay fields accepted on the tenant endpoints and stored on the current occupancy
ASSIGNMENT_FIELDS = ('room', 'bed_number', 'rent_amount', 'advance_amount', 'join_date', 'notes')


class TenantSerializer(serializers.ModelSerializer):
    """
    Serializer for Tenant.

    Besides the person, it reads and writes the room/bed/rent/status of the
    tenant's current occupancy.
    """
    property_id = serializers.PrimaryKeyRelatedField(
        queryset=get_property_queryset(), source='property', required=False, allow_null=True
    )
    room_id = serializers.PrimaryKeyRelatedField(
        queryset=get_room_queryset(), source='room', write_only=True, required=False, allow_null=True
    )
    bed_number = serializers.CharField(max_length=20, write_only=True, required=False, allow_null=True,
                                       allow_blank=True)
    rent_amount = serializers.DecimalField(max_digits=10, decimal_places=2, write_only=True, required=False)
    advance_amount = serializers.DecimalField(max_digits=10, decimal_places=2, write_only=True, required=False)
    join_date = serializers.DateField(write_only=True, required=False)
    notes = serializers.CharField(write_only=True, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=OccupancyStatus.CHOICES, write_only=True, required=False)
    leave_date = serializers.DateField(write_only=True, required=False, allow_null=True)

    class Meta:
        model = Tenant
        fields = [
            'id', 'owner', 'property_id', 'name', 'mobile', 'email', 'adhar_no', 'adhar_img',
            'photo', 'dob', 'gender', 'joining_date',
            'room_id', 'bed_number', 'rent_amount', 'advance_amount', 'join_date', 'notes',
            'status', 'leave_date', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'owner', 'created_at', 'updated_at']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        scope_to_owner(self, ['property_id', 'room_id'])

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Please provide tenant name")
        return value

    def validate(self, data):
        if 'room' in data or 'bed_number' in data:
            current = self.instance.current_occupancy if self.instance else None
            if current is not None and not current.is_active:
                current = None
            room = data['room'] if 'room' in data else (current.room if current else None)
            bed_number = data['bed_number'] if 'bed_number' in data else (current.bed_number if current else None)
            validate_slot(room, bed_number)
        if self.instance is None and data.get('room') and data.get('rent_amount') is None:
            raise serializers.ValidationError({'rent_amount': "Rent amount is required when assigning a room."})
        return data

    def split(self):
        """
        Split validated data into (person_data, assignment, status, leave_date).

        `assignment` is keyed for OccupancyService (room_id, not room).
        """
        data = dict(self.validated_data)
        status = data.pop('status', None)
        leave_date = data.pop('leave_date', None)
        assignment = {}
        for name in ASSIGNMENT_FIELDS:
            if name in data:
                assignment[name] = data.pop(name)
        if 'room' in assignment:
            room = assignment.pop('room')
            assignment['room_id'] = room.id if room else None
        if 'bed_number' in assignment:
            assignment['bed_number'] = assignment['bed_number'] or None
        return data, assignment, status, leave_date

    def to_representation(self, instance):
        data = super().to_representation(instance)
        occupancy = instance.current_occupancy
        data.update({
            'occupancy_id': occupancy.id if occupancy else None,
            'room_id': occupancy.room_id if occupancy else None,
            'room_number': occupancy.room.room_number if occupancy and occupancy.room else None,
            'bed_number': occupancy.bed_number if occupancy else None,
            'rent_amount': str(occupancy.rent_amount) if occupancy else None,
            'advance_amount': str(occupancy.advance_amount) if occupancy else None,
            'advance_left': str(occupancy.advance_left) if occupancy else None,
            'join_date': occupancy.join_date.isoformat() if occupancy else None,
            'leave_date': occupancy.leave_date.isoformat() if occupancy and occupancy.leave_date else None,
            'status': occupancy.status if occupancy else None,
            'location': occupancy.location if occupancy else None,
        })
        return data


class TenantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    status = serializers.ReadOnlyField()
    rent_amount = serializers.ReadOnlyField()
    location = serializers.SerializerMethodField()

    class Meta:
        model = Tenant
        fields = ['id', 'name', 'mobile', 'email', 'status', 'rent_amount', 'location']

    def get_location(self, obj):
        occupancy = obj.current_occupancy
        if occupancy:
            return occupancy.location
        return None
