from rest_framework import serializers
from .models import Room, Bed


def get_property_queryset():
    """Get property queryset - will be filtered in __init__"""
    from properties.models import Property
    return Property.objects.all()


class BedSerializer(serializers.ModelSerializer):
    """Serializer for Bed"""

    class Meta:
        model = Bed
        fields = ['id', 'bed_number', 'status']
        read_only_fields = ['id']


class RoomSerializer(serializers.ModelSerializer):
    """
    Serializer for Room.

    `bed_numbers` is accepted on create only; PER_BED rooms without it get
    one bed per unit of capacity.
    """
    beds = BedSerializer(many=True, read_only=True)
    bed_numbers = serializers.ListField(
        child=serializers.CharField(max_length=20), write_only=True, required=False
    )
    property_id = serializers.PrimaryKeyRelatedField(
        queryset=get_property_queryset(), source='property', required=False, allow_null=True
    )
    property_name = serializers.CharField(source='property.name', read_only=True, default=None)
    occupied_beds = serializers.ReadOnlyField()
    available_beds = serializers.ReadOnlyField()

    class Meta:
        model = Room
        fields = [
            'id', 'owner', 'property_id', 'property_name', 'room_number', 'floor',
            'rent_type', 'rent_amount', 'capacity', 'status',
            'beds', 'bed_numbers', 'occupied_beds', 'available_beds',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'owner', 'created_at', 'updated_at']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        from properties.models import Property
        queryset = Property.objects.all()
        request = self.context.get('request')
        if request and request.user.is_authenticated and not getattr(request.user, 'is_admin', False):
            queryset = queryset.filter(owner=request.user)
        self.fields['property_id'].queryset = queryset

    def update(self, instance, validated_data):
        validated_data.pop('bed_numbers', None)
        # Layout is fixed once the room exists
        validated_data.pop('rent_type', None)
        return super().update(instance, validated_data)


class RoomListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    property_name = serializers.CharField(source='property.name', read_only=True, default=None)
    beds = BedSerializer(many=True, read_only=True)

    class Meta:
        model = Room
        fields = [
            'id', 'property_name', 'room_number', 'floor', 'rent_type',
            'rent_amount', 'capacity', 'status', 'beds'
        ]
