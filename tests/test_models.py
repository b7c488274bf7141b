# tests/test_models.py - models whose `property` foreign key sits beside computed attributes

from datetime import date
from decimal import Decimal

import pytest

from core.constants import OccupancyStatus
from occupancy.models import Occupancy
from rooms.models import Room
from tenants.models import Tenant


@pytest.mark.django_db
class TestPropertyForeignKeyBesideComputedAttributes:
    def test_room(self, hostel, dorm):
        assert Room._meta.get_field('property').is_relation
        assert dorm.property == hostel
        assert dorm.is_per_bed is True
        assert dorm.available_beds == 3
        assert dorm.occupied_beds == 0

    def test_occupancy(self, make_occupancy, tenant, hostel, dorm):
        occupancy = make_occupancy(tenant=tenant, room=dorm, bed_number='2')

        assert Occupancy._meta.get_field('property').is_relation
        assert occupancy.property == hostel
        assert occupancy.is_active is True
        assert occupancy.location == f"Room {dorm.room_number} - Bed 2"
        assert occupancy.due_day == occupancy.join_date.day

    def test_tenant(self, owner, hostel, whole_room):
        tenant = Tenant.objects.create(owner=owner, property=hostel, name='Meera', mobile='9000000002',
                                       joining_date=date(2025, 3, 4))
        assert Tenant._meta.get_field('property').is_relation
        assert tenant.property == hostel
        assert tenant.current_occupancy is None
        assert tenant.join_date == date(2025, 3, 4)

        Occupancy.objects.create(owner=owner, tenant=tenant, property=hostel, room=whole_room,
                                 rent_amount=Decimal('9000.00'), join_date=date(2025, 3, 4))

        assert tenant.status == OccupancyStatus.ACTIVE
        assert tenant.room_id == whole_room.id
        assert tenant.rent_amount == Decimal('9000.00')
