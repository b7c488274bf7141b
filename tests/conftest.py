# tests/conftest.py - shared fixtures for the hostel manager test suite

from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from core.constants import OccupancyStatus, RentType, UserRole
from occupancy.models import Occupancy
from payments.models import Payment
from properties.models import Property
from rooms.models import Room
from rooms.services import RoomService
from tenants.models import Tenant


@pytest.fixture
def owner(db):
    return get_user_model().objects.create_user(username='owner', password='pass12345', role=UserRole.OWNER)


@pytest.fixture
def other_owner(db):
    return get_user_model().objects.create_user(username='other', password='pass12345', role=UserRole.OWNER)


@pytest.fixture
def admin_user(db):
    return get_user_model().objects.create_user(username='admin', password='pass12345', role=UserRole.ADMIN)


@pytest.fixture
def hostel(owner):
    return Property.objects.create(owner=owner, name='Green Hostel', location='Pune')


@pytest.fixture
def whole_room(owner, hostel):
    """A PER_ROOM room"""
    return RoomService().create_room(owner, property=hostel, room_number='101', rent_type=RentType.PER_ROOM,
                                     rent_amount=Decimal('9000.00'), capacity=2)


@pytest.fixture
def dorm(owner, hostel):
    """A PER_BED room with beds 1..3"""
    return RoomService().create_room(owner, property=hostel, room_number='201', rent_type=RentType.PER_BED,
                                     rent_amount=Decimal('4000.00'), capacity=3)


@pytest.fixture
def tenant(owner, hostel):
    return Tenant.objects.create(owner=owner, property=hostel, name='Asha', mobile='9876543210',
                                 joining_date=date(2025, 1, 5))


@pytest.fixture
def make_occupancy(owner):
    """Create an Occupancy row directly, with no availability or payment side effects"""
    def _make(tenant, room, bed_number=None, join_date=date(2025, 1, 5), rent=Decimal('4000.00'),
              status=OccupancyStatus.ACTIVE, occupancy_owner=None):
        return Occupancy.objects.create(
            owner=occupancy_owner or owner, tenant=tenant, property=room.property if room else None,
            room=room, bed_number=bed_number, rent_amount=rent, join_date=join_date, status=status,
        )
    return _make


@pytest.fixture
def make_tenant(owner, hostel):
    counter = {'n': 0}

    def _make(name=None, tenant_owner=None):
        counter['n'] += 1
        return Tenant.objects.create(owner=tenant_owner or owner, property=hostel,
                                     name=name or f"Tenant {counter['n']}",
                                     mobile=f"90000000{counter['n']:02d}")
    return _make


@pytest.fixture
def make_payment():
    """Create a Payment row for an occupancy's tenant"""
    def _make(occupancy, month, year, amount_paid=Decimal('0'), due_date=None, **extra):
        return Payment.objects.create(
            owner=occupancy.owner, tenant=occupancy.tenant, occupancy=occupancy,
            month=month, year=year, rent_amount=occupancy.rent_amount,
            amount_paid=amount_paid, due_date=due_date, **extra
        )
    return _make


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner_client(api_client, owner):
    api_client.force_authenticate(user=owner)
    return api_client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
