# tests/test_occupancy_service.py - stay lifecycle and the tenant facade

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.utils import timezone

from core.constants import AvailabilityStatus, OccupancyStatus, PaymentStatus
from core.dto import OccupancyDTO
from core.exceptions import BusinessLogicError, NotFoundError, ValidationError
from occupancy.models import Occupancy
from occupancy.services import OccupancyService
from payments.models import Payment
from tenants.models import Tenant
from tenants.services import TenantService


def bed_status(room, bed_number):
    return room.beds.get(bed_number=bed_number).status


@pytest.fixture
def service():
    return OccupancyService()


@pytest.mark.django_db
class TestCreateOccupancy:
    def test_bed_stay_occupies_bed_and_records_first_month(self, service, owner, tenant, dorm):
        occupancy = service.create_occupancy(owner, OccupancyDTO(
            tenant_id=tenant.id, room_id=dorm.id, bed_number='2',
            rent_amount=Decimal('4000.00'), advance_amount=Decimal('10000.00'), join_date=date(2025, 1, 5),
        ))

        assert occupancy.property_id == dorm.property_id
        assert occupancy.advance_left == Decimal('6000.00')
        assert bed_status(dorm, '2') == AvailabilityStatus.OCCUPIED
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE

        payment = Payment.objects.get(tenant=tenant)
        assert (payment.month, payment.year) == (1, 2025)
        assert payment.status == PaymentStatus.PAID
        assert payment.occupancy == occupancy

    def test_whole_room_stay_occupies_room(self, service, owner, tenant, whole_room):
        service.create_occupancy(owner, OccupancyDTO(
            tenant_id=tenant.id, room_id=whole_room.id, rent_amount=Decimal('9000.00'),
            join_date=date(2025, 1, 5),
        ))

        whole_room.refresh_from_db()
        assert whole_room.status == AvailabilityStatus.OCCUPIED

    def test_invalid_rent_rejected_before_any_write(self, service, owner, tenant, dorm):
        with pytest.raises(ValidationError):
            service.create_occupancy(owner, OccupancyDTO(
                tenant_id=tenant.id, room_id=dorm.id, bed_number='1', rent_amount=Decimal('0'),
                join_date=date(2025, 1, 5),
            ))
        assert not Occupancy.objects.exists()
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE

    def test_leave_before_join_rejected(self, service, owner, tenant, dorm):
        with pytest.raises(ValidationError):
            service.create_occupancy(owner, OccupancyDTO(
                tenant_id=tenant.id, room_id=dorm.id, bed_number='1', rent_amount=Decimal('4000'),
                join_date=date(2025, 2, 5), leave_date=date(2025, 1, 5),
            ))

    def test_unknown_room(self, service, owner, tenant):
        with pytest.raises(NotFoundError):
            service.create_occupancy(owner, OccupancyDTO(
                tenant_id=tenant.id, room_id=424242, rent_amount=Decimal('4000'), join_date=date(2025, 1, 5),
            ))

    def test_failed_initial_payment_rolls_back_the_stay(self, service, owner, tenant, dorm):
        with patch.object(service.generator, 'create_initial_payment', side_effect=RuntimeError("db down")):
            with pytest.raises(RuntimeError):
                service.create_occupancy(owner, OccupancyDTO(
                    tenant_id=tenant.id, room_id=dorm.id, bed_number='1', rent_amount=Decimal('4000'),
                    join_date=date(2025, 1, 5),
                ))

        assert not Occupancy.objects.exists()
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE


@pytest.mark.django_db
class TestOccupancyTransitions:
    @pytest.fixture
    def stay(self, service, owner, tenant, dorm):
        return service.create_occupancy(owner, OccupancyDTO(
            tenant_id=tenant.id, room_id=dorm.id, bed_number='1', rent_amount=Decimal('4000.00'),
            join_date=date(2025, 1, 5),
        ))

    def test_move_to_another_bed(self, service, stay, dorm):
        service.update_occupancy(stay, bed_number='3')

        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE
        assert bed_status(dorm, '3') == AvailabilityStatus.OCCUPIED

    def test_rent_change_keeps_slot(self, service, stay, dorm):
        service.update_occupancy(stay, rent_amount=Decimal('4500.00'))

        stay.refresh_from_db()
        assert stay.rent_amount == Decimal('4500.00')
        assert bed_status(dorm, '1') == AvailabilityStatus.OCCUPIED

    def test_complete_defaults_leave_date_and_frees_only_its_bed(self, service, stay, dorm):
        service.tracker.on_assign(dorm.id, '2')

        completed = service.complete_occupancy(stay)

        assert completed.status == OccupancyStatus.COMPLETED
        assert completed.leave_date == timezone.localdate()
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE
        assert bed_status(dorm, '2') == AvailabilityStatus.OCCUPIED
        assert bed_status(dorm, '3') == AvailabilityStatus.AVAILABLE

    def test_complete_twice_rejected(self, service, stay):
        service.complete_occupancy(stay, leave_date=date(2025, 3, 1))
        with pytest.raises(BusinessLogicError):
            service.complete_occupancy(stay)

    def test_status_completed_through_update(self, service, stay, dorm):
        service.update_occupancy(stay, status=OccupancyStatus.COMPLETED, leave_date=date(2025, 3, 1))

        stay.refresh_from_db()
        assert stay.status == OccupancyStatus.COMPLETED
        assert stay.leave_date == date(2025, 3, 1)
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE

    def test_completed_stay_cannot_be_reactivated(self, service, stay):
        service.complete_occupancy(stay, leave_date=date(2025, 3, 1))
        with pytest.raises(BusinessLogicError):
            service.update_occupancy(stay, status=OccupancyStatus.ACTIVE)

    def test_invalid_status(self, service, stay):
        with pytest.raises(ValidationError):
            service.update_occupancy(stay, status='EVICTED')

    def test_delete_frees_bed(self, service, stay, dorm):
        assert service.delete_occupancy(stay) is True
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE


@pytest.mark.django_db
class TestTenantService:
    def test_register_with_room(self, owner, hostel, dorm):
        tenant = TenantService().register_tenant(
            owner,
            {'name': 'Ravi', 'mobile': '9000000001', 'property': hostel, 'joining_date': date(2025, 2, 10)},
            OccupancyDTO(room_id=dorm.id, bed_number='3', rent_amount=Decimal('4000.00')),
        )

        occupancy = tenant.current_occupancy
        assert occupancy.join_date == date(2025, 2, 10)
        assert occupancy.property_id == hostel.id
        assert bed_status(dorm, '3') == AvailabilityStatus.OCCUPIED
        assert Payment.objects.get(tenant=tenant).due_date == date(2025, 2, 10)

    def test_register_without_room(self, owner, hostel):
        tenant = TenantService().register_tenant(owner, {'name': 'Ravi', 'mobile': '9000000001'})

        assert tenant.current_occupancy is None
        assert not Payment.objects.exists()

    def test_update_routes_room_fields_to_occupancy(self, owner, hostel, dorm):
        service = TenantService()
        tenant = service.register_tenant(
            owner, {'name': 'Ravi', 'mobile': '9000000001', 'joining_date': date(2025, 2, 10)},
            OccupancyDTO(room_id=dorm.id, bed_number='1', rent_amount=Decimal('4000.00')),
        )

        service.update_tenant(tenant, {'email': 'ravi@example.com'}, {'bed_number': '2'})

        tenant.refresh_from_db()
        assert tenant.email == 'ravi@example.com'
        assert tenant.bed_number == '2'
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE
        assert bed_status(dorm, '2') == AvailabilityStatus.OCCUPIED

    def test_update_assigns_room_to_unassigned_tenant(self, owner, tenant, whole_room):
        TenantService().update_tenant(tenant, {}, {'room_id': whole_room.id, 'rent_amount': Decimal('9000')})

        whole_room.refresh_from_db()
        assert whole_room.status == AvailabilityStatus.OCCUPIED
        assert tenant.current_occupancy.join_date == tenant.joining_date

    def test_update_status_completes_stay(self, owner, tenant, whole_room):
        service = TenantService()
        service.update_tenant(tenant, {}, {'room_id': whole_room.id, 'rent_amount': Decimal('9000')})

        service.update_tenant(tenant, {}, status=OccupancyStatus.COMPLETED, leave_date=date(2025, 6, 1))

        assert tenant.status == OccupancyStatus.COMPLETED
        whole_room.refresh_from_db()
        assert whole_room.status == AvailabilityStatus.AVAILABLE

    def test_returning_tenant_gets_new_stay(self, owner, hostel, dorm, whole_room):
        service = TenantService()
        tenant = service.register_tenant(
            owner, {'name': 'Ravi', 'mobile': '9000000001', 'joining_date': date(2025, 2, 10)},
            OccupancyDTO(room_id=dorm.id, bed_number='1', rent_amount=Decimal('4000.00')),
        )
        first_stay = tenant.current_occupancy
        service.update_tenant(tenant, {}, status=OccupancyStatus.COMPLETED, leave_date=date(2025, 3, 1))

        service.update_tenant(tenant, {}, {'room_id': whole_room.id, 'rent_amount': Decimal('9000')})

        whole_room.refresh_from_db()
        assert whole_room.status == AvailabilityStatus.OCCUPIED
        first_stay.refresh_from_db()
        assert first_stay.status == OccupancyStatus.COMPLETED
        assert first_stay.room_id == dorm.id
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE

        new_stay = Occupancy.objects.get(tenant=tenant, status=OccupancyStatus.ACTIVE)
        assert new_stay.pk != first_stay.pk
        assert new_stay.room_id == whole_room.id
        assert new_stay.join_date == timezone.localdate()
        today = timezone.localdate()
        months = set(Payment.objects.filter(tenant=tenant).values_list('month', 'year'))
        assert {(2, 2025), (today.month, today.year)} <= months

    def test_delete_frees_slot_and_keeps_payments(self, owner, hostel, dorm):
        service = TenantService()
        tenant = service.register_tenant(
            owner, {'name': 'Ravi', 'mobile': '9000000001', 'joining_date': date(2025, 2, 10)},
            OccupancyDTO(room_id=dorm.id, bed_number='1', rent_amount=Decimal('4000.00')),
        )

        assert service.delete_tenant(tenant) is True

        assert not Tenant.objects.exists()
        assert bed_status(dorm, '1') == AvailabilityStatus.AVAILABLE
        payment = Payment.objects.get()
        assert payment.tenant_id is None
        assert payment.occupancy_id is None
