# tests/test_availability.py - AvailabilityTracker and room layout rules

from decimal import Decimal

import pytest

from core.constants import AvailabilityStatus, RentType
from core.exceptions import NotFoundError, ValidationError
from rooms.models import Bed
from rooms.services import AvailabilityTracker, RoomService


def bed_statuses(room):
    return {bed.bed_number: bed.status for bed in room.beds.all()}


@pytest.mark.django_db
class TestAvailabilityTracker:
    def test_bed_assign_and_release_leave_siblings_alone(self, dorm):
        tracker = AvailabilityTracker()

        tracker.on_assign(dorm.id, '2')
        assert bed_statuses(dorm) == {
            '1': AvailabilityStatus.AVAILABLE,
            '2': AvailabilityStatus.OCCUPIED,
            '3': AvailabilityStatus.AVAILABLE,
        }

        tracker.on_assign(dorm, '3')
        tracker.on_release(dorm.id, '2')
        assert bed_statuses(dorm) == {
            '1': AvailabilityStatus.AVAILABLE,
            '2': AvailabilityStatus.AVAILABLE,
            '3': AvailabilityStatus.OCCUPIED,
        }
        dorm.refresh_from_db()
        assert dorm.status == AvailabilityStatus.AVAILABLE

    def test_whole_room_assign_and_release(self, whole_room):
        tracker = AvailabilityTracker()

        tracker.on_assign(whole_room.id)
        whole_room.refresh_from_db()
        assert whole_room.status == AvailabilityStatus.OCCUPIED

        tracker.on_release(whole_room.id, None)
        whole_room.refresh_from_db()
        assert whole_room.status == AvailabilityStatus.AVAILABLE

    def test_unknown_bed_warns_and_changes_nothing(self, dorm, caplog):
        with caplog.at_level('WARNING'):
            room = AvailabilityTracker().on_assign(dorm.id, '9')

        assert room.id == dorm.id
        assert "Bed not found in room" in caplog.text
        assert set(bed_statuses(dorm).values()) == {AvailabilityStatus.AVAILABLE}

    def test_assigning_occupied_bed_is_logged_not_rejected(self, dorm, caplog):
        tracker = AvailabilityTracker()
        tracker.on_assign(dorm.id, '1')

        with caplog.at_level('WARNING'):
            tracker.on_assign(dorm.id, '1')

        assert "Bed already OCCUPIED" in caplog.text
        assert bed_statuses(dorm)['1'] == AvailabilityStatus.OCCUPIED

    def test_missing_room_is_a_no_op(self, db, caplog):
        with caplog.at_level('WARNING'):
            assert AvailabilityTracker().on_assign(424242, '1') is None
        assert "Room not found" in caplog.text

    def test_no_room_id(self, db):
        assert AvailabilityTracker().on_release(None) is None


@pytest.mark.django_db
class TestRoomService:
    def test_per_bed_room_gets_numbered_beds(self, dorm):
        assert [bed.bed_number for bed in dorm.beds.all()] == ['1', '2', '3']

    def test_explicit_bed_numbers_keep_their_order(self, owner, hostel):
        room = RoomService().create_room(owner, bed_numbers=['B', 'A'], property=hostel, room_number='301',
                                         rent_type=RentType.PER_BED, rent_amount=Decimal('3000'), capacity=4)
        assert [bed.bed_number for bed in room.beds.all()] == ['B', 'A']

    def test_per_room_has_no_beds(self, whole_room):
        assert not whole_room.beds.exists()

    def test_per_room_with_bed_list_rejected(self, owner, hostel):
        with pytest.raises(ValidationError):
            RoomService().create_room(owner, bed_numbers=['1'], property=hostel, room_number='302',
                                      rent_type=RentType.PER_ROOM, rent_amount=Decimal('3000'), capacity=1)

    def test_more_beds_than_capacity_rejected(self, owner, hostel):
        with pytest.raises(ValidationError):
            RoomService().create_room(owner, bed_numbers=['1', '2', '3'], property=hostel, room_number='303',
                                      rent_type=RentType.PER_BED, rent_amount=Decimal('3000'), capacity=2)

    def test_unknown_rent_type_rejected(self, owner, hostel):
        with pytest.raises(ValidationError):
            RoomService().create_room(owner, property=hostel, room_number='304', rent_type='PER_FLOOR',
                                      rent_amount=Decimal('3000'), capacity=1)

    def test_update_bed_status(self, dorm):
        bed = dorm.beds.get(bed_number='2')

        RoomService().update_bed_status(dorm, bed.id, AvailabilityStatus.OCCUPIED)

        assert Bed.objects.get(id=bed.id).status == AvailabilityStatus.OCCUPIED

    def test_update_bed_status_unknown_bed(self, dorm, whole_room):
        foreign_bed = dorm.beds.first()
        with pytest.raises(NotFoundError):
            RoomService().update_bed_status(whole_room, foreign_bed.id, AvailabilityStatus.AVAILABLE)
