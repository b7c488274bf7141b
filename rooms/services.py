"""
Room services - room creation and bed/room availability bookkeeping.
"""
from typing import Optional, Union
from django.db import transaction
from core.constants import AvailabilityStatus, RentType
from core.exceptions import NotFoundError
from core.services import BaseService
from core.validators import ChoiceValidator, RentValidator, RoomValidator
from .models import Room, Bed
from .repositories import RoomRepository


class AvailabilityTracker(BaseService):
    """
    Keeps Room/Bed status in step with occupancy lifecycle events.

    A bed number targets that bed; no bed number targets the whole room.
    The room row is locked for the read-modify-write. Status is advisory:
    assigning an occupied bed is logged, not rejected.
    """

    def __init__(self, room_repo: RoomRepository = None):
        super().__init__()
        self.room_repo = room_repo or RoomRepository()

    def on_assign(self, room: Union[Room, int], bed_number: Optional[str] = None) -> Optional[Room]:
        """Mark the bed (or whole room) OCCUPIED"""
        return self._set_status(room, bed_number, AvailabilityStatus.OCCUPIED)

    def on_release(self, room: Union[Room, int], bed_number: Optional[str] = None) -> Optional[Room]:
        """Mark the bed (or whole room) AVAILABLE"""
        return self._set_status(room, bed_number, AvailabilityStatus.AVAILABLE)

    def _set_status(self, room, bed_number, new_status) -> Optional[Room]:
        room_id = room.pk if isinstance(room, Room) else room
        if room_id is None:
            return None

        with transaction.atomic():
            locked_room = self.room_repo.get_for_update(room_id)
            if locked_room is None:
                self.log_warning("Room not found while updating availability",
                                 room_id=room_id, bed_number=bed_number, status=new_status)
                return None

            if bed_number:
                bed = self.room_repo.find_bed(locked_room, bed_number)
                if bed is None:
                    self.log_warning("Bed not found in room, availability unchanged",
                                     room_id=room_id, bed_number=bed_number, status=new_status)
                    return locked_room
                if bed.status == new_status:
                    self.log_warning(f"Bed already {new_status}",
                                     room_id=room_id, bed_number=bed_number)
                bed.status = new_status
                bed.save(update_fields=['status'])
            else:
                if locked_room.status == new_status:
                    self.log_warning(f"Room already {new_status}", room_id=room_id)
                locked_room.status = new_status
                locked_room.save(update_fields=['status', 'updated_at'])

        self.log_info(f"Availability set to {new_status}", room_id=room_id, bed_number=bed_number)
        return locked_room


class RoomService(BaseService):
    """Service for room-related business logic"""

    def __init__(self, room_repo: RoomRepository = None):
        super().__init__()
        self.room_repo = room_repo or RoomRepository()

    def create_room(self, owner, bed_numbers=None, **room_data) -> Room:
        """
        Create a room and its beds.

        PER_BED rooms created without bed numbers get `capacity` beds
        numbered 1..capacity.
        """
        rent_type = room_data.get('rent_type')
        capacity = room_data.get('capacity', 1)
        bed_numbers = [str(number) for number in (bed_numbers or [])]

        ChoiceValidator.validate_choice(rent_type, RentType.CHOICES, 'rent_type')
        RentValidator.validate_rent_amount(room_data.get('rent_amount'))
        RoomValidator.validate_layout(rent_type, capacity, bed_numbers)

        if rent_type == RentType.PER_BED and not bed_numbers:
            bed_numbers = [str(number) for number in range(1, capacity + 1)]

        with transaction.atomic():
            room = self.room_repo.create(owner=owner, **room_data)
            if rent_type == RentType.PER_BED:
                self.room_repo.create_beds(room, bed_numbers)

        self.log_info(f"Room created: {room.room_number}", room_id=room.id, owner_id=owner.id,
                      beds=len(bed_numbers))
        return room

    def update_bed_status(self, room: Room, bed_id: int, status: str) -> Bed:
        """Manually set a bed's status"""
        ChoiceValidator.validate_choice(status, AvailabilityStatus.CHOICES, 'status')
        bed = room.beds.filter(id=bed_id).first()
        if bed is None:
            raise NotFoundError(resource_type="Bed", resource_id=bed_id)
        bed.status = status
        bed.save(update_fields=['status'])
        self.log_info("Bed status updated", room_id=room.id, bed_id=bed_id, status=status)
        return bed
