"""
Room repository - Data access layer for Room and Bed.
"""
from typing import Optional
from django.db.models import QuerySet
from core.repositories import BaseRepository
from .models import Room, Bed


class RoomRepository(BaseRepository[Room]):
    """Repository for Room model"""

    def __init__(self, model: type[Room] = Room):
        super().__init__(model)

    def get_for_update(self, room_id: int) -> Optional[Room]:
        """Lock the room row for a read-modify-write. Must run inside a transaction."""
        return self.model.objects.select_for_update().filter(id=room_id).first()

    def find_bed(self, room: Room, bed_number: str) -> Optional[Bed]:
        """Find a bed in the room by its number"""
        return Bed.objects.select_for_update().filter(room=room, bed_number=str(bed_number)).first()

    def get_by_owner(self, owner_id: int) -> QuerySet[Room]:
        return self.get_all(owner_id=owner_id)

    def create_beds(self, room: Room, bed_numbers) -> list:
        return Bed.objects.bulk_create([
            Bed(room=room, bed_number=str(number)) for number in bed_numbers
        ])
