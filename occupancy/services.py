"""
Occupancy service - lifecycle of a tenant's stay in a room or bed.

Every transition keeps room/bed availability in step through the
AvailabilityTracker, and a new stay gets its joining-month payment.
"""
from datetime import date
from typing import Optional
from django.db import transaction
from django.utils import timezone
from core.constants import OccupancyStatus
from core.dto import OccupancyDTO
from core.exceptions import BusinessLogicError
from core.services import BaseService
from core.validators import ChoiceValidator, OccupancyValidator, RentValidator
from payments.services import PaymentGenerator
from rooms.repositories import RoomRepository
from rooms.services import AvailabilityTracker
from .models import Occupancy
from .repositories import OccupancyRepository

class OccupancyService(BaseService):
    """Service for occupancy-related business logic"""

    def __init__(self, occupancy_repo: OccupancyRepository = None, tracker: AvailabilityTracker = None,
                 generator: PaymentGenerator = None, room_repo: RoomRepository = None):
        super().__init__()
        self.occupancy_repo = occupancy_repo or OccupancyRepository()
        self.room_repo = room_repo or RoomRepository()
        self.tracker = tracker or AvailabilityTracker(self.room_repo)
        self.generator = generator or PaymentGenerator(occupancy_repo=self.occupancy_repo)

    def create_occupancy(self, owner, occupancy_data: OccupancyDTO) -> Occupancy:
        """
        Create a stay, occupy its room/bed and record the joining month.

        Raises:
            ValidationError: invalid rent, advance or dates
            NotFoundError: the room does not exist
        """
        RentValidator.validate_rent_amount(occupancy_data.rent_amount)
        RentValidator.validate_advance_amount(occupancy_data.advance_amount)
        OccupancyValidator.validate_dates(occupancy_data.join_date, occupancy_data.leave_date)

        property_id = occupancy_data.property_id
        if occupancy_data.room_id:
            room = self.room_repo.get_by_id_or_raise(occupancy_data.room_id)
            property_id = property_id or room.property_id

        with transaction.atomic():
            occupancy = self.occupancy_repo.create(
                owner=owner,
                tenant_id=occupancy_data.tenant_id,
                property_id=property_id,
                room_id=occupancy_data.room_id,
                bed_number=str(occupancy_data.bed_number) if occupancy_data.bed_number else None,
                rent_amount=occupancy_data.rent_amount,
                advance_amount=occupancy_data.advance_amount or 0,
                join_date=occupancy_data.join_date,
                leave_date=occupancy_data.leave_date,
                notes=occupancy_data.notes or "",
            )
            if occupancy.room_id:
                self.tracker.on_assign(occupancy.room_id, occupancy.bed_number)
            self.generator.create_initial_payment(occupancy)

        self.log_info("Occupancy created", occupancy_id=occupancy.id, tenant_id=occupancy.tenant_id,
                      room_id=occupancy.room_id, bed_number=occupancy.bed_number)
        return occupancy

    def update_occupancy(self, occupancy: Occupancy, **changes) -> Occupancy:
        """
        Apply field changes to a stay.

        A status change to COMPLETED completes the stay. Moving an active
        stay to another room or bed frees the old slot and occupies the new.
        """
        status = changes.pop('status', None)
        if status is not None:
            ChoiceValidator.validate_choice(status, OccupancyStatus.CHOICES, 'status')
        if 'rent_amount' in changes:
            RentValidator.validate_rent_amount(changes['rent_amount'])
        if 'advance_amount' in changes:
            RentValidator.validate_advance_amount(changes['advance_amount'])
        if 'bed_number' in changes and changes['bed_number'] is not None:
            changes['bed_number'] = str(changes['bed_number']) or None
        OccupancyValidator.validate_dates(changes.get('join_date', occupancy.join_date),
                                          changes.get('leave_date', occupancy.leave_date))

        old_slot = (occupancy.room_id, occupancy.bed_number)

        with transaction.atomic():
            occupancy = self.occupancy_repo.update(occupancy, **changes)
            new_slot = (occupancy.room_id, occupancy.bed_number)

            if occupancy.is_active and new_slot != old_slot:
                if old_slot[0]:
                    self.tracker.on_release(*old_slot)
                if new_slot[0]:
                    self.tracker.on_assign(*new_slot)
                self.log_info("Occupancy moved", occupancy_id=occupancy.id, old_slot=old_slot, new_slot=new_slot)

            if status == OccupancyStatus.COMPLETED and occupancy.is_active:
                occupancy = self.complete_occupancy(occupancy, changes.get('leave_date'))
            elif status == OccupancyStatus.ACTIVE and not occupancy.is_active:
                raise BusinessLogicError(
                    message="A completed occupancy cannot be reactivated",
                    code="OCCUPANCY_COMPLETED",
                    details={"occupancy_id": occupancy.id}
                )

        return occupancy

    def complete_occupancy(self, occupancy: Occupancy, leave_date: Optional[date] = None) -> Occupancy:
        """End a stay and free its room/bed. Leave date defaults to today."""
        if occupancy.status == OccupancyStatus.COMPLETED:
            raise BusinessLogicError(
                message="Occupancy is already completed",
                code="OCCUPANCY_COMPLETED",
                details={"occupancy_id": occupancy.id}
            )

        leave_date = leave_date or occupancy.leave_date or timezone.localdate()
        OccupancyValidator.validate_dates(occupancy.join_date, leave_date)

        with transaction.atomic():
            occupancy = self.occupancy_repo.update(occupancy, status=OccupancyStatus.COMPLETED,
                                                   leave_date=leave_date)
            if occupancy.room_id:
                self.tracker.on_release(occupancy.room_id, occupancy.bed_number)

        self.log_info("Occupancy completed", occupancy_id=occupancy.id, tenant_id=occupancy.tenant_id,
                      leave_date=leave_date.isoformat())
        return occupancy

    def delete_occupancy(self, occupancy: Occupancy) -> bool:
        """Delete a stay, freeing its slot when it was still active"""
        occupancy_id = occupancy.id
        was_active = occupancy.is_active
        slot = (occupancy.room_id, occupancy.bed_number)
        with transaction.atomic():
            result = self.occupancy_repo.delete(occupancy)
            if result and was_active and slot[0]:
                self.tracker.on_release(*slot)
        if result:
            self.log_info("Occupancy deleted", occupancy_id=occupancy_id)
        return result
