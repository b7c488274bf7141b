"""
Occupancy repository - Data access layer for tenant stays.
"""
from django.db.models import QuerySet
from core.constants import OccupancyStatus
from core.repositories import BaseRepository
from .models import Occupancy


class OccupancyRepository(BaseRepository[Occupancy]):
    """Repository for Occupancy model"""

    def __init__(self, model: type[Occupancy] = Occupancy):
        super().__init__(model)

    def get_active_assigned(self) -> QuerySet[Occupancy]:
        """Active stays that hold a room - the population payment generation scans"""
        return self.get_all(status=OccupancyStatus.ACTIVE, room__isnull=False).select_related('tenant', 'room')

    def get_active_for_tenant(self, tenant_id: int):
        return self.find_one(('-join_date', '-id'), tenant_id=tenant_id, status=OccupancyStatus.ACTIVE)

    def get_by_owner(self, owner_id: int) -> QuerySet[Occupancy]:
        return self.get_all(owner_id=owner_id)
