"""
Tenant repository - Data access layer for Tenant.
"""
from django.db.models import QuerySet, Q
from core.repositories import BaseRepository
from .models import Tenant


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant model"""

    def __init__(self, model: type[Tenant] = Tenant):
        super().__init__(model)

    def get_by_owner(self, owner_id: int) -> QuerySet[Tenant]:
        return self.get_all(owner_id=owner_id)

    def search(self, owner_id: int, query: str) -> QuerySet[Tenant]:
        """Search an owner's tenants by name or mobile"""
        return self.get_by_owner(owner_id).filter(Q(name__icontains=query) | Q(mobile__icontains=query))
