"""
Tenant service - registers people and routes their room/bed/rent details
to the occupancy that carries them.
"""
from dataclasses import replace
from typing import Optional
from django.db import transaction
from django.utils import timezone
from core.constants import OccupancyStatus
from core.dto import OccupancyDTO
from core.services import BaseService
from occupancy.services import OccupancyService
from .models import Tenant
from .repositories import TenantRepository


class TenantService(BaseService):
    """Service for tenant-related business logic"""

    def __init__(self, tenant_repo: TenantRepository = None, occupancy_service: OccupancyService = None):
        super().__init__()
        self.tenant_repo = tenant_repo or TenantRepository()
        self.occupancy_service = occupancy_service or OccupancyService()

    def register_tenant(self, owner, person_data: dict, assignment: Optional[OccupancyDTO] = None) -> Tenant:
        """
        Create a tenant and, when a room is given, their stay.

        The stay's join date defaults to the tenant's joining date.
        """
        with transaction.atomic():
            tenant = self.tenant_repo.create(owner=owner, **person_data)
            if assignment is not None and assignment.room_id:
                assignment = replace(
                    assignment,
                    tenant_id=tenant.id,
                    property_id=assignment.property_id or tenant.property_id,
                    join_date=assignment.join_date or tenant.joining_date,
                )
                self.occupancy_service.create_occupancy(owner, assignment)

        self.log_info(f"Tenant registered: {tenant.name}", tenant_id=tenant.id, owner_id=owner.id,
                      room_id=assignment.room_id if assignment else None)
        return tenant

    def update_tenant(self, tenant: Tenant, person_data: dict, assignment_changes: Optional[dict] = None,
                      status: Optional[str] = None, leave_date=None) -> Tenant:
        """
        Update a tenant's details.

        Room, bed and rent changes go to the active occupancy; a tenant with
        no active occupancy gets a new one when a room is supplied, and a
        completed stay is never edited. Status COMPLETED completes the
        active occupancy.
        """
        assignment_changes = dict(assignment_changes or {})

        with transaction.atomic():
            if person_data:
                tenant = self.tenant_repo.update(tenant, **person_data)

            occupancy = tenant.current_occupancy
            if occupancy is None or not occupancy.is_active:
                if assignment_changes.get('room_id'):
                    # A returning tenant starts a new stay today unless told otherwise
                    default_join = tenant.joining_date if occupancy is None else timezone.localdate()
                    self.occupancy_service.create_occupancy(tenant.owner, OccupancyDTO(
                        tenant_id=tenant.id,
                        property_id=assignment_changes.get('property_id') or tenant.property_id,
                        join_date=assignment_changes.get('join_date') or default_join,
                        **{key: value for key, value in assignment_changes.items()
                           if key in ('room_id', 'bed_number', 'rent_amount', 'advance_amount', 'notes')}
                    ))
            else:
                if leave_date is not None:
                    assignment_changes['leave_date'] = leave_date
                if status is not None:
                    assignment_changes['status'] = status
                if assignment_changes:
                    self.occupancy_service.update_occupancy(occupancy, **assignment_changes)

        self.log_info(f"Tenant updated: {tenant.name}", tenant_id=tenant.id, status=status)
        return tenant

    def delete_tenant(self, tenant: Tenant) -> bool:
        """Free the tenant's room/bed, then delete them. Their payments are kept."""
        tenant_id = tenant.id
        with transaction.atomic():
            for occupancy in tenant.occupancies.filter(status=OccupancyStatus.ACTIVE):
                self.occupancy_service.delete_occupancy(occupancy)
            result = self.tenant_repo.delete(tenant)
        if result:
            self.log_info("Tenant deleted", tenant_id=tenant_id)
        return result
