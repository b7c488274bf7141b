"""
Data Transfer Objects (DTOs).
Used for passing data between layers without exposing domain models.
"""
from dataclasses import dataclass, field
from typing import Optional
from decimal import Decimal
from datetime import date


@dataclass
class OccupancyDTO:
    """Data Transfer Object for an occupancy (room/bed assignment)"""
    tenant_id: int = None
    room_id: Optional[int] = None
    bed_number: Optional[str] = None
    property_id: Optional[int] = None
    rent_amount: Decimal = Decimal('0')
    advance_amount: Decimal = Decimal('0')
    join_date: date = None
    leave_date: Optional[date] = None
    notes: str = ""


@dataclass(frozen=True)
class PaymentPeriod:
    """A billing month and the date its rent falls due"""
    month: int
    year: int
    due_date: date


@dataclass
class GenerationSummary:
    """Outcome counters of one upcoming-payment scan"""
    total: int = 0
    created: int = 0
    already_exists: int = 0
    no_base_payment: int = 0
    not_due: int = 0
    failed: int = 0
    created_ids: list = field(default_factory=list)


@dataclass
class BackfillSummary:
    """Outcome counters of a due-date backfill run"""
    total: int = 0
    updated: int = 0
    failed: int = 0
