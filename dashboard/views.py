"""
Dashboard API

Returns headline counts for the requesting owner. Admins see totals
across every owner plus the number of users.
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Sum
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.permissions import is_admin_user
from core.constants import AvailabilityStatus, OccupancyStatus, PaymentStatus, RentType
from occupancy.models import Occupancy
from payments.models import Payment
from rooms.models import Room, Bed
from tenants.models import Tenant


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_stats(request):
    """
    Get dashboard counts.

    Security:
        - OWNER: only their own rows
        - ADMIN: every owner's rows
    """
    user = request.user
    admin = is_admin_user(user)
    scope = {} if admin else {'owner': user}

    payments = Payment.objects.filter(**scope)
    total_revenue = payments.filter(status=PaymentStatus.PAID).aggregate(
        total=Sum('amount_paid'))['total'] or Decimal('0')
    active_tenant_ids = Occupancy.objects.filter(status=OccupancyStatus.ACTIVE, **scope).values('tenant_id')
    beds = Bed.objects.filter(room__owner=user) if not admin else Bed.objects.all()

    stats = {
        'total_tenants': Tenant.objects.filter(**scope).count(),
        'active_tenants': Tenant.objects.filter(id__in=active_tenant_ids, **scope).count(),
        'total_rooms': Room.objects.filter(**scope).count(),
        'available_rooms': Room.objects.filter(
            rent_type=RentType.PER_ROOM, status=AvailabilityStatus.AVAILABLE, **scope).count(),
        'available_beds': beds.filter(status=AvailabilityStatus.AVAILABLE).count(),
        'total_revenue': str(total_revenue),
        'pending_payments': payments.filter(status__in=PaymentStatus.OUTSTANDING).count(),
        'user_role': user.role,
    }

    if admin:
        stats['total_users'] = get_user_model().objects.count()

    return Response(stats)
