"""
Custom filters for multi-tenant data
"""
from django.contrib.auth import get_user_model
from rest_framework import filters
from core.exceptions import ValidationError as AppValidationError
from .permissions import is_admin_user


class OwnerFilterBackend(filters.BaseFilterBackend):
    """
    Filter queryset to only show objects owned by the requesting user.
    Admins see every owner's rows and may narrow with ?owner=<id>.
    """

    def filter_queryset(self, request, queryset, view):
        """Filter by owner"""
        if not (request.user and request.user.is_authenticated):
            return queryset.none()

        if is_admin_user(request.user):
            owner_id = request.query_params.get('owner')
            if owner_id:
                return queryset.filter(owner_id=owner_id)
            return queryset

        return queryset.filter(owner=request.user)


def resolve_owner(request):
    """
    Owner for a newly created object.

    Regular users always own what they create. Admins create on behalf of an
    owner and must pass `owner_id`.
    """
    if not is_admin_user(request.user):
        return request.user

    owner_id = request.data.get('owner_id')
    if not owner_id:
        raise AppValidationError(
            message="owner_id is required when an admin creates a record",
            code="OWNER_REQUIRED"
        )

    owner = get_user_model().objects.filter(id=owner_id).first()
    if owner is None:
        raise AppValidationError(
            message=f"Owner {owner_id} does not exist",
            code="OWNER_NOT_FOUND"
        )
    return owner
