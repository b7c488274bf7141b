"""
Multi-tenant permissions - owners only reach their own data, admins reach everything
"""
from rest_framework import permissions


def is_admin_user(user):
    return bool(user and user.is_authenticated and getattr(user, 'is_admin', False))


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Permission to only allow users to access objects they own.
    Admins may access every object.
    """

    def has_permission(self, request, view):
        """Check if user is authenticated"""
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        """Check if object belongs to the requesting user"""
        if is_admin_user(request.user):
            return True

        owner_id = getattr(obj, 'owner_id', None)
        if owner_id is None and hasattr(obj, 'room'):
            owner_id = obj.room.owner_id

        return owner_id is not None and owner_id == request.user.id


class IsAdmin(permissions.BasePermission):
    """Permission for admin-only operations"""

    def has_permission(self, request, view):
        return is_admin_user(request.user)
