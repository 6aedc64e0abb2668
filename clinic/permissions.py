"""
Permission classes for role based access control.
"""
from rest_framework.permissions import BasePermission

from clinic.models import User


class IsAdminRole(BasePermission):
    """Allow access only to users with the admin role.

    Runs after authentication; an authenticated non-admin gets 403.
    """
    message = 'Admin access required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == User.ROLE_ADMIN)
