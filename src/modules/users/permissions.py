"""Role gates for DRF views.

Route-level checks only.  Whether a caller may touch a *specific* order
is decided by ``modules.orders.policies``.
"""

from __future__ import annotations

from rest_framework.permissions import BasePermission

from modules.users.models import Role


class _HasRole(BasePermission):
    role: str = ""
    message = "You do not have permission to access this resource."

    def has_permission(self, request, view) -> bool:
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) == self.role
        )


class IsAdmin(_HasRole):
    role = Role.ADMIN


class IsClient(_HasRole):
    role = Role.CLIENT
