"""
DRF permissions shared by the storefront apps.

Authentication itself is handled upstream (identity provider / JWT); the
API only distinguishes back-office staff from anonymous shoppers.
"""

from rest_framework import permissions  # type: ignore


def is_back_office(user) -> bool:
    return bool(
        user
        and user.is_authenticated
        and (getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))
    )


class IsStaff(permissions.BasePermission):
    """Back-office only."""

    def has_permission(self, request, view):  # type: ignore
        return is_back_office(request.user)


class IsStaffOrReadOnly(permissions.BasePermission):
    """Anyone may read, only back-office staff may write."""

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_back_office(request.user)


class IsStaffOrCreateOnly(permissions.BasePermission):
    """Shoppers may submit (POST); reading and managing is back-office only."""

    def has_permission(self, request, view):  # type: ignore
        if request.method == "POST" and getattr(view, "action", None) == "create":
            return True
        return is_back_office(request.user)
