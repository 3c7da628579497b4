from rest_framework.permissions import BasePermission


class IsDashboardUser(BasePermission):
    """Allows access to authenticated admin or staff accounts only."""

    message = "Dashboard access is restricted to hotel staff."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.can_access_dashboard())
