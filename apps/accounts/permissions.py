from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Permission: Only users with the admin role.
    """

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin_role)


class IsAdminRoleOrReadOnly(permissions.BasePermission):
    """
    Permission: Admins can create, edit and delete.
    Viewers can only read.
    """

    def has_permission(self, request, view):
        # Read permissions are allowed for any authenticated request
        if request.method in permissions.SAFE_METHODS:
            return True

        # Write permissions only for admins
        return bool(request.user and request.user.is_authenticated and request.user.is_admin_role)
