from rest_framework import permissions

class ReadOnlyOrAdmin(permissions.BasePermission):
    """
    - Any authenticated caller can read (GET, HEAD, OPTIONS)
    - Only staff users can write (POST, PUT, PATCH, DELETE); tax records are
      maintained by the host's back office, not by the hosted organisation.
    """
    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return bool(user.is_staff)
