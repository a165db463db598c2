from rest_framework import permissions


class IsFactoryManager(permissions.BasePermission):
    """
    Permission: anyone signed in may read, only the manager may change.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Factory instance
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.manager_id == request.user.id


class IsRecordCreator(permissions.BasePermission):
    """
    Permission: anyone signed in may read, only the creator may change.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a ProductionRecord instance
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.created_by_id == request.user.id
