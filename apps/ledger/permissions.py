from rest_framework import permissions


class IsLedgerOwner(permissions.BasePermission):
    """
    Permission: only the ledger's creator may read or change it.

    Works for a Ledger or for a Transaction, which is checked against its
    parent ledger.
    """

    def has_object_permission(self, request, view, obj):
        ledger = getattr(obj, 'ledger', obj)
        return ledger.created_by_id == request.user.id
