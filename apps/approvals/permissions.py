from rest_framework.permissions import BasePermission

from apps.accounts.access import APPROVE, FINANCE
from apps.accounts.permissions import get_access


def can_review_approvals(access) -> bool:
    return access.is_admin() or access.has_granular_permission(FINANCE, APPROVE)


class CanReviewApprovals(BasePermission):
    """Permission: administrators and Finance approvers decide requests."""

    message = 'You are not allowed to review approval requests.'

    def has_permission(self, request, view):
        return can_review_approvals(get_access(request))
