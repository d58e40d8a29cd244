"""
Approval request lifecycle: submit, approve, reject.

Approving runs the action registered for the request type in the same
transaction, so a failing action leaves the request pending.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from django.utils.module_loading import import_string

from apps.accounts.models import User
from apps.approvals.models import (
    MONEY_REQUEST_TYPES,
    ApprovalPriority,
    ApprovalRequest,
    ApprovalRequestType,
    ApprovalStatus,
)

from .duplicate_detection import check_duplicate
from .exceptions import (
    ApprovalNotFoundError,
    ApprovalStateError,
    DuplicateRequestError,
    InvalidApprovalRequestError,
)

logger = logging.getLogger(__name__)

# Dotted paths keep approvals free of imports from the apps it serves
APPROVAL_ACTIONS = {
    ApprovalRequestType.STORE_REPORT_EDIT: 'apps.store.services.apply_report_edit',
    ApprovalRequestType.STORE_REPORT_DELETION: 'apps.store.services.apply_report_deletion',
}


def submit_request(
    *,
    requested_by: User,
    request_type: str,
    title: str,
    description: str = '',
    amount: Optional[Decimal] = None,
    department: str = '',
    priority: str = ApprovalPriority.NORMAL,
    details: Optional[dict] = None,
    force: bool = False,
) -> ApprovalRequest:
    """
    Create a pending approval request.

    Money requests need a positive amount and are checked against the
    requester's recent ones; ``force=True`` skips the check.

    Raises:
        InvalidApprovalRequestError: If the type, title or amount is invalid
        DuplicateRequestError: If a recent request looks the same
    """
    if request_type not in ApprovalRequestType.values:
        raise InvalidApprovalRequestError(f"Unknown request type {request_type}")
    title = (title or '').strip()
    if not title:
        raise InvalidApprovalRequestError("Title is required")

    if request_type in MONEY_REQUEST_TYPES:
        if amount is None or amount <= 0:
            raise InvalidApprovalRequestError("Amount must be greater than zero")
        if not force:
            verdict = check_duplicate(
                requested_by=requested_by,
                request_type=request_type,
                title=title,
                description=description,
                amount=amount,
            )
            if verdict['is_duplicate']:
                raise DuplicateRequestError(verdict['reason'], verdict=verdict)

    if not department:
        employee = getattr(requested_by, 'employee', None)
        department = employee.department if employee else ''

    approval = ApprovalRequest.objects.create(
        request_type=request_type,
        title=title,
        description=description,
        amount=amount,
        department=department,
        priority=priority,
        details=details or {},
        requested_by=requested_by,
    )
    logger.info("Approval request %s (%s) submitted by %s", approval.id, request_type, requested_by.email)
    return approval


def _lock_pending(request_id: UUID) -> ApprovalRequest:
    try:
        approval = ApprovalRequest.objects.select_for_update().get(id=request_id)
    except ApprovalRequest.DoesNotExist:
        raise ApprovalNotFoundError(f"Approval request {request_id} not found")
    if approval.status != ApprovalStatus.PENDING:
        raise ApprovalStateError(f"Request is already {approval.status}")
    return approval


@transaction.atomic
def approve_request(*, request_id: UUID, reviewer: User) -> ApprovalRequest:
    """
    Approve a pending request and run its action.

    Raises:
        ApprovalNotFoundError, ApprovalStateError
        ApprovalActionError: If the action fails; nothing is saved
    """
    approval = _lock_pending(request_id)
    approval.status = ApprovalStatus.APPROVED
    approval.reviewed_by = reviewer
    approval.reviewed_at = timezone.now()
    approval.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'updated_at'])

    action_path = APPROVAL_ACTIONS.get(approval.request_type)
    if action_path:
        import_string(action_path)(approval.details)

    logger.info("Approval request %s approved by %s", approval.id, reviewer.email)
    return approval


@transaction.atomic
def reject_request(*, request_id: UUID, reviewer: User, reason: str) -> ApprovalRequest:
    """
    Raises:
        InvalidApprovalRequestError: If no reason is given
        ApprovalNotFoundError, ApprovalStateError
    """
    reason = (reason or '').strip()
    if not reason:
        raise InvalidApprovalRequestError("A rejection reason is required")

    approval = _lock_pending(request_id)
    approval.status = ApprovalStatus.REJECTED
    approval.reviewed_by = reviewer
    approval.reviewed_at = timezone.now()
    approval.rejection_reason = reason
    approval.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'rejection_reason', 'updated_at'])

    logger.info("Approval request %s rejected by %s", approval.id, reviewer.email)
    return approval
