"""Services for approval requests."""

from .exceptions import (
    ApprovalsServiceError,
    ApprovalNotFoundError,
    InvalidApprovalRequestError,
    DuplicateRequestError,
    ApprovalStateError,
    ApprovalActionError,
)
from .duplicate_detection import check_duplicate, amounts_close
from .approval_requests import submit_request, approve_request, reject_request

__all__ = [
    # Exceptions
    'ApprovalsServiceError',
    'ApprovalNotFoundError',
    'InvalidApprovalRequestError',
    'DuplicateRequestError',
    'ApprovalStateError',
    'ApprovalActionError',
    # Services
    'check_duplicate',
    'amounts_close',
    'submit_request',
    'approve_request',
    'reject_request',
]
