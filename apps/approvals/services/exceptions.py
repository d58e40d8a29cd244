"""Domain-specific exceptions for approval services."""


class ApprovalsServiceError(Exception):
    """Base exception for approval services."""
    pass


class ApprovalNotFoundError(ApprovalsServiceError):
    pass


class InvalidApprovalRequestError(ApprovalsServiceError):
    """Raised when request data breaks a rule."""
    pass


class DuplicateRequestError(ApprovalsServiceError):
    """Raised when a money request looks like one submitted recently."""

    def __init__(self, message, verdict=None):
        super().__init__(message)
        self.verdict = verdict or {}


class ApprovalStateError(ApprovalsServiceError):
    """Raised when deciding a request that is already decided."""
    pass


class ApprovalActionError(ApprovalsServiceError):
    """Raised by an approval action that cannot be carried out."""
    pass
