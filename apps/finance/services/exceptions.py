"""Domain-specific exceptions for finance services."""


class FinanceServiceError(Exception):
    """Base exception for finance services."""
    pass


class PaymentNotFoundError(FinanceServiceError):
    pass


class InvalidPaymentError(FinanceServiceError):
    """Raised when a payment amount is invalid or exceeds the balance."""
    pass


class CashTransactionNotFoundError(FinanceServiceError):
    pass


class CashTransactionStateError(FinanceServiceError):
    """Raised when confirming an already confirmed transaction."""
    pass


class WithdrawalNotFoundError(FinanceServiceError):
    pass


class InvalidWithdrawalError(FinanceServiceError):
    """Raised when a withdrawal request breaks an amount rule."""
    pass


class InvalidWithdrawalTransitionError(FinanceServiceError):
    """Raised when a withdrawal cannot move to the requested status."""
    pass


class SelfReviewError(FinanceServiceError):
    """Raised when a user tries to approve or reject their own withdrawal."""
    pass
