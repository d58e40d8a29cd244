"""Services for finance business logic."""

from .exceptions import (
    FinanceServiceError,
    PaymentNotFoundError,
    InvalidPaymentError,
    CashTransactionNotFoundError,
    CashTransactionStateError,
    WithdrawalNotFoundError,
    InvalidWithdrawalError,
    InvalidWithdrawalTransitionError,
    SelfReviewError,
)
from .payments import (
    open_payment_record,
    process_supplier_payment,
    record_cash_transaction,
    confirm_cash_transaction,
)
from .wallets import get_wallet, credit_account, credit_daily_salaries, daily_salary, working_day_salary
from .withdrawals import (
    INSUFFICIENT_BALANCE,
    create_withdrawal_request,
    approve_withdrawal,
    reject_withdrawal,
    process_withdrawal,
    complete_withdrawal,
    fail_withdrawal,
)

__all__ = [
    # Exceptions
    'FinanceServiceError',
    'PaymentNotFoundError',
    'InvalidPaymentError',
    'CashTransactionNotFoundError',
    'CashTransactionStateError',
    'WithdrawalNotFoundError',
    'InvalidWithdrawalError',
    'InvalidWithdrawalTransitionError',
    'SelfReviewError',
    # Payments
    'open_payment_record',
    'process_supplier_payment',
    'record_cash_transaction',
    'confirm_cash_transaction',
    # Wallets
    'get_wallet',
    'credit_account',
    'credit_daily_salaries',
    'daily_salary',
    'working_day_salary',
    # Withdrawals
    'INSUFFICIENT_BALANCE',
    'create_withdrawal_request',
    'approve_withdrawal',
    'reject_withdrawal',
    'process_withdrawal',
    'complete_withdrawal',
    'fail_withdrawal',
]
