# ==========================================
# apps/finance/models.py
# ==========================================

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
import uuid


# =============================================================================
# Supplier payments
# =============================================================================

class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PARTIAL = 'partial', 'Partially paid'
    PAID = 'paid', 'Paid'


class PaymentRecord(models.Model):
    """What the company owes a supplier for one approved batch."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    coffee_record = models.OneToOneField(
        'procurement.CoffeeRecord',
        on_delete=models.PROTECT,
        related_name='payment_record',
    )
    supplier = models.ForeignKey('procurement.Supplier', on_delete=models.PROTECT, related_name='payment_records')
    batch_number = models.CharField(max_length=20)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    date = models.DateField(default=timezone.localdate)
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_records'
        indexes = [
            models.Index(fields=['status', 'date'], name='payments_status_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.batch_number}: {self.amount_paid}/{self.amount} ({self.status})"

    @property
    def balance(self):
        return self.amount - self.amount_paid


# =============================================================================
# Cash book
# =============================================================================

class CashTransactionType(models.TextChoices):
    DEPOSIT = 'DEPOSIT', 'Deposit'
    ADVANCE_RECOVERY = 'ADVANCE_RECOVERY', 'Advance recovery'
    PAYMENT = 'PAYMENT', 'Payment'
    EXPENSE = 'EXPENSE', 'Expense'


CASH_IN_TYPES = (CashTransactionType.DEPOSIT, CashTransactionType.ADVANCE_RECOVERY)
CASH_OUT_TYPES = (CashTransactionType.PAYMENT, CashTransactionType.EXPENSE)


class CashTransactionStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'


class CashTransaction(models.Model):
    """
    Cash book entry.

    Amounts are stored positive; the transaction type decides the direction.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transaction_type = models.CharField(max_length=20, choices=CashTransactionType.choices)
    amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    status = models.CharField(max_length=10, choices=CashTransactionStatus.choices, default=CashTransactionStatus.PENDING)
    reference = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='cash_transactions')
    confirmed_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='confirmed_cash_transactions')
    confirmed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'finance_cash_transactions'
        indexes = [
            models.Index(fields=['status', 'confirmed_at'], name='cash_tx_status_confirmed_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.transaction_type} {self.amount} ({self.status})"


# =============================================================================
# Wallets and withdrawals
# =============================================================================

class UserAccount(models.Model):
    """Employee wallet holding earned, unwithdrawn money."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='wallet')
    current_balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total_earned = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total_withdrawn = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    salary_approved = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_accounts'

    def __str__(self):
        return f"Wallet of {self.user}: {self.current_balance}"


class CreditType(models.TextChoices):
    DAILY_SALARY = 'daily_salary', 'Daily salary'
    MANUAL = 'manual', 'Manual credit'


class WalletCredit(models.Model):
    """One credit posted to a wallet. The reference makes reposting a no-op."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='wallet_credits')
    credit_type = models.CharField(max_length=20, choices=CreditType.choices, default=CreditType.MANUAL)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    reference = models.CharField(max_length=100, unique=True)
    reason = models.CharField(max_length=255, blank=True)
    credit_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'wallet_credits'
        indexes = [
            models.Index(fields=['user', 'credit_date'], name='wallet_credits_user_date_idx'),
        ]
        ordering = ['-credit_date', '-created_at']

    def __str__(self):
        return f"{self.reference}: {self.amount}"


class WithdrawalStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'
    PROCESSING = 'processing', 'Processing'
    COMPLETED = 'completed', 'Completed'
    FAILED = 'failed', 'Failed'


# Requests still holding money that the wallet cannot spend twice
OPEN_WITHDRAWAL_STATUSES = (
    WithdrawalStatus.PENDING,
    WithdrawalStatus.APPROVED,
    WithdrawalStatus.PROCESSING,
)


class WithdrawalChannel(models.TextChoices):
    MOBILE_MONEY = 'mobile_money', 'Mobile money'
    CASH = 'cash', 'Cash'


class WithdrawalRequest(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    request_ref = models.CharField(max_length=20, unique=True, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='withdrawal_requests')
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    phone_number = models.CharField(max_length=20)
    channel = models.CharField(max_length=20, choices=WithdrawalChannel.choices, default=WithdrawalChannel.MOBILE_MONEY)
    status = models.CharField(max_length=20, choices=WithdrawalStatus.choices, default=WithdrawalStatus.PENDING)
    approved_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='approved_withdrawals')
    approved_at = models.DateTimeField(null=True, blank=True)
    transaction_reference = models.CharField(max_length=100, blank=True)
    processed_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    failure_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'withdrawal_requests'
        indexes = [
            models.Index(fields=['user', 'status'], name='withdrawals_user_status_idx'),
            models.Index(fields=['status', 'created_at'], name='withdrawals_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.request_ref}: {self.amount} ({self.status})"

    @property
    def external_reference(self):
        return f"WD-{self.id}"
