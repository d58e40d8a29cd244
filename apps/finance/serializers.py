from decimal import Decimal

from rest_framework import serializers

from .models import (
    CashTransaction,
    CashTransactionType,
    PaymentRecord,
    WithdrawalChannel,
    WithdrawalRequest,
)


# =============================================================================
# Supplier payments and cash book
# =============================================================================

class PaymentRecordSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source='supplier.name', read_only=True)
    balance = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = PaymentRecord
        fields = [
            'id',
            'coffee_record',
            'supplier',
            'supplier_name',
            'batch_number',
            'amount',
            'amount_paid',
            'balance',
            'status',
            'date',
            'paid_at',
            'created_at',
        ]
        read_only_fields = fields


class PaymentInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))


class CashTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = CashTransaction
        fields = [
            'id',
            'transaction_type',
            'amount',
            'status',
            'reference',
            'notes',
            'created_by',
            'confirmed_by',
            'confirmed_at',
            'created_at',
        ]
        read_only_fields = fields


class CashTransactionCreateSerializer(serializers.Serializer):
    transaction_type = serializers.ChoiceField(choices=CashTransactionType.choices)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    confirmed = serializers.BooleanField(required=False, default=False)


# =============================================================================
# Wallets and withdrawals
# =============================================================================

class WalletSerializer(serializers.Serializer):
    """Wallet summary returned by ``get_wallet``."""

    current_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_earned = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_withdrawn = serializers.DecimalField(max_digits=14, decimal_places=2)
    salary_approved = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_withdrawals = serializers.DecimalField(max_digits=14, decimal_places=2)
    available_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    monthly_salary = serializers.DecimalField(max_digits=14, decimal_places=2)
    daily_salary = serializers.DecimalField(max_digits=14, decimal_places=2)


class CreditWalletSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    reason = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class WithdrawalRequestSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = WithdrawalRequest
        fields = [
            'id',
            'request_ref',
            'user',
            'user_email',
            'amount',
            'phone_number',
            'channel',
            'status',
            'approved_by',
            'approved_at',
            'transaction_reference',
            'processed_at',
            'completed_at',
            'failure_reason',
            'created_at',
        ]
        read_only_fields = fields


class WithdrawalCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    phone_number = serializers.CharField(max_length=20)
    channel = serializers.ChoiceField(choices=WithdrawalChannel.choices, default=WithdrawalChannel.MOBILE_MONEY)


class ReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class FailWithdrawalSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500)
