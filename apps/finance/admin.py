# ==========================================
# apps/finance/admin.py
# ==========================================

from django.contrib import admin

from .models import CashTransaction, PaymentRecord, UserAccount, WalletCredit, WithdrawalRequest


@admin.register(PaymentRecord)
class PaymentRecordAdmin(admin.ModelAdmin):
    list_display = ['batch_number', 'supplier', 'amount', 'amount_paid', 'status', 'date', 'paid_at']
    list_filter = ['status', 'date']
    search_fields = ['batch_number', 'supplier__name']
    raw_id_fields = ['coffee_record', 'supplier']


@admin.register(CashTransaction)
class CashTransactionAdmin(admin.ModelAdmin):
    list_display = ['transaction_type', 'amount', 'status', 'reference', 'created_at', 'confirmed_at']
    list_filter = ['transaction_type', 'status']
    search_fields = ['reference', 'notes']


@admin.register(UserAccount)
class UserAccountAdmin(admin.ModelAdmin):
    list_display = ['user', 'current_balance', 'total_earned', 'total_withdrawn', 'updated_at']
    search_fields = ['user__email']
    # Balances change through the wallet services only
    readonly_fields = ['current_balance', 'total_earned', 'total_withdrawn']


@admin.register(WalletCredit)
class WalletCreditAdmin(admin.ModelAdmin):
    list_display = ['reference', 'user', 'credit_type', 'amount', 'credit_date']
    list_filter = ['credit_type', 'credit_date']
    search_fields = ['reference', 'user__email']


@admin.register(WithdrawalRequest)
class WithdrawalRequestAdmin(admin.ModelAdmin):
    list_display = ['request_ref', 'user', 'amount', 'channel', 'status', 'created_at', 'processed_at']
    list_filter = ['status', 'channel']
    search_fields = ['request_ref', 'user__email', 'phone_number', 'transaction_reference']
    readonly_fields = ['request_ref', 'transaction_reference', 'processed_at', 'completed_at']
