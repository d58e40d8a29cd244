"""
Service layer unit tests for finance app.

Tests cover:
- Supplier payments and the cash book
- Wallet summaries and credits
- Withdrawal lifecycle, including the payout gateway outcome
"""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from apps.finance.models import CashTransaction, UserAccount, WalletCredit
from apps.finance.services import (
    CashTransactionStateError,
    InvalidPaymentError,
    InvalidWithdrawalError,
    InvalidWithdrawalTransitionError,
    SelfReviewError,
    approve_withdrawal,
    complete_withdrawal,
    confirm_cash_transaction,
    create_withdrawal_request,
    credit_account,
    credit_daily_salaries,
    daily_salary,
    fail_withdrawal,
    get_wallet,
    process_supplier_payment,
    process_withdrawal,
    record_cash_transaction,
    reject_withdrawal,
    working_day_salary,
)

ACCEPTED = {
    'accepted': True,
    'transaction_reference': 'ZP-778899',
    'message': 'Transfer accepted',
    'response': {'code': 202},
}


# =============================================================================
# Supplier payments
# =============================================================================

@pytest.mark.django_db
class TestProcessSupplierPayment:

    def test_partial_then_full(self, payment, finance_assistant):
        partial = process_supplier_payment(
            payment_id=payment.id, amount=Decimal('200000'), processed_by=finance_assistant.user
        )
        assert partial.status == 'partial'
        assert partial.balance == Decimal('500000.00')

        paid = process_supplier_payment(payment_id=payment.id, amount=Decimal('500000'))
        assert paid.status == 'paid'
        assert paid.paid_at is not None

    def test_writes_confirmed_cash_payment(self, payment):
        process_supplier_payment(payment_id=payment.id, amount=Decimal('100000'))

        cash = CashTransaction.objects.get()
        assert cash.transaction_type == 'PAYMENT'
        assert cash.status == 'confirmed'
        assert cash.reference == payment.batch_number

    def test_overpayment_rejected(self, payment):
        with pytest.raises(InvalidPaymentError):
            process_supplier_payment(payment_id=payment.id, amount=Decimal('700000.01'))

        assert not CashTransaction.objects.exists()

    def test_zero_rejected(self, payment):
        with pytest.raises(InvalidPaymentError):
            process_supplier_payment(payment_id=payment.id, amount=Decimal('0'))


@pytest.mark.django_db
class TestCashBook:

    def test_confirm_once(self, finance_manager):
        cash = record_cash_transaction(transaction_type='DEPOSIT', amount=Decimal('50000'))
        assert cash.status == 'pending'

        confirmed = confirm_cash_transaction(transaction_id=cash.id, confirmed_by=finance_manager.user)
        assert confirmed.confirmed_at is not None

        with pytest.raises(CashTransactionStateError):
            confirm_cash_transaction(transaction_id=cash.id)

    def test_unknown_type_rejected(self, db):
        with pytest.raises(InvalidPaymentError):
            record_cash_transaction(transaction_type='GIFT', amount=Decimal('10'))


# =============================================================================
# Wallets
# =============================================================================

@pytest.mark.django_db
class TestWallet:

    def test_daily_salary_uses_days_in_month(self):
        assert daily_salary(Decimal('620000'), today=date(2024, 3, 15)) == Decimal('20000.00')
        assert daily_salary(Decimal('580000'), today=date(2024, 2, 1)) == Decimal('20000.00')

    def test_open_requests_reduce_available(self, earner, make_withdrawal):
        make_withdrawal(amount=Decimal('30000'), status='pending')
        make_withdrawal(amount=Decimal('20000'), status='approved')
        make_withdrawal(amount=Decimal('5000'), status='rejected')

        wallet = get_wallet(user=earner.user)

        assert wallet['pending_withdrawals'] == Decimal('50000.00')
        assert wallet['available_balance'] == Decimal('50000.00')

    def test_wallet_created_lazily(self, make_employee):
        employee = make_employee()

        wallet = get_wallet(user=employee.user)

        assert wallet['current_balance'] == Decimal('0.00')
        assert UserAccount.objects.filter(user=employee.user).exists()

    def test_credit(self, earner):
        account = credit_account(user=earner.user, amount=Decimal('2500'), reason='Overtime')

        assert account.current_balance == Decimal('102500.00')
        assert account.total_earned == Decimal('102500.00')
        credit = WalletCredit.objects.get(user=earner.user)
        assert credit.credit_type == 'manual'
        assert credit.reason == 'Overtime'

    def test_credit_reference_used_once(self, earner):
        credit_account(user=earner.user, amount=Decimal('2500'), reference='BONUS-2024-03')

        with pytest.raises(InvalidPaymentError):
            credit_account(user=earner.user, amount=Decimal('2500'), reference='BONUS-2024-03')

        assert UserAccount.objects.get(user=earner.user).current_balance == Decimal('102500.00')


@pytest.mark.django_db
class TestDailySalaryCredits:
    # 2024-03-18 is a Monday, 2024-03-17 a Sunday
    MONDAY = date(2024, 3, 18)
    SUNDAY = date(2024, 3, 17)

    def test_working_day_salary_uses_26_days(self):
        assert working_day_salary(Decimal('620000')) == Decimal('23846.15')
        assert working_day_salary(Decimal('520000')) == Decimal('20000.00')

    def test_credits_active_salaried_employees(self, earner):
        summary = credit_daily_salaries(self.MONDAY)

        assert summary['credited'] == 1
        assert summary['total'] == Decimal('23846.15')
        account = UserAccount.objects.get(user=earner.user)
        assert account.current_balance == Decimal('123846.15')
        assert account.total_earned == Decimal('123846.15')
        credit = WalletCredit.objects.get(user=earner.user)
        assert credit.credit_type == 'daily_salary'
        assert credit.credit_date == self.MONDAY
        assert credit.reference == f'DAILY-2024-03-18-{earner.employee_id}'

    def test_same_day_credited_once(self, earner):
        credit_daily_salaries(self.MONDAY)

        second = credit_daily_salaries(self.MONDAY)

        assert second['credited'] == 0
        assert second['skipped'] == 1
        assert UserAccount.objects.get(user=earner.user).current_balance == Decimal('123846.15')
        assert WalletCredit.objects.filter(user=earner.user).count() == 1

    def test_next_day_credited_again(self, earner):
        credit_daily_salaries(self.MONDAY)
        credit_daily_salaries(date(2024, 3, 19))

        assert WalletCredit.objects.filter(user=earner.user).count() == 2

    def test_sunday_is_not_paid(self, earner):
        summary = credit_daily_salaries(self.SUNDAY)

        assert summary['credited'] == 0
        assert not WalletCredit.objects.exists()
        assert UserAccount.objects.get(user=earner.user).current_balance == Decimal('100000.00')

    def test_skips_inactive_unpaid_and_loginless(self, earner, make_employee):
        inactive = make_employee()
        inactive.status = 'inactive'
        inactive.save()
        unpaid = make_employee(salary=Decimal('0.00'))
        make_employee(with_user=False)

        summary = credit_daily_salaries(self.MONDAY)

        assert summary['credited'] == 1
        assert not WalletCredit.objects.filter(user__in=[inactive.user, unpaid.user]).exists()


# =============================================================================
# Withdrawals
# =============================================================================

@pytest.mark.django_db
class TestCreateWithdrawalRequest:

    def test_creates_pending_with_reference(self, earner):
        withdrawal = create_withdrawal_request(
            user=earner.user, amount=Decimal('40000'), phone_number='0772123456'
        )

        assert withdrawal.status == 'pending'
        assert withdrawal.request_ref.startswith('WR-')
        assert withdrawal.request_ref.endswith('-0001')

    def test_below_minimum_rejected(self, earner):
        with pytest.raises(InvalidWithdrawalError):
            create_withdrawal_request(user=earner.user, amount=Decimal('1999'), phone_number='0772123456')

    def test_minimum_follows_settings(self, earner, settings):
        settings.WITHDRAWAL_MINIMUM_AMOUNT = 5000

        with pytest.raises(InvalidWithdrawalError):
            create_withdrawal_request(user=earner.user, amount=Decimal('4000'), phone_number='0772123456')

    def test_cannot_spend_reserved_money_twice(self, earner):
        create_withdrawal_request(user=earner.user, amount=Decimal('80000'), phone_number='0772123456')

        with pytest.raises(InvalidWithdrawalError):
            create_withdrawal_request(user=earner.user, amount=Decimal('30000'), phone_number='0772123456')


@pytest.mark.django_db
class TestWithdrawalLifecycle:

    def test_approve_and_reject_only_pending(self, make_withdrawal, finance_manager):
        first = make_withdrawal()
        second = make_withdrawal()

        assert approve_withdrawal(request_id=first.id, approved_by=finance_manager.user).status == 'approved'
        assert reject_withdrawal(request_id=second.id, rejected_by=finance_manager.user).status == 'rejected'

        with pytest.raises(InvalidWithdrawalTransitionError):
            reject_withdrawal(request_id=first.id, rejected_by=finance_manager.user)

    def test_reviewer_cannot_review_own_request(self, make_withdrawal, finance_manager):
        own = make_withdrawal(user=finance_manager.user)

        with pytest.raises(SelfReviewError):
            approve_withdrawal(request_id=own.id, approved_by=finance_manager.user)
        with pytest.raises(SelfReviewError):
            reject_withdrawal(request_id=own.id, rejected_by=finance_manager.user)

        own.refresh_from_db()
        assert own.status == 'pending'
        assert own.approved_by is None

    def test_pending_cannot_be_processed(self, make_withdrawal):
        withdrawal = make_withdrawal(status='pending')

        with pytest.raises(InvalidWithdrawalTransitionError):
            process_withdrawal(request_id=withdrawal.id)

    @patch('apps.finance.services.payout_gateway.initiate_transfer', return_value=ACCEPTED)
    def test_accepted_transfer_debits_wallet(self, mock_transfer, earner, make_withdrawal):
        withdrawal = make_withdrawal(amount=Decimal('30000'), status='approved')

        processed = process_withdrawal(request_id=withdrawal.id)

        assert processed.status == 'processing'
        assert processed.transaction_reference == 'ZP-778899'
        kwargs = mock_transfer.call_args.kwargs
        assert kwargs['external_reference'] == f'WD-{withdrawal.id}'
        assert kwargs['msisdn'] == '0772123456'
        account = UserAccount.objects.get(user=earner.user)
        assert account.current_balance == Decimal('70000.00')
        assert account.total_withdrawn == Decimal('30000.00')

    @patch('apps.finance.services.payout_gateway.initiate_transfer')
    def test_insufficient_balance_fails_without_gateway(self, mock_transfer, earner, make_withdrawal):
        withdrawal = make_withdrawal(amount=Decimal('150000'), status='approved')

        processed = process_withdrawal(request_id=withdrawal.id)

        assert processed.status == 'failed'
        assert processed.failure_reason == 'Insufficient balance'
        mock_transfer.assert_not_called()

    @patch('apps.finance.services.payout_gateway.initiate_transfer', return_value={
        'accepted': False, 'transaction_reference': '', 'message': 'Invalid msisdn', 'response': {},
    })
    def test_refused_transfer_keeps_balance(self, mock_transfer, earner, make_withdrawal):
        withdrawal = make_withdrawal(status='approved')

        processed = process_withdrawal(request_id=withdrawal.id)

        assert processed.status == 'failed'
        assert processed.failure_reason == 'Invalid msisdn'
        assert UserAccount.objects.get(user=earner.user).current_balance == Decimal('100000.00')

    @patch('apps.finance.services.payout_gateway.requests.post')
    def test_non_object_gateway_body_fails_request(self, mock_post, earner, make_withdrawal, settings):
        settings.PAYOUT_API_URL = 'https://payouts.example.com/v1/'
        settings.PAYOUT_API_KEY = 'test-key'
        response = MagicMock()
        response.ok = False
        response.status_code = 400
        response.json.return_value = ['invalid msisdn']
        mock_post.return_value = response
        withdrawal = make_withdrawal(status='approved')

        processed = process_withdrawal(request_id=withdrawal.id)

        assert processed.status == 'failed'
        assert processed.failure_reason == 'HTTP 400'
        assert UserAccount.objects.get(user=earner.user).current_balance == Decimal('100000.00')

    def test_failing_approved_request_leaves_wallet(self, earner, make_withdrawal):
        withdrawal = make_withdrawal(amount=Decimal('30000'), status='approved')

        failed = fail_withdrawal(request_id=withdrawal.id, reason='Phone number unreachable')

        assert failed.status == 'failed'
        assert failed.failure_reason == 'Phone number unreachable'
        account = UserAccount.objects.get(user=earner.user)
        assert account.current_balance == Decimal('100000.00')
        assert account.total_withdrawn == Decimal('0.00')

    @patch('apps.finance.services.payout_gateway.initiate_transfer', return_value=ACCEPTED)
    def test_complete_processing(self, mock_transfer, make_withdrawal):
        withdrawal = make_withdrawal(status='approved')
        process_withdrawal(request_id=withdrawal.id)

        completed = complete_withdrawal(request_id=withdrawal.id)

        assert completed.status == 'completed'
        assert completed.completed_at is not None

    @patch('apps.finance.services.payout_gateway.initiate_transfer', return_value=ACCEPTED)
    def test_failing_processing_refunds(self, mock_transfer, earner, make_withdrawal):
        withdrawal = make_withdrawal(amount=Decimal('30000'), status='approved')
        process_withdrawal(request_id=withdrawal.id)

        fail_withdrawal(request_id=withdrawal.id, reason='Provider reversed transfer')

        account = UserAccount.objects.get(user=earner.user)
        assert account.current_balance == Decimal('100000.00')
        assert account.total_withdrawn == Decimal('0.00')

    def test_completed_is_final(self, make_withdrawal):
        withdrawal = make_withdrawal(status='completed')

        with pytest.raises(InvalidWithdrawalTransitionError):
            fail_withdrawal(request_id=withdrawal.id, reason='late')
