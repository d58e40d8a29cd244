"""
Withdrawal request lifecycle.

pending -> approved -> processing -> completed | failed

A pending request can be rejected and an approved one can fail.
The wallet is debited when the payout gateway accepts the transfer and
refunded if a processing request later fails.
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.finance.models import WithdrawalChannel, WithdrawalRequest, WithdrawalStatus

from . import payout_gateway
from .exceptions import (
    InvalidWithdrawalError,
    InvalidWithdrawalTransitionError,
    SelfReviewError,
    WithdrawalNotFoundError,
)
from .wallets import get_wallet, lock_account

logger = logging.getLogger(__name__)

INSUFFICIENT_BALANCE = 'Insufficient balance'

ALLOWED_TRANSITIONS = {
    WithdrawalStatus.PENDING: {WithdrawalStatus.APPROVED, WithdrawalStatus.REJECTED},
    WithdrawalStatus.APPROVED: {WithdrawalStatus.PROCESSING, WithdrawalStatus.FAILED},
    WithdrawalStatus.PROCESSING: {WithdrawalStatus.COMPLETED, WithdrawalStatus.FAILED},
    WithdrawalStatus.REJECTED: set(),
    WithdrawalStatus.COMPLETED: set(),
    WithdrawalStatus.FAILED: set(),
}

REF_RETRIES = 3


def next_request_ref(day=None) -> str:
    """``WR-<YYYYMMDD>-<NNNN>``, numbered per day."""
    day = day or timezone.localdate()
    prefix = f"WR-{day:%Y%m%d}-"
    last = (
        WithdrawalRequest.objects
        .filter(request_ref__startswith=prefix)
        .order_by('-request_ref')
        .values_list('request_ref', flat=True)
        .first()
    )
    number = int(last.rsplit('-', 1)[1]) + 1 if last else 1
    return f"{prefix}{number:04d}"


def _lock_request(request_id: UUID) -> WithdrawalRequest:
    try:
        return WithdrawalRequest.objects.select_for_update().get(id=request_id)
    except WithdrawalRequest.DoesNotExist:
        raise WithdrawalNotFoundError(f"Withdrawal request {request_id} not found")


def _transition(withdrawal: WithdrawalRequest, new_status: str, **fields) -> WithdrawalRequest:
    if new_status not in ALLOWED_TRANSITIONS[withdrawal.status]:
        raise InvalidWithdrawalTransitionError(
            f"Withdrawal {withdrawal.request_ref} cannot move from {withdrawal.status} to {new_status}"
        )
    withdrawal.status = new_status
    for name, value in fields.items():
        setattr(withdrawal, name, value)
    withdrawal.save(update_fields=['status', 'updated_at', *fields.keys()])
    logger.info("Withdrawal %s is now %s", withdrawal.request_ref, new_status)
    return withdrawal


def create_withdrawal_request(
    *,
    user: User,
    amount: Decimal,
    phone_number: str,
    channel: str = WithdrawalChannel.MOBILE_MONEY,
) -> WithdrawalRequest:
    """
    Raises:
        InvalidWithdrawalError: If the amount is below the minimum or above
            the available balance
    """
    minimum = Decimal(settings.WITHDRAWAL_MINIMUM_AMOUNT)
    if amount is None or amount < minimum:
        raise InvalidWithdrawalError(f"Minimum withdrawal amount is UGX {minimum:,.0f}")

    for attempt in range(REF_RETRIES):
        try:
            with transaction.atomic():
                # Serialize requests per wallet so two cannot spend the same money
                lock_account(user)
                available = get_wallet(user=user)['available_balance']
                if amount > available:
                    raise InvalidWithdrawalError(
                        f"Amount exceeds available balance of UGX {available:,.2f}"
                    )
                withdrawal = WithdrawalRequest.objects.create(
                    request_ref=next_request_ref(),
                    user=user,
                    amount=amount,
                    phone_number=phone_number,
                    channel=channel,
                )
            break
        except IntegrityError:
            if attempt == REF_RETRIES - 1:
                raise

    logger.info("Withdrawal %s requested by %s for %s", withdrawal.request_ref, user.email, amount)
    return withdrawal


def _check_reviewer(withdrawal: WithdrawalRequest, reviewer: User) -> None:
    if withdrawal.user_id == reviewer.pk:
        raise SelfReviewError("You cannot review your own withdrawal request")


@transaction.atomic
def approve_withdrawal(*, request_id: UUID, approved_by: User) -> WithdrawalRequest:
    withdrawal = _lock_request(request_id)
    _check_reviewer(withdrawal, approved_by)
    return _transition(
        withdrawal,
        WithdrawalStatus.APPROVED,
        approved_by=approved_by,
        approved_at=timezone.now(),
    )


@transaction.atomic
def reject_withdrawal(*, request_id: UUID, rejected_by: User, reason: str = '') -> WithdrawalRequest:
    withdrawal = _lock_request(request_id)
    _check_reviewer(withdrawal, rejected_by)
    return _transition(
        withdrawal,
        WithdrawalStatus.REJECTED,
        approved_by=rejected_by,
        failure_reason=reason,
    )


@transaction.atomic
def process_withdrawal(*, request_id: UUID) -> WithdrawalRequest:
    """
    Pay out an approved request through the payout gateway.

    The request and the wallet stay locked until the outcome is stored.
    A short balance or a refused transfer leaves the request ``failed``
    with the reason; the caller inspects the returned status.

    Raises:
        WithdrawalNotFoundError
        InvalidWithdrawalTransitionError: If the request is not approved
    """
    withdrawal = _lock_request(request_id)
    if withdrawal.status != WithdrawalStatus.APPROVED:
        raise InvalidWithdrawalTransitionError(
            f"Only approved withdrawals can be processed; {withdrawal.request_ref} is {withdrawal.status}"
        )

    account = lock_account(withdrawal.user)
    now = timezone.now()

    if account.current_balance < withdrawal.amount:
        logger.warning(
            "Withdrawal %s failed: balance %s < %s",
            withdrawal.request_ref, account.current_balance, withdrawal.amount,
        )
        return _transition(withdrawal, WithdrawalStatus.FAILED, failure_reason=INSUFFICIENT_BALANCE, processed_at=now)

    result = payout_gateway.initiate_transfer(
        msisdn=withdrawal.phone_number,
        amount=withdrawal.amount,
        external_reference=withdrawal.external_reference,
        narration=f"Payout - {withdrawal.amount}",
    )
    if not result['accepted']:
        return _transition(withdrawal, WithdrawalStatus.FAILED, failure_reason=result['message'], processed_at=now)

    _transition(
        withdrawal,
        WithdrawalStatus.PROCESSING,
        transaction_reference=result['transaction_reference'],
        processed_at=now,
    )
    account.current_balance -= withdrawal.amount
    account.total_withdrawn += withdrawal.amount
    account.save(update_fields=['current_balance', 'total_withdrawn', 'updated_at'])
    return withdrawal


@transaction.atomic
def complete_withdrawal(*, request_id: UUID) -> WithdrawalRequest:
    withdrawal = _lock_request(request_id)
    return _transition(withdrawal, WithdrawalStatus.COMPLETED, completed_at=timezone.now())


@transaction.atomic
def fail_withdrawal(*, request_id: UUID, reason: str) -> WithdrawalRequest:
    """Fail an approved or processing request. Processing requests are refunded."""
    withdrawal = _lock_request(request_id)
    was_processing = withdrawal.status == WithdrawalStatus.PROCESSING
    _transition(withdrawal, WithdrawalStatus.FAILED, failure_reason=reason)

    if was_processing:
        account = lock_account(withdrawal.user)
        account.current_balance += withdrawal.amount
        account.total_withdrawn -= withdrawal.amount
        account.save(update_fields=['current_balance', 'total_withdrawn', 'updated_at'])
        logger.info("Refunded %s to wallet for %s", withdrawal.amount, withdrawal.request_ref)
    return withdrawal
