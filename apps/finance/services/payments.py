"""
Supplier payments and the cash book.

Money changes run inside a transaction with the affected rows locked.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.finance.models import (
    CashTransaction,
    CashTransactionStatus,
    CashTransactionType,
    PaymentRecord,
    PaymentStatus,
)

from .exceptions import (
    CashTransactionNotFoundError,
    CashTransactionStateError,
    InvalidPaymentError,
    PaymentNotFoundError,
)

logger = logging.getLogger(__name__)


def open_payment_record(*, coffee_record) -> PaymentRecord:
    """
    Open the payable for an approved batch: kilograms * price_per_kg.

    Called inside the caller's transaction.
    """
    amount = (coffee_record.kilograms * coffee_record.price_per_kg).quantize(Decimal('0.01'))
    payment = PaymentRecord.objects.create(
        coffee_record=coffee_record,
        supplier=coffee_record.supplier,
        batch_number=coffee_record.batch_number,
        amount=amount,
        date=coffee_record.date,
    )
    logger.info("Opened payment %s for batch %s", amount, coffee_record.batch_number)
    return payment


@transaction.atomic
def process_supplier_payment(
    *,
    payment_id: UUID,
    amount: Decimal,
    processed_by: User = None,
) -> PaymentRecord:
    """
    Pay part or all of a supplier's outstanding balance.

    Writes a confirmed PAYMENT cash transaction for the same amount.

    Raises:
        PaymentNotFoundError: If the payment record does not exist
        InvalidPaymentError: If amount is not positive or exceeds the balance
    """
    try:
        payment = PaymentRecord.objects.select_for_update().get(id=payment_id)
    except PaymentRecord.DoesNotExist:
        raise PaymentNotFoundError(f"Payment record {payment_id} not found")

    if amount is None or amount <= 0:
        raise InvalidPaymentError("Payment amount must be greater than zero")
    if amount > payment.balance:
        raise InvalidPaymentError(
            f"Payment of {amount} exceeds outstanding balance of {payment.balance}"
        )

    now = timezone.now()
    payment.amount_paid += amount
    if payment.amount_paid >= payment.amount:
        payment.status = PaymentStatus.PAID
        payment.paid_at = now
    else:
        payment.status = PaymentStatus.PARTIAL
    payment.save(update_fields=['amount_paid', 'status', 'paid_at', 'updated_at'])

    CashTransaction.objects.create(
        transaction_type=CashTransactionType.PAYMENT,
        amount=amount,
        status=CashTransactionStatus.CONFIRMED,
        reference=payment.batch_number,
        notes=f"Supplier payment to {payment.supplier.name}",
        created_by=processed_by,
        confirmed_by=processed_by,
        confirmed_at=now,
    )

    logger.info("Paid %s on batch %s, status %s", amount, payment.batch_number, payment.status)
    return payment


def record_cash_transaction(
    *,
    transaction_type: str,
    amount: Decimal,
    created_by: User = None,
    reference: str = '',
    notes: str = '',
    confirmed: bool = False,
) -> CashTransaction:
    if amount is None or amount <= 0:
        raise InvalidPaymentError("Amount must be greater than zero")
    if transaction_type not in CashTransactionType.values:
        raise InvalidPaymentError(f"Unknown transaction type {transaction_type}")

    fields = {}
    if confirmed:
        fields = {
            'status': CashTransactionStatus.CONFIRMED,
            'confirmed_by': created_by,
            'confirmed_at': timezone.now(),
        }
    return CashTransaction.objects.create(
        transaction_type=transaction_type,
        amount=amount,
        reference=reference,
        notes=notes,
        created_by=created_by,
        **fields,
    )


@transaction.atomic
def confirm_cash_transaction(*, transaction_id: UUID, confirmed_by: Optional[User] = None) -> CashTransaction:
    """
    Raises:
        CashTransactionNotFoundError, CashTransactionStateError
    """
    try:
        cash = CashTransaction.objects.select_for_update().get(id=transaction_id)
    except CashTransaction.DoesNotExist:
        raise CashTransactionNotFoundError(f"Cash transaction {transaction_id} not found")

    if cash.status == CashTransactionStatus.CONFIRMED:
        raise CashTransactionStateError("Transaction is already confirmed")

    cash.status = CashTransactionStatus.CONFIRMED
    cash.confirmed_by = confirmed_by
    cash.confirmed_at = timezone.now()
    cash.save(update_fields=['status', 'confirmed_by', 'confirmed_at'])
    return cash
