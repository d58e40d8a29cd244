"""
Coffee delivery records and their status lifecycle.

pending -> assessed -> inventory -> sold
pending -> rejected
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.procurement.models import CoffeeRecord, CoffeeRecordStatus, Supplier

from .exceptions import (
    CoffeeRecordNotFoundError,
    InvalidDeliveryError,
    InvalidStatusTransitionError,
    SupplierNotFoundError,
)

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    CoffeeRecordStatus.PENDING: {CoffeeRecordStatus.ASSESSED, CoffeeRecordStatus.REJECTED},
    CoffeeRecordStatus.ASSESSED: {CoffeeRecordStatus.INVENTORY, CoffeeRecordStatus.REJECTED},
    CoffeeRecordStatus.INVENTORY: {CoffeeRecordStatus.SOLD},
    CoffeeRecordStatus.REJECTED: set(),
    CoffeeRecordStatus.SOLD: set(),
}

BATCH_RETRIES = 3


def next_batch_number(delivery_date: date) -> str:
    """``B<YYYYMMDD>-<NNN>``, numbered per day."""
    prefix = f"B{delivery_date:%Y%m%d}-"
    last = (
        CoffeeRecord.objects
        .filter(batch_number__startswith=prefix)
        .order_by('-batch_number')
        .values_list('batch_number', flat=True)
        .first()
    )
    number = int(last.rsplit('-', 1)[1]) + 1 if last else 1
    return f"{prefix}{number:03d}"


def record_delivery(
    *,
    supplier_id: UUID,
    coffee_type: str,
    kilograms: Decimal,
    bags: int = 0,
    delivery_date: Optional[date] = None,
    received_by: User = None,
) -> CoffeeRecord:
    """
    Record a delivered batch awaiting quality assessment.

    Raises:
        SupplierNotFoundError: If the supplier is missing or inactive
        InvalidDeliveryError: If the weight or bag count is invalid
    """
    if kilograms is None or kilograms <= 0:
        raise InvalidDeliveryError("Kilograms must be greater than zero")
    if bags < 0:
        raise InvalidDeliveryError("Bags cannot be negative")

    try:
        supplier = Supplier.objects.get(id=supplier_id, is_active=True)
    except Supplier.DoesNotExist:
        raise SupplierNotFoundError(f"Supplier {supplier_id} not found")

    delivery_date = delivery_date or timezone.localdate()

    for attempt in range(BATCH_RETRIES):
        try:
            with transaction.atomic():
                record = CoffeeRecord.objects.create(
                    batch_number=next_batch_number(delivery_date),
                    supplier=supplier,
                    supplier_name=supplier.name,
                    coffee_type=coffee_type,
                    kilograms=kilograms,
                    bags=bags,
                    date=delivery_date,
                    received_by=received_by,
                )
            break
        except IntegrityError:
            # Concurrent delivery took the same batch number
            if attempt == BATCH_RETRIES - 1:
                raise
    logger.info("Recorded delivery %s: %s kg from %s", record.batch_number, kilograms, supplier.code)
    return record


def transition_record(record: CoffeeRecord, new_status: str, **fields) -> CoffeeRecord:
    """
    Move a locked coffee record to ``new_status``. Call inside a transaction.

    Raises:
        InvalidStatusTransitionError: If the lifecycle forbids the move
    """
    if new_status not in ALLOWED_TRANSITIONS[record.status]:
        raise InvalidStatusTransitionError(
            f"Batch {record.batch_number} cannot move from {record.status} to {new_status}"
        )
    record.status = new_status
    for name, value in fields.items():
        setattr(record, name, value)
    record.save(update_fields=['status', 'updated_at', *fields.keys()])
    return record


def lock_record(record_id: UUID) -> CoffeeRecord:
    try:
        return CoffeeRecord.objects.select_for_update().get(id=record_id)
    except CoffeeRecord.DoesNotExist:
        raise CoffeeRecordNotFoundError(f"Coffee record {record_id} not found")


@transaction.atomic
def mark_batch_sold(*, record_id: UUID) -> CoffeeRecord:
    """inventory -> sold"""
    record = lock_record(record_id)
    return transition_record(record, CoffeeRecordStatus.SOLD)
