"""Supplier advances."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.procurement.models import Supplier, SupplierAdvance

from .exceptions import (
    AdvanceAlreadyClearedError,
    AdvanceNotFoundError,
    InvalidDeliveryError,
    SupplierNotFoundError,
)

logger = logging.getLogger(__name__)


def issue_advance(
    *,
    supplier_id: UUID,
    amount: Decimal,
    issued_by: User = None,
    issued_at: Optional[date] = None,
    notes: str = '',
) -> SupplierAdvance:
    if amount is None or amount <= 0:
        raise InvalidDeliveryError("Advance amount must be greater than zero")
    try:
        supplier = Supplier.objects.get(id=supplier_id, is_active=True)
    except Supplier.DoesNotExist:
        raise SupplierNotFoundError(f"Supplier {supplier_id} not found")

    advance = SupplierAdvance.objects.create(
        supplier=supplier,
        amount=amount,
        issued_by=issued_by,
        issued_at=issued_at or timezone.localdate(),
        notes=notes,
    )
    logger.info("Issued advance of %s to %s", amount, supplier.code)
    return advance


@transaction.atomic
def clear_advance(*, advance_id: UUID) -> SupplierAdvance:
    """
    Mark an advance as recovered. An advance clears once.

    Raises:
        AdvanceNotFoundError, AdvanceAlreadyClearedError
    """
    try:
        advance = SupplierAdvance.objects.select_for_update().get(id=advance_id)
    except SupplierAdvance.DoesNotExist:
        raise AdvanceNotFoundError(f"Advance {advance_id} not found")

    if advance.is_cleared:
        raise AdvanceAlreadyClearedError("Advance is already cleared")

    advance.is_cleared = True
    advance.cleared_at = timezone.now()
    advance.save(update_fields=['is_cleared', 'cleared_at'])
    return advance
