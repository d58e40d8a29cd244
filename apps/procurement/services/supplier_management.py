"""Supplier registration with fuzzy duplicate detection."""

import logging
from decimal import Decimal
from typing import List, Tuple

from django.db import transaction
from fuzzywuzzy import fuzz

from apps.accounts.models import User
from apps.procurement.models import Supplier

from .exceptions import DuplicateSupplierError

logger = logging.getLogger(__name__)

# Thresholds for fuzzy matching
HIGH_SIMILARITY_THRESHOLD = 90
MEDIUM_SIMILARITY_THRESHOLD = 85


def find_similar_suppliers(
    *,
    name: str,
    origin: str = '',
    threshold: int = MEDIUM_SIMILARITY_THRESHOLD
) -> List[Tuple[Supplier, int]]:
    """
    Find active suppliers whose names are close to ``name``.

    Suppliers from the same origin are compared with ``fuzz.ratio``;
    an exact normalized name match anywhere scores 100.

    Returns:
        List of (supplier, similarity_score), best first
    """
    name_norm = Supplier._normalize_string(name)
    candidates = {}

    for supplier in Supplier.objects.filter(name_normalized=name_norm, is_active=True):
        candidates[supplier.id] = (supplier, 100)

    same_origin = Supplier.objects.filter(is_active=True).exclude(name_normalized=name_norm)
    if origin:
        same_origin = same_origin.filter(origin__iexact=origin.strip())

    for supplier in same_origin:
        score = fuzz.ratio(name_norm, supplier.name_normalized)
        if score >= threshold:
            candidates[supplier.id] = (supplier, score)

    return sorted(candidates.values(), key=lambda pair: pair[1], reverse=True)


@transaction.atomic
def create_supplier(
    *,
    name: str,
    created_by: User = None,
    phone: str = '',
    origin: str = '',
    opening_balance: Decimal = Decimal('0.00'),
    allow_duplicate: bool = False,
) -> Supplier:
    """
    Register a supplier and assign the next ``SUP-`` code.

    Raises:
        DuplicateSupplierError: If a similar active supplier exists and
            ``allow_duplicate`` is False
    """
    if not allow_duplicate:
        matches = find_similar_suppliers(name=name, origin=origin)
        if matches:
            best, score = matches[0]
            raise DuplicateSupplierError(
                f"Supplier looks like existing {best.name} ({best.code}), similarity {score}%",
                matches=matches,
            )

    supplier = Supplier.objects.create(
        name=name.strip(),
        phone=phone,
        origin=origin.strip(),
        opening_balance=opening_balance,
        created_by=created_by,
    )
    logger.info("Registered supplier %s %s", supplier.code, supplier.name)
    return supplier
