"""
Duplicate detection for money requests.

A new request is compared with the requester's money requests of the last
30 days. It counts as a duplicate when its text is close to an earlier
request and the amounts differ by at most 20%.
"""

import re
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from django.utils import timezone
from fuzzywuzzy import fuzz

from apps.accounts.models import User
from apps.approvals.models import MONEY_REQUEST_TYPES, ApprovalRequest

LOOKBACK_DAYS = 30
MAX_CANDIDATES = 10
TEXT_SIMILARITY_THRESHOLD = 80
AMOUNT_TOLERANCE = Decimal('0.20')


def _normalize_text(title: str, description: str) -> str:
    text = f"{title} {description}".lower().strip()
    text = re.sub(r"[^\w\s]", "", text)
    return re.sub(r"\s+", " ", text)


def amounts_close(first: Optional[Decimal], second: Optional[Decimal]) -> bool:
    """True when both amounts are within 20% of the larger one."""
    if first is None or second is None:
        return first is None and second is None
    largest = max(abs(first), abs(second))
    if largest == 0:
        return True
    return abs(first - second) <= largest * AMOUNT_TOLERANCE


def check_duplicate(
    *,
    requested_by: User,
    request_type: str,
    title: str,
    description: str = '',
    amount: Optional[Decimal] = None,
) -> dict:
    """
    Compare a prospective request with the requester's recent ones.

    Returns:
        Dict with ``is_duplicate``, ``confidence`` (0-100), ``reason`` and
        ``matched_request`` (the matched ApprovalRequest or None)
    """
    verdict = {'is_duplicate': False, 'confidence': 0, 'reason': '', 'matched_request': None}
    if request_type not in MONEY_REQUEST_TYPES:
        return verdict

    since = timezone.now() - timedelta(days=LOOKBACK_DAYS)
    recent = (
        ApprovalRequest.objects
        .filter(requested_by=requested_by, request_type__in=MONEY_REQUEST_TYPES, created_at__gte=since)
        .order_by('-created_at')[:MAX_CANDIDATES]
    )

    text = _normalize_text(title, description)
    scored = [
        (fuzz.ratio(text, _normalize_text(candidate.title, candidate.description)), candidate)
        for candidate in recent
    ]
    if not scored:
        verdict['reason'] = 'No recent requests to compare'
        return verdict

    duplicates = [
        (similarity, candidate) for similarity, candidate in scored
        if similarity >= TEXT_SIMILARITY_THRESHOLD and amounts_close(amount, candidate.amount)
    ]
    if duplicates:
        similarity, candidate = max(duplicates, key=lambda pair: pair[0])
        verdict.update({
            'is_duplicate': True,
            'confidence': similarity,
            'matched_request': candidate,
            'reason': (
                f"Similar to '{candidate.title}' from {candidate.created_at:%Y-%m-%d} "
                f"({similarity}% text match, amount within 20%)"
            ),
        })
        return verdict

    similarity, candidate = max(scored, key=lambda pair: pair[0])
    verdict['confidence'] = similarity
    if similarity >= TEXT_SIMILARITY_THRESHOLD:
        verdict['matched_request'] = candidate
        verdict['reason'] = f"Similar to '{candidate.title}' but the amount differs by more than 20%"
    else:
        verdict['reason'] = 'No similar recent request'
    return verdict
