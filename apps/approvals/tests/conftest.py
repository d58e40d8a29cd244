from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.approvals.models import ApprovalRequest


@pytest.fixture
def requester(make_employee):
    return make_employee(permissions=['Store Management'], department='Store', name='Requester')


@pytest.fixture
def reviewer(make_employee):
    return make_employee(permissions=['Finance'], role='Finance Manager', department='Finance', name='Reviewer')


@pytest.fixture
def make_request(requester):
    """Factory creating money requests directly, optionally backdated."""

    def _make_request(*, title='Fuel for delivery truck', description='Diesel for Kasese trip',
                      amount=Decimal('150000.00'), request_type='expense', days_ago=0, status='pending'):
        approval = ApprovalRequest.objects.create(
            request_type=request_type,
            title=title,
            description=description,
            amount=amount,
            status=status,
            requested_by=requester.user,
        )
        if days_ago:
            ApprovalRequest.objects.filter(id=approval.id).update(
                created_at=timezone.now() - timedelta(days=days_ago)
            )
            approval.refresh_from_db()
        return approval

    return _make_request
