from decimal import Decimal

import pytest

from apps.finance.models import PaymentRecord, UserAccount, WithdrawalRequest


@pytest.fixture
def finance_manager(make_employee):
    return make_employee(permissions=['Finance'], role='Finance Manager', department='Finance')


@pytest.fixture
def finance_assistant(make_employee):
    return make_employee(
        permissions=['Finance:view', 'Finance:create', 'Finance:process'],
        role='Finance Assistant',
        department='Finance',
    )


@pytest.fixture
def earner(make_employee):
    """Employee with 100,000 in the wallet and a 620,000 monthly salary."""
    employee = make_employee(permissions=['General Access'], salary=Decimal('620000.00'))
    UserAccount.objects.create(
        user=employee.user,
        current_balance=Decimal('100000.00'),
        total_earned=Decimal('100000.00'),
    )
    return employee


@pytest.fixture
def make_withdrawal(earner):
    """Factory creating withdrawal requests for ``earner`` in a given status."""
    counter = iter(range(1, 1000))

    def _make_withdrawal(*, amount=Decimal('30000.00'), status='pending', user=None):
        return WithdrawalRequest.objects.create(
            request_ref=f'WR-TEST-{next(counter):04d}',
            user=user or earner.user,
            amount=amount,
            phone_number='0772123456',
            status=status,
        )

    return _make_withdrawal


@pytest.fixture
def payment(make_coffee_record):
    record = make_coffee_record(kilograms=Decimal('100.00'), price_per_kg=Decimal('7000.00'), status='inventory')
    return PaymentRecord.objects.create(
        coffee_record=record,
        supplier=record.supplier,
        batch_number=record.batch_number,
        amount=Decimal('700000.00'),
    )
