from datetime import date
from decimal import Decimal

import pytest

from apps.store.models import StoreReport


@pytest.fixture
def store_manager(make_employee):
    return make_employee(permissions=['Store Management'], role='Store Manager', department='Store')


@pytest.fixture
def store_client(client_for, store_manager):
    return client_for(store_manager.user)


@pytest.fixture
def approver(make_employee):
    return make_employee(permissions=['Finance:view', 'Finance:approve'], role='Finance Manager', department='Finance')


@pytest.fixture
def report(store_manager):
    return StoreReport.objects.create(
        date=date(2024, 5, 10),
        coffee_type='robusta',
        kilograms_bought=Decimal('1200.00'),
        average_buying_price=Decimal('7100.00'),
        kilograms_sold=Decimal('300.00'),
        bags_sold=5,
        sold_to='Kampala Roasters',
        bags_left=15,
        kilograms_left=Decimal('900.00'),
        input_by=store_manager.user,
    )
