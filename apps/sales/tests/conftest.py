from datetime import date
from decimal import Decimal

import pytest

from apps.sales.models import SalesTransaction


@pytest.fixture
def sales_officer(make_employee):
    return make_employee(permissions=['Sales Marketing'], role='Sales Officer', department='Sales')


@pytest.fixture
def sales_client(client_for, sales_officer):
    return client_for(sales_officer.user)


@pytest.fixture
def make_sale():
    def _make_sale(*, sale_date, customer='Kampala Roasters', weight=Decimal('1000.00'), unit_price=Decimal('9000.00')):
        return SalesTransaction.objects.create(
            date=sale_date,
            customer=customer,
            coffee_type='robusta',
            weight=weight,
            unit_price=unit_price,
            total_amount=weight * unit_price,
        )

    return _make_sale


@pytest.fixture
def may_sales(db, make_sale):
    return [
        make_sale(sale_date=date(2024, 4, 30)),
        make_sale(sale_date=date(2024, 5, 2)),
        make_sale(sale_date=date(2024, 5, 20)),
    ]
