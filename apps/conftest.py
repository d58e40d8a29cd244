"""Fixtures shared by every app's tests."""

import itertools
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, Employee


_sequence = itertools.count(1)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def make_employee(db):
    """
    Factory creating a user with a linked employee record.

    Usage:
        clerk = make_employee(permissions=['Store Management'])
        clerk.user  # the login account
    """

    def _make_employee(
        *,
        permissions=None,
        role='User',
        department='',
        name=None,
        email=None,
        phone=None,
        salary=Decimal('600000.00'),
        with_user=True,
    ):
        n = next(_sequence)
        email = email or f'employee{n}@example.com'
        phone = phone or f'07000{n:05d}'
        user = None
        if with_user:
            user = User.objects.create_user(
                email=email,
                password='TestPass123!',
                display_name=name or f'Employee {n}',
                phone=phone,
            )
        return Employee.objects.create(
            user=user,
            name=name or f'Employee {n}',
            email=email,
            phone=phone,
            department=department,
            role=role,
            permissions=list(permissions or []),
            salary=salary,
        )

    return _make_employee


@pytest.fixture
def client_for():
    """Factory returning an APIClient authenticated as the given user via JWT."""

    def _client_for(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return client

    return _client_for


@pytest.fixture
def admin_employee(make_employee):
    return make_employee(permissions=['*'], role='Administrator', department='Administration', name='Admin')


@pytest.fixture
def admin_client(client_for, admin_employee):
    return client_for(admin_employee.user)


@pytest.fixture
def plain_employee(make_employee):
    return make_employee(permissions=['General Access'], role='User', name='Plain Staff')


@pytest.fixture
def plain_client(client_for, plain_employee):
    return client_for(plain_employee.user)


@pytest.fixture
def make_supplier(db):
    """Factory creating active suppliers with unique names."""
    from apps.procurement.models import Supplier

    def _make_supplier(*, name=None, origin='Kasese', **fields):
        n = next(_sequence)
        return Supplier.objects.create(name=name or f'Supplier {n}', origin=origin, **fields)

    return _make_supplier


@pytest.fixture
def make_coffee_record(db, make_supplier):
    """
    Factory creating delivered batches directly, bypassing the delivery service.

    Usage:
        record = make_coffee_record(kilograms=Decimal('100'), price_per_kg=Decimal('7000'),
                                    status='inventory')
    """
    from apps.procurement.models import CoffeeRecord

    def _make_coffee_record(
        *,
        supplier=None,
        kilograms=Decimal('100.00'),
        price_per_kg=None,
        status='pending',
        coffee_type='arabica',
        date=None,
    ):
        n = next(_sequence)
        supplier = supplier or make_supplier()
        fields = {}
        if date is not None:
            fields['date'] = date
        return CoffeeRecord.objects.create(
            batch_number=f'T{n:08d}',
            supplier=supplier,
            supplier_name=supplier.name,
            coffee_type=coffee_type,
            kilograms=kilograms,
            price_per_kg=price_per_kg,
            status=status,
            **fields,
        )

    return _make_coffee_record
