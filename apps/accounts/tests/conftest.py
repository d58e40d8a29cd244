import pytest
from datetime import timedelta
from django.utils import timezone

from apps.accounts.models import User, VerificationCode


@pytest.fixture
def user(db):
    """Login account without an employee record."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def user_inactive(db):
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        display_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def hr_employee(make_employee):
    return make_employee(permissions=['Human Resources'], role='Manager', department='Human Resources')


@pytest.fixture
def sms_employee(make_employee):
    return make_employee(
        email='field@example.com',
        phone='0772123456',
        permissions=['Field Operations'],
        with_user=False,
    )


@pytest.fixture
def verification_code(sms_employee):
    return VerificationCode.objects.create(
        email=sms_employee.email,
        phone=sms_employee.phone,
        code='123456',
        expires_at=timezone.now() + timedelta(minutes=10),
    )
