"""
Service layer unit tests for accounts app.

Tests cover:
- Employee creation and permission management
- SMS login link: code issue, approval, token redemption
"""

from datetime import timedelta
from unittest.mock import patch
from uuid import uuid4

import pytest
from django.utils import timezone

from apps.accounts.models import Employee, LoginToken, User, VerificationCode
from apps.accounts.services import (
    EmployeeExistsError,
    EmployeeNotFoundError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidLoginCodeError,
    InvalidPermissionError,
    InvalidTokenError,
    UnknownRoleError,
    approve_login_link,
    assign_role,
    authenticate_user,
    create_employee,
    deactivate_employee,
    redeem_login_token,
    request_login_link,
    update_employee_permissions,
)


# =============================================================================
# Employee Management
# =============================================================================

@pytest.mark.django_db
class TestEmployeeManagement:

    def test_create_employee_uses_role_preset(self):
        employee = create_employee(
            name='Grace Namono',
            email='Grace@Example.com',
            role='Store Manager',
        )

        assert employee.email == 'grace@example.com'
        assert employee.permissions == ['Store Management', 'Inventory', 'Reports', 'EUDR Documentation']
        assert employee.employee_id.startswith('EMP-')
        assert employee.user is None

    def test_create_employee_with_password_creates_login(self):
        employee = create_employee(
            name='Peter Okello',
            email='peter@example.com',
            password='SecurePass123!',
            permissions=['Finance:view'],
        )

        assert employee.user is not None
        assert employee.user.check_password('SecurePass123!')

    def test_employee_ids_are_sequential(self):
        first = create_employee(name='A', email='a@example.com')
        second = create_employee(name='B', email='b@example.com')

        assert int(second.employee_id.split('-')[1]) == int(first.employee_id.split('-')[1]) + 1

    def test_duplicate_email_rejected(self):
        create_employee(name='A', email='dup@example.com')

        with pytest.raises(EmployeeExistsError):
            create_employee(name='B', email='DUP@example.com')

    def test_unknown_permission_rejected(self):
        with pytest.raises(InvalidPermissionError):
            create_employee(name='A', email='a@example.com', permissions=['Finance:fly'])

    def test_unknown_role_without_permissions_rejected(self):
        with pytest.raises(UnknownRoleError):
            create_employee(name='A', email='a@example.com', role='Astronaut')

    def test_update_permissions_deduplicates(self, make_employee):
        employee = make_employee(permissions=['General Access'])

        updated = update_employee_permissions(
            employee_id=employee.id,
            permissions=['Finance', 'Finance', 'Reports:view'],
        )

        assert updated.permissions == ['Finance', 'Reports:view']

    def test_assign_role_replaces_permissions(self, make_employee):
        employee = make_employee(permissions=['Finance'])

        updated = assign_role(employee_id=employee.id, role='Finance Assistant')

        assert updated.role == 'Finance Assistant'
        assert updated.permissions == ['Finance:view', 'Finance:create', 'Finance:process']

    def test_deactivate_disables_login(self, make_employee):
        employee = make_employee(permissions=['Finance'])

        deactivate_employee(employee_id=employee.id)

        employee.refresh_from_db()
        employee.user.refresh_from_db()
        assert employee.is_active is False
        assert employee.user.is_active is False

    def test_missing_employee(self):
        with pytest.raises(EmployeeNotFoundError):
            assign_role(employee_id=uuid4(), role='User')


@pytest.mark.django_db
class TestAuthenticateUser:

    def test_inactive_employee_cannot_login(self, make_employee):
        employee = make_employee(permissions=['Finance'])
        Employee.objects.filter(id=employee.id).update(status='inactive')

        with pytest.raises(InactiveAccountError):
            authenticate_user(email=employee.email, password='TestPass123!')

    def test_wrong_password(self, make_employee):
        employee = make_employee()

        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email=employee.email, password='wrong')


# =============================================================================
# SMS Login Link
# =============================================================================

@pytest.mark.django_db
class TestRequestLoginLink:

    @patch('apps.accounts.services.sms_login.send_sms', return_value=True)
    def test_sends_link_to_known_employee(self, mock_send, sms_employee):
        sent = request_login_link(email=sms_employee.email, phone=sms_employee.phone)

        assert sent is True
        code = VerificationCode.objects.get(email=sms_employee.email)
        assert len(code.code) == 6
        kwargs = mock_send.call_args.kwargs
        assert kwargs['phone'] == sms_employee.phone
        assert f'code={code.code}' in kwargs['message']

    @patch('apps.accounts.services.sms_login.send_sms')
    def test_unknown_employee_sends_nothing(self, mock_send, db):
        sent = request_login_link(email='nobody@example.com', phone='0700000000')

        assert sent is False
        mock_send.assert_not_called()
        assert not VerificationCode.objects.exists()


@pytest.mark.django_db
class TestApproveLoginLink:

    def test_valid_code_creates_token_and_user(self, sms_employee, verification_code):
        token = approve_login_link(code='123456', email=sms_employee.email, phone=sms_employee.phone)

        verification_code.refresh_from_db()
        sms_employee.refresh_from_db()
        assert verification_code.used_at is not None
        assert verification_code.attempts == 1
        assert sms_employee.user is not None
        assert token.user == sms_employee.user
        assert token.expires_at <= timezone.now() + timedelta(minutes=5)

    def test_code_can_only_approve_once(self, sms_employee, verification_code):
        approve_login_link(code='123456', email=sms_employee.email, phone=sms_employee.phone)

        with pytest.raises(InvalidLoginCodeError):
            approve_login_link(code='123456', email=sms_employee.email, phone=sms_employee.phone)

    def test_expired_code(self, sms_employee, verification_code):
        verification_code.expires_at = timezone.now() - timedelta(seconds=1)
        verification_code.save()

        with pytest.raises(InvalidLoginCodeError):
            approve_login_link(code='123456', email=sms_employee.email, phone=sms_employee.phone)

    def test_wrong_code(self, sms_employee, verification_code):
        with pytest.raises(InvalidLoginCodeError):
            approve_login_link(code='654321', email=sms_employee.email, phone=sms_employee.phone)

    def test_employee_gone_after_code_issued(self, sms_employee, verification_code):
        Employee.objects.filter(id=sms_employee.id).update(status='inactive')

        with pytest.raises(EmployeeNotFoundError):
            approve_login_link(code='123456', email=sms_employee.email, phone=sms_employee.phone)


@pytest.mark.django_db
class TestRedeemLoginToken:

    def _token(self, user, **overrides):
        fields = {
            'user': user,
            'email': user.email,
            'phone': '0772123456',
            'expires_at': timezone.now() + timedelta(minutes=5),
        }
        fields.update(overrides)
        return LoginToken.objects.create(**fields)

    def test_redeem_once(self, make_employee):
        employee = make_employee()
        token = self._token(employee.user)

        assert redeem_login_token(token=token.token) == employee.user
        with pytest.raises(InvalidTokenError):
            redeem_login_token(token=token.token)

    def test_expired_token(self, make_employee):
        employee = make_employee()
        token = self._token(employee.user, expires_at=timezone.now() - timedelta(seconds=1))

        with pytest.raises(InvalidTokenError):
            redeem_login_token(token=token.token)

    def test_unknown_token(self, db):
        with pytest.raises(InvalidTokenError):
            redeem_login_token(token=uuid4())

    def test_inactive_user(self, make_employee):
        employee = make_employee()
        User.objects.filter(id=employee.user.id).update(is_active=False)
        token = self._token(employee.user)

        with pytest.raises(InactiveAccountError):
            redeem_login_token(token=token.token)
