"""
SMS magic-link login.

Flow:
    1. ``request_login_link`` sends a 6-digit code inside an approval URL.
    2. Opening the URL runs ``approve_login_link``, which consumes the code
       and creates a short-lived ``LoginToken``.
    3. The browser exchanges the token for JWT credentials with
       ``redeem_login_token``.
"""

import logging
import secrets
from datetime import timedelta
from urllib.parse import urlencode

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import Employee, EmployeeStatus, LoginToken, VerificationCode
from apps.messaging.services import send_sms

from .exceptions import (
    EmployeeNotFoundError,
    InvalidLoginCodeError,
    InvalidTokenError,
    InactiveAccountError,
)

logger = logging.getLogger(__name__)

User = get_user_model()


def _find_employee(email: str, phone: str):
    return (
        Employee.objects
        .filter(email__iexact=email.strip(), phone=phone.strip(), status=EmployeeStatus.ACTIVE)
        .select_related('user')
        .first()
    )


def build_login_link(*, code: str, email: str, phone: str) -> str:
    query = urlencode({'code': code, 'email': email, 'phone': phone})
    return f"{settings.LOGIN_LINK_BASE_URL.rstrip('/')}/api/auth/login-link/?{query}"


def request_login_link(*, email: str, phone: str) -> bool:
    """
    Issue a verification code and text the approval link.

    Returns:
        True when an SMS was handed to the provider. Unknown employees
        return False without revealing anything to the caller.
    """
    employee = _find_employee(email, phone)
    if employee is None:
        logger.info("Login link requested for unknown employee %s", email)
        return False

    code = f"{secrets.randbelow(1_000_000):06d}"
    VerificationCode.objects.create(
        email=employee.email,
        phone=employee.phone,
        code=code,
        expires_at=timezone.now() + timedelta(minutes=settings.VERIFICATION_CODE_TTL_MINUTES),
    )

    link = build_login_link(code=code, email=employee.email, phone=employee.phone)
    message = (
        f"{settings.COMPANY_NAME}: tap to approve your login {link} "
        f"(expires in {settings.VERIFICATION_CODE_TTL_MINUTES} min)"
    )
    return send_sms(
        phone=employee.phone,
        message=message,
        message_type='login_link',
        triggered_by=employee.user,
    )


@transaction.atomic
def approve_login_link(*, code: str, email: str, phone: str) -> LoginToken:
    """
    Consume a verification code and create a login token.

    Raises:
        InvalidLoginCodeError: If no unexpired, unused code matches
        EmployeeNotFoundError: If no active employee has this email and phone
    """
    verification = (
        VerificationCode.objects
        .select_for_update()
        .filter(
            email__iexact=email,
            phone=phone,
            code=code,
            used_at__isnull=True,
            expires_at__gt=timezone.now(),
        )
        .order_by('-created_at')
        .first()
    )
    if verification is None:
        raise InvalidLoginCodeError("This login link is invalid or has expired")

    VerificationCode.objects.filter(pk=verification.pk).update(
        attempts=F('attempts') + 1,
        used_at=timezone.now(),
    )

    employee = _find_employee(email, phone)
    if employee is None:
        raise EmployeeNotFoundError("No active employee matches this email and phone")

    user = employee.user
    if user is None:
        user = User.objects.filter(email__iexact=employee.email).first() or User.objects.create_user(
            email=employee.email,
            password=None,
            display_name=employee.name,
            phone=employee.phone,
        )
        employee.user = user
        employee.save(update_fields=['user', 'updated_at'])

    token = LoginToken.objects.create(
        user=user,
        email=employee.email,
        phone=employee.phone,
        expires_at=timezone.now() + timedelta(minutes=settings.LOGIN_TOKEN_TTL_MINUTES),
    )
    logger.info("Login approved by SMS link for %s", employee.email)
    return token


@transaction.atomic
def redeem_login_token(*, token) -> User:
    """
    Exchange a login token for its user, exactly once.

    Raises:
        InvalidTokenError: If the token is unknown, used or expired
        InactiveAccountError: If the user account is disabled
    """
    try:
        login_token = (
            LoginToken.objects
            .select_for_update()
            .select_related('user')
            .get(token=token)
        )
    except (LoginToken.DoesNotExist, ValidationError):
        raise InvalidTokenError("Invalid or expired login token")

    if not login_token.is_valid():
        raise InvalidTokenError("Invalid or expired login token")

    user = login_token.user
    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    now = timezone.now()
    login_token.used_at = now
    login_token.save(update_fields=['used_at'])
    user.last_login = now
    user.save(update_fields=['last_login'])
    return user
