"""Password login for employee accounts."""

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from rest_framework_simplejwt.tokens import RefreshToken

from .exceptions import InactiveAccountError, InvalidCredentialsError

User = get_user_model()

BAD_CREDENTIALS = "Invalid email or password"


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check an email/password pair and stamp ``last_login``.

    Email matching ignores case and surrounding whitespace. The user row is
    locked while ``last_login`` is written.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: The login or its employee record is disabled
    """
    user = User.objects.select_for_update().filter(email__iexact=email.strip()).first()
    if user is None or not user.check_password(password):
        raise InvalidCredentialsError(BAD_CREDENTIALS)

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")
    employee = getattr(user, 'employee', None)
    if employee is not None and not employee.is_active:
        raise InactiveAccountError("Employee record is inactive")

    user.last_login = timezone.now()
    User.objects.filter(pk=user.pk).update(last_login=user.last_login)
    return user


def issue_tokens(user: User) -> dict:
    """JWT refresh/access pair for ``user``."""
    refresh = RefreshToken.for_user(user)
    return {'refresh': str(refresh), 'access': str(refresh.access_token)}
