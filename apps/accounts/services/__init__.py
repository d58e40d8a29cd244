"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    InvalidLoginCodeError,
    EmployeeNotFoundError,
    EmployeeExistsError,
    UnknownRoleError,
    InvalidPermissionError,
)
from .user_authentication import authenticate_user, issue_tokens
from .employee_management import (
    create_employee,
    update_employee_permissions,
    assign_role,
    deactivate_employee,
    validate_permissions,
    preset_for_role,
)
from .sms_login import (
    request_login_link,
    approve_login_link,
    redeem_login_token,
    build_login_link,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'InvalidLoginCodeError',
    'EmployeeNotFoundError',
    'EmployeeExistsError',
    'UnknownRoleError',
    'InvalidPermissionError',
    # Services
    'authenticate_user',
    'issue_tokens',
    'create_employee',
    'update_employee_permissions',
    'assign_role',
    'deactivate_employee',
    'validate_permissions',
    'preset_for_role',
    'request_login_link',
    'approve_login_link',
    'redeem_login_token',
    'build_login_link',
]
