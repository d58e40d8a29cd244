"""
Employee management service.

Creating employees, assigning role presets and editing permission lists.
Callers are expected to have checked ``EmployeeAccess.can_manage_employees``.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError

from apps.accounts.access import (
    ALL_PERMISSIONS,
    ADMINISTRATION,
    GRANULAR_ROLE_PRESETS,
    MODULE_ACTIONS,
    ROLE_PERMISSION_PRESETS,
    is_granular_permission,
    parse_permission,
)
from apps.accounts.models import Employee, EmployeeStatus

from .exceptions import (
    EmployeeExistsError,
    EmployeeNotFoundError,
    InvalidPermissionError,
    UnknownRoleError,
)

logger = logging.getLogger(__name__)

User = get_user_model()


def validate_permissions(permissions: List[str]) -> List[str]:
    """
    Check every permission string and return them de-duplicated in order.

    Raises:
        InvalidPermissionError: For unknown modules or actions a module does not support
    """
    cleaned = []
    for permission in permissions:
        permission = permission.strip()
        if is_granular_permission(permission):
            module, action = parse_permission(permission)
            if module not in MODULE_ACTIONS or action not in MODULE_ACTIONS[module]:
                raise InvalidPermissionError(f"Unknown permission: {permission}")
        elif permission not in ALL_PERMISSIONS and permission != ADMINISTRATION:
            raise InvalidPermissionError(f"Unknown permission: {permission}")
        if permission not in cleaned:
            cleaned.append(permission)
    return cleaned


def preset_for_role(role: str) -> List[str]:
    """Module-level preset first, then the granular preset of the same name."""
    if role in ROLE_PERMISSION_PRESETS:
        return list(ROLE_PERMISSION_PRESETS[role])
    if role in GRANULAR_ROLE_PRESETS:
        return list(GRANULAR_ROLE_PRESETS[role])
    raise UnknownRoleError(f"No permission preset for role '{role}'")


@transaction.atomic
def create_employee(
    *,
    name: str,
    email: str,
    phone: str = '',
    department: str = '',
    position: str = '',
    role: str = 'User',
    permissions: Optional[List[str]] = None,
    salary: Decimal = Decimal('0'),
    password: Optional[str] = None,
    **extra_fields,
) -> Employee:
    """
    Create an employee and, when a password is given, a login account.

    Without explicit permissions the role's preset is used.

    Raises:
        EmployeeExistsError: If the email is already taken
        UnknownRoleError: If no permissions were given and the role has no preset
        InvalidPermissionError: If a permission string is not recognised
    """
    email = User.objects.normalize_email(email).lower()
    if Employee.objects.filter(email__iexact=email).exists():
        raise EmployeeExistsError(f"Employee with email {email} already exists")

    if permissions is None:
        permissions = preset_for_role(role)
    permissions = validate_permissions(permissions)

    user = None
    if password:
        if User.objects.filter(email__iexact=email).exists():
            raise EmployeeExistsError(f"User with email {email} already exists")
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=name,
            phone=phone,
        )

    try:
        employee = Employee.objects.create(
            user=user,
            name=name,
            email=email,
            phone=phone,
            department=department,
            position=position,
            role=role,
            permissions=permissions,
            salary=salary,
            **extra_fields,
        )
    except IntegrityError:
        raise EmployeeExistsError(f"Employee with email {email} already exists")

    logger.info("Created employee %s (%s) with role %s", employee.employee_id, email, role)
    return employee


def _lock_employee(employee_id) -> Employee:
    try:
        return Employee.objects.select_for_update().get(id=employee_id)
    except Employee.DoesNotExist:
        raise EmployeeNotFoundError(f"Employee {employee_id} not found")


@transaction.atomic
def update_employee_permissions(*, employee_id, permissions: List[str]) -> Employee:
    """Replace an employee's permission list."""
    employee = _lock_employee(employee_id)
    employee.permissions = validate_permissions(permissions)
    employee.save(update_fields=['permissions', 'updated_at'])
    logger.info("Updated permissions for %s: %s", employee.employee_id, employee.permissions)
    return employee


@transaction.atomic
def assign_role(*, employee_id, role: str) -> Employee:
    """Set the role and replace permissions with the role's preset."""
    employee = _lock_employee(employee_id)
    employee.role = role
    employee.permissions = preset_for_role(role)
    employee.save(update_fields=['role', 'permissions', 'updated_at'])
    logger.info("Assigned role %s to %s", role, employee.employee_id)
    return employee


@transaction.atomic
def deactivate_employee(*, employee_id) -> Employee:
    """Mark an employee inactive and disable their login."""
    employee = _lock_employee(employee_id)
    employee.status = EmployeeStatus.INACTIVE
    employee.save(update_fields=['status', 'updated_at'])
    if employee.user_id:
        User.objects.filter(id=employee.user_id).update(is_active=False)
    logger.info("Deactivated employee %s", employee.employee_id)
    return employee
