"""
Permission model for employees.

Employees carry a flat list of permission strings. A string is either a
module name (``"Finance"``), a granular ``"<Module>:<action>"`` grant
(``"Finance:approve"``) or the wildcard ``"*"``.

Module-level grants imply every action the module supports, so an employee
holding ``"Finance"`` passes a ``Finance:process`` check. Granular grants
only cover the named action.

Usage:
    from apps.accounts.access import EmployeeAccess, FINANCE, APPROVE

    access = EmployeeAccess.for_user(request.user)
    if access.has_granular_permission(FINANCE, APPROVE):
        ...
"""

from typing import Dict, List, Optional, Tuple


WILDCARD = '*'
ADMINISTRATION = 'Administration'

# Operations
QUALITY_CONTROL = 'Quality Control'
STORE_MANAGEMENT = 'Store Management'
EUDR_DOCUMENTATION = 'EUDR Documentation'
MILLING = 'Milling'
INVENTORY = 'Inventory'
FIELD_OPERATIONS = 'Field Operations'
PROCUREMENT = 'Procurement'
PROCESSING = 'Processing'

# Management
SALES_MARKETING = 'Sales Marketing'
FINANCE = 'Finance'
HUMAN_RESOURCES = 'Human Resources'
DATA_ANALYSIS = 'Data Analysis'
IT_MANAGEMENT = 'IT Management'
LOGISTICS = 'Logistics'

# System
REPORTS = 'Reports'
GENERAL_ACCESS = 'General Access'

# Administration
USER_MANAGEMENT = 'User Management'
PERMISSION_MANAGEMENT = 'Permission Management'

ALL_PERMISSIONS = [
    QUALITY_CONTROL, STORE_MANAGEMENT, EUDR_DOCUMENTATION, MILLING,
    INVENTORY, FIELD_OPERATIONS, PROCUREMENT, PROCESSING,
    SALES_MARKETING, FINANCE, HUMAN_RESOURCES, DATA_ANALYSIS,
    IT_MANAGEMENT, LOGISTICS, REPORTS, GENERAL_ACCESS,
    WILDCARD, USER_MANAGEMENT, PERMISSION_MANAGEMENT,
]

# Actions
VIEW = 'view'
CREATE = 'create'
EDIT = 'edit'
DELETE = 'delete'
PROCESS = 'process'
APPROVE = 'approve'
DOWNLOAD = 'download'
EXPORT = 'export'
PRINT = 'print'
MANAGE = 'manage'

ALL_ACTIONS = [VIEW, CREATE, EDIT, DELETE, PROCESS, APPROVE, DOWNLOAD, EXPORT, PRINT, MANAGE]

MODULE_ACTIONS: Dict[str, List[str]] = {
    FINANCE: [VIEW, CREATE, EDIT, PROCESS, APPROVE, DOWNLOAD, EXPORT, PRINT],
    STORE_MANAGEMENT: [VIEW, CREATE, EDIT, DELETE, EXPORT, PRINT],
    QUALITY_CONTROL: [VIEW, CREATE, EDIT, APPROVE, EXPORT, PRINT],
    PROCUREMENT: [VIEW, CREATE, EDIT, APPROVE, PROCESS, DOWNLOAD],
    HUMAN_RESOURCES: [VIEW, CREATE, EDIT, DELETE, APPROVE, PROCESS, DOWNLOAD],
    INVENTORY: [VIEW, CREATE, EDIT, EXPORT],
    SALES_MARKETING: [VIEW, CREATE, EDIT, PROCESS, EXPORT, PRINT],
    REPORTS: [VIEW, CREATE, DOWNLOAD, EXPORT, PRINT],
    MILLING: [VIEW, CREATE, EDIT, PROCESS, EXPORT],
    EUDR_DOCUMENTATION: [VIEW, CREATE, EDIT, APPROVE, DOWNLOAD, PRINT],
    PROCESSING: [VIEW, CREATE, EDIT, MANAGE],
    FIELD_OPERATIONS: [VIEW, CREATE, EDIT, MANAGE],
    LOGISTICS: [VIEW, CREATE, EDIT, MANAGE],
    DATA_ANALYSIS: [VIEW, DOWNLOAD, EXPORT],
    IT_MANAGEMENT: [VIEW, MANAGE],
}

ROLE_ADMINISTRATOR = 'Administrator'

ROLE_PERMISSION_PRESETS: Dict[str, List[str]] = {
    ROLE_ADMINISTRATOR: [WILDCARD],
    'Manager': [REPORTS, DATA_ANALYSIS, HUMAN_RESOURCES, FINANCE, USER_MANAGEMENT],
    'Quality Manager': [QUALITY_CONTROL, REPORTS, STORE_MANAGEMENT, EUDR_DOCUMENTATION],
    'Store Manager': [STORE_MANAGEMENT, INVENTORY, REPORTS, EUDR_DOCUMENTATION],
    'Finance Manager': [FINANCE, REPORTS, DATA_ANALYSIS],
    'Field Supervisor': [FIELD_OPERATIONS, PROCUREMENT, REPORTS],
    'User': [GENERAL_ACCESS],
}


def create_permission(module: str, action: str) -> str:
    """Build a granular ``Module:action`` permission string."""
    return f'{module}:{action}'


GRANULAR_ROLE_PRESETS: Dict[str, List[str]] = {
    ROLE_ADMINISTRATOR: [WILDCARD],
    'Finance Manager': [
        create_permission(FINANCE, VIEW),
        create_permission(FINANCE, CREATE),
        create_permission(FINANCE, EDIT),
        create_permission(FINANCE, PROCESS),
        create_permission(FINANCE, APPROVE),
        create_permission(FINANCE, DOWNLOAD),
        create_permission(FINANCE, EXPORT),
        create_permission(REPORTS, VIEW),
        create_permission(REPORTS, DOWNLOAD),
    ],
    'Finance Assistant': [
        create_permission(FINANCE, VIEW),
        create_permission(FINANCE, CREATE),
        create_permission(FINANCE, PROCESS),
    ],
    'Store Manager': [
        create_permission(STORE_MANAGEMENT, VIEW),
        create_permission(STORE_MANAGEMENT, CREATE),
        create_permission(STORE_MANAGEMENT, EDIT),
        create_permission(STORE_MANAGEMENT, DELETE),
        create_permission(INVENTORY, VIEW),
        create_permission(EUDR_DOCUMENTATION, VIEW),
        create_permission(EUDR_DOCUMENTATION, CREATE),
    ],
    'Store Clerk': [
        create_permission(STORE_MANAGEMENT, VIEW),
        create_permission(STORE_MANAGEMENT, CREATE),
        create_permission(INVENTORY, VIEW),
    ],
    'Quality Manager': [
        create_permission(QUALITY_CONTROL, VIEW),
        create_permission(QUALITY_CONTROL, CREATE),
        create_permission(QUALITY_CONTROL, EDIT),
        create_permission(QUALITY_CONTROL, APPROVE),
        create_permission(STORE_MANAGEMENT, VIEW),
    ],
    'HR Manager': [
        create_permission(HUMAN_RESOURCES, VIEW),
        create_permission(HUMAN_RESOURCES, CREATE),
        create_permission(HUMAN_RESOURCES, EDIT),
        create_permission(HUMAN_RESOURCES, APPROVE),
        create_permission(HUMAN_RESOURCES, PROCESS),
    ],
    'Procurement Officer': [
        create_permission(PROCUREMENT, VIEW),
        create_permission(PROCUREMENT, CREATE),
        create_permission(PROCUREMENT, EDIT),
    ],
    'Data Analyst': [
        create_permission(DATA_ANALYSIS, VIEW),
        create_permission(DATA_ANALYSIS, EXPORT),
        create_permission(REPORTS, VIEW),
        create_permission(REPORTS, CREATE),
        create_permission(REPORTS, DOWNLOAD),
    ],
    'Viewer': [
        create_permission(FINANCE, VIEW),
        create_permission(STORE_MANAGEMENT, VIEW),
        create_permission(REPORTS, VIEW),
    ],
}


def parse_permission(permission: str) -> Tuple[Optional[str], Optional[str]]:
    """Split ``Module:action`` into its parts, or ``(None, None)`` when malformed."""
    parts = permission.split(':')
    if len(parts) != 2:
        return None, None
    return parts[0], parts[1]


def is_granular_permission(permission: str) -> bool:
    return ':' in permission


def has_full_access(permissions) -> bool:
    return WILDCARD in permissions or ADMINISTRATION in permissions


def has_permission(permissions, permission: str) -> bool:
    """Exact membership check; the wildcard grants everything."""
    return WILDCARD in permissions or permission in permissions


def has_module_access(permissions, module: str) -> bool:
    """True for a module grant, any granular grant on the module, or full access."""
    if has_full_access(permissions) or module in permissions:
        return True
    prefix = f'{module}:'
    return any(p.startswith(prefix) for p in permissions)


def has_granular_permission(permissions, module: str, action: str) -> bool:
    if has_full_access(permissions):
        return True
    if create_permission(module, action) in permissions:
        return True
    # A plain module grant covers all of the module's actions
    return module in permissions and action in MODULE_ACTIONS.get(module, [])


def get_user_module_actions(permissions, module: str) -> List[str]:
    """List the actions a permission set allows on a module."""
    if has_full_access(permissions) or module in permissions:
        return list(MODULE_ACTIONS.get(module, []))

    actions = []
    for permission in permissions:
        parsed_module, action = parse_permission(permission)
        if parsed_module == module and action:
            actions.append(action)
    return actions


class EmployeeAccess:
    """
    Access context for the employee behind a user account.

    Built once per request from the employee record and never from
    client input. A user without an employee record gets an empty context.
    """

    def __init__(self, *, role: str = '', permissions=None, department: str = '', employee=None):
        self.role = role or ''
        self.permissions = list(permissions or [])
        self.department = department or ''
        self.employee = employee

    @classmethod
    def for_employee(cls, employee) -> 'EmployeeAccess':
        if employee is None or not employee.is_active:
            return cls()
        return cls(
            role=employee.role,
            permissions=employee.permissions,
            department=employee.department,
            employee=employee,
        )

    @classmethod
    def for_user(cls, user) -> 'EmployeeAccess':
        if user is None or not user.is_authenticated:
            return cls()
        return cls.for_employee(getattr(user, 'employee', None))

    def has_permission(self, permission: str) -> bool:
        return has_permission(self.permissions, permission)

    def has_role(self, role: str) -> bool:
        return self.role == role

    def has_module_access(self, module: str) -> bool:
        return has_module_access(self.permissions, module)

    def has_granular_permission(self, module: str, action: str) -> bool:
        return has_granular_permission(self.permissions, module, action)

    @property
    def has_full_access(self) -> bool:
        return has_full_access(self.permissions)

    def is_admin(self) -> bool:
        return self.role == ROLE_ADMINISTRATOR or WILDCARD in self.permissions

    def can_manage_employees(self) -> bool:
        return self.is_admin() or HUMAN_RESOURCES in self.permissions

    def modules(self) -> List[str]:
        """Modules this context can open, in a stable order."""
        return [module for module in MODULE_ACTIONS if self.has_module_access(module)]

    def as_dict(self) -> dict:
        return {
            'role': self.role,
            'department': self.department,
            'permissions': self.permissions,
            'is_admin': self.is_admin(),
            'can_manage_employees': self.can_manage_employees(),
            'modules': {
                module: get_user_module_actions(self.permissions, module)
                for module in self.modules()
            },
        }
