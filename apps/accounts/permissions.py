"""
DRF permission classes backed by the employee access context.

Views declare what they need as class attributes:

    class PaymentViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticated, HasModuleAccess]
        required_module = FINANCE
        required_actions = {'process': PROCESS}

Function views use ``module_permission(FINANCE)`` to build a class.
"""

from rest_framework.permissions import BasePermission

from .access import EmployeeAccess


def get_access(request) -> EmployeeAccess:
    """Return the request's access context, computing it once."""
    access = getattr(request, '_employee_access', None)
    if access is None:
        access = EmployeeAccess.for_user(request.user)
        request._employee_access = access
    return access


class HasModuleAccess(BasePermission):
    """
    Permission: employee can open ``view.required_module``.

    When ``view.required_actions`` maps the current action to a granular
    action, that granular permission is required as well.
    """

    message = 'You do not have access to this module.'

    def has_permission(self, request, view):
        module = getattr(view, 'required_module', None)
        if module is None:
            return True

        access = get_access(request)
        modules = module if isinstance(module, (list, tuple)) else [module]
        allowed = [m for m in modules if access.has_module_access(m)]
        if not allowed:
            return False

        action = getattr(view, 'action', None)
        granular = getattr(view, 'required_actions', {}).get(action)
        if granular is None:
            return True
        return any(access.has_granular_permission(m, granular) for m in allowed)


def module_permission(*modules, action=None):
    """Build a permission class for function-based views."""

    class _ModulePermission(BasePermission):
        message = 'You do not have access to this module.'

        def has_permission(self, request, view):
            access = get_access(request)
            if action is None:
                return any(access.has_module_access(m) for m in modules)
            return any(access.has_granular_permission(m, action) for m in modules)

    _ModulePermission.__name__ = f"Requires{''.join(m.replace(' ', '') for m in modules)}"
    return _ModulePermission


class IsAdministrator(BasePermission):
    """Permission: employee has the Administrator role or the wildcard."""

    message = 'Administrator access required.'

    def has_permission(self, request, view):
        return get_access(request).is_admin()


class CanManageEmployees(BasePermission):
    """Permission: administrator or Human Resources."""

    message = 'You are not allowed to manage employees.'

    def has_permission(self, request, view):
        return get_access(request).can_manage_employees()
