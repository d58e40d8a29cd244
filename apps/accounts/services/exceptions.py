"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class InvalidTokenError(AccountsServiceError):
    """Raised when a login token is unknown, used or expired."""
    pass


class InvalidLoginCodeError(AccountsServiceError):
    """Raised when an SMS verification code does not match or has expired."""
    pass


class EmployeeNotFoundError(AccountsServiceError):
    """Raised when no active employee matches."""
    pass


class EmployeeExistsError(AccountsServiceError):
    """Raised when an employee with the same email already exists."""
    pass


class UnknownRoleError(AccountsServiceError):
    """Raised when a role has no permission preset."""
    pass


class InvalidPermissionError(AccountsServiceError):
    """Raised when a permission string is not recognised."""
    pass
