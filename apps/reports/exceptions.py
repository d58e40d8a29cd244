"""
Domain exceptions for the reports app.

Exception Hierarchy:
    ReportsServiceError (base)
    └── InvalidPeriodError
"""


class ReportsServiceError(Exception):
    """Base exception for all reports errors."""

    pass


class InvalidPeriodError(ReportsServiceError):
    """
    Raised when the requested month is out of range.

    Example:
        raise InvalidPeriodError("Month must be between 1 and 12")
    """

    pass
