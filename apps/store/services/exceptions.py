"""Domain-specific exceptions for store services."""


class StoreServiceError(Exception):
    """Base exception for store services."""
    pass


class StoreReportNotFoundError(StoreServiceError):
    pass


class DuplicateStoreReportError(StoreServiceError):
    """Raised when a report for the same date and coffee type exists."""
    pass


class InvalidReportChangeError(StoreServiceError):
    """Raised when a requested edit touches unknown fields or changes nothing."""
    pass
