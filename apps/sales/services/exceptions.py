"""Domain-specific exceptions for sales services."""


class SalesServiceError(Exception):
    """Base exception for sales services."""
    pass


class InvalidSaleError(SalesServiceError):
    """Raised when a sale's weight or price is invalid."""
    pass
