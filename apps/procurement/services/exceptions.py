"""Domain-specific exceptions for procurement services."""


class ProcurementServiceError(Exception):
    """Base exception for procurement services."""
    pass


class SupplierNotFoundError(ProcurementServiceError):
    """Raised when supplier does not exist or is inactive."""
    pass


class DuplicateSupplierError(ProcurementServiceError):
    """Raised when a new supplier looks like an existing one."""

    def __init__(self, message, matches=None):
        super().__init__(message)
        self.matches = matches or []


class InvalidDeliveryError(ProcurementServiceError):
    """Raised when delivery data is invalid."""
    pass


class CoffeeRecordNotFoundError(ProcurementServiceError):
    """Raised when a coffee record does not exist."""
    pass


class InvalidStatusTransitionError(ProcurementServiceError):
    """Raised when a coffee record cannot move to the requested status."""
    pass


class AdvanceNotFoundError(ProcurementServiceError):
    """Raised when an advance does not exist."""
    pass


class AdvanceAlreadyClearedError(ProcurementServiceError):
    """Raised when clearing an advance twice."""
    pass
