"""Services for procurement business logic."""

from .exceptions import (
    ProcurementServiceError,
    SupplierNotFoundError,
    DuplicateSupplierError,
    InvalidDeliveryError,
    CoffeeRecordNotFoundError,
    InvalidStatusTransitionError,
    AdvanceNotFoundError,
    AdvanceAlreadyClearedError,
)
from .supplier_management import create_supplier, find_similar_suppliers
from .deliveries import (
    record_delivery,
    next_batch_number,
    transition_record,
    lock_record,
    mark_batch_sold,
)
from .advances import issue_advance, clear_advance

__all__ = [
    # Exceptions
    'ProcurementServiceError',
    'SupplierNotFoundError',
    'DuplicateSupplierError',
    'InvalidDeliveryError',
    'CoffeeRecordNotFoundError',
    'InvalidStatusTransitionError',
    'AdvanceNotFoundError',
    'AdvanceAlreadyClearedError',
    # Services
    'create_supplier',
    'find_similar_suppliers',
    'record_delivery',
    'next_batch_number',
    'transition_record',
    'lock_record',
    'mark_batch_sold',
    'issue_advance',
    'clear_advance',
]
