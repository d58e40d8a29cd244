"""Services for sales."""

from .exceptions import SalesServiceError, InvalidSaleError
from .sales import record_sale

__all__ = [
    'SalesServiceError',
    'InvalidSaleError',
    'record_sale',
]
