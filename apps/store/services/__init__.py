"""Services for daily store reports."""

from .exceptions import (
    StoreServiceError,
    StoreReportNotFoundError,
    DuplicateStoreReportError,
    InvalidReportChangeError,
)
from .store_reports import (
    EDITABLE_FIELDS,
    report_snapshot,
    add_store_report,
    request_report_edit,
    request_report_deletion,
    apply_report_edit,
    apply_report_deletion,
)

__all__ = [
    # Exceptions
    'StoreServiceError',
    'StoreReportNotFoundError',
    'DuplicateStoreReportError',
    'InvalidReportChangeError',
    # Services
    'EDITABLE_FIELDS',
    'report_snapshot',
    'add_store_report',
    'request_report_edit',
    'request_report_deletion',
    'apply_report_edit',
    'apply_report_deletion',
]
