"""
Daily store reports.

Reports are never edited or deleted in place once filed. Changes go
through an approval request whose details hold the report id and both the
original and the updated values; the change is applied when the request is
approved.
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from apps.accounts.models import User
from apps.approvals.models import ApprovalRequest, ApprovalRequestType
from apps.approvals.services import ApprovalActionError, submit_request
from apps.store.models import StoreReport

from .exceptions import (
    DuplicateStoreReportError,
    InvalidReportChangeError,
    StoreReportNotFoundError,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    'date',
    'coffee_type',
    'kilograms_bought',
    'average_buying_price',
    'kilograms_sold',
    'bags_sold',
    'sold_to',
    'bags_left',
    'kilograms_left',
    'kilograms_unbought',
    'advances_given',
    'comments',
)


def _json_value(value):
    if isinstance(value, Decimal):
        return str(value)
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return value


def report_snapshot(report: StoreReport) -> dict:
    """JSON-safe copy of the editable fields."""
    return {name: _json_value(getattr(report, name)) for name in EDITABLE_FIELDS}


def _get_report(report_id: UUID) -> StoreReport:
    try:
        return StoreReport.objects.get(id=report_id)
    except StoreReport.DoesNotExist:
        raise StoreReportNotFoundError(f"Store report {report_id} not found")


def add_store_report(*, input_by: User = None, **fields) -> StoreReport:
    """
    File the report for a date and coffee type.

    Raises:
        DuplicateStoreReportError: If that day's report already exists
    """
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidReportChangeError(f"Unknown fields: {', '.join(sorted(unknown))}")

    try:
        with transaction.atomic():
            report = StoreReport.objects.create(input_by=input_by, **fields)
    except IntegrityError:
        raise DuplicateStoreReportError(
            f"A {fields.get('coffee_type')} report for {fields.get('date')} already exists"
        )
    logger.info("Store report filed for %s (%s)", report.date, report.coffee_type)
    return report


def request_report_edit(
    *,
    report_id: UUID,
    changes: dict,
    reason: str,
    requested_by: User,
) -> ApprovalRequest:
    """
    Ask for an edit. The report stays unchanged until approval.

    Raises:
        StoreReportNotFoundError
        InvalidReportChangeError: If ``changes`` names unknown fields or
            changes nothing
    """
    report = _get_report(report_id)
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidReportChangeError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    original = report_snapshot(report)
    updated = {name: _json_value(value) for name, value in changes.items()}
    if all(original[name] == value for name, value in updated.items()):
        raise InvalidReportChangeError("The edit changes nothing")

    return submit_request(
        requested_by=requested_by,
        request_type=ApprovalRequestType.STORE_REPORT_EDIT,
        title=f"Edit store report {report.date} ({report.coffee_type})",
        description=reason,
        details={
            'report_id': str(report.id),
            'original_data': original,
            'updated_data': updated,
            'reason': reason,
        },
    )


def request_report_deletion(*, report_id: UUID, reason: str, requested_by: User) -> ApprovalRequest:
    report = _get_report(report_id)
    return submit_request(
        requested_by=requested_by,
        request_type=ApprovalRequestType.STORE_REPORT_DELETION,
        title=f"Delete store report {report.date} ({report.coffee_type})",
        description=reason,
        details={
            'report_id': str(report.id),
            'original_data': report_snapshot(report),
            'reason': reason,
        },
    )


def _lock_for_action(details: dict) -> StoreReport:
    try:
        return StoreReport.objects.select_for_update().get(id=details.get('report_id'))
    except (StoreReport.DoesNotExist, ValidationError):
        raise ApprovalActionError("The store report no longer exists")


def apply_report_edit(details: dict) -> StoreReport:
    """
    Apply an approved edit. Runs inside the approval's transaction.

    Raises:
        ApprovalActionError: If the report is gone or the edit is invalid
    """
    report = _lock_for_action(details)
    for name, value in details.get('updated_data', {}).items():
        if name not in EDITABLE_FIELDS:
            raise ApprovalActionError(f"Field {name} cannot be edited")
        field = StoreReport._meta.get_field(name)
        try:
            setattr(report, name, field.to_python(value))
        except ValidationError as e:
            raise ApprovalActionError(f"Invalid value for {name}: {'; '.join(e.messages)}")

    try:
        report.full_clean(exclude=['input_by'])
    except ValidationError as e:
        raise ApprovalActionError(f"Edited report is invalid: {'; '.join(e.messages)}")

    report.save()
    logger.info("Applied approved edit to store report %s", report.id)
    return report


def apply_report_deletion(details: dict) -> None:
    """Delete a report after approval. Runs inside the approval's transaction."""
    report = _lock_for_action(details)
    report_id = report.id
    report.delete()
    logger.info("Deleted store report %s after approval", report_id)
