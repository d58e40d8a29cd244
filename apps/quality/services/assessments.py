"""
Quality assessment workflow.

submit: batch pending -> assessed, assessment pending
approve: assessment approved, batch -> inventory, supplier payable opened
reject: assessment rejected, batch -> rejected
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.finance.services import open_payment_record
from apps.procurement.models import CoffeeRecordStatus
from apps.procurement.services import (
    CoffeeRecordNotFoundError,
    InvalidStatusTransitionError,
    lock_record,
    transition_record,
)
from apps.quality.models import AssessmentStatus, QualityAssessment

from .exceptions import (
    AssessmentNotFoundError,
    AssessmentStateError,
    InvalidAssessmentError,
)

logger = logging.getLogger(__name__)

MEASUREMENT_FIELDS = ('moisture', 'group1_defects', 'group2_defects', 'below12', 'pods', 'husks', 'stones')


@transaction.atomic
def submit_assessment(
    *,
    record_id: UUID,
    assessor: User,
    measurements: dict,
    suggested_price: Decimal,
    comments: str = '',
) -> QualityAssessment:
    """
    Record lab results for a pending batch.

    Raises:
        AssessmentNotFoundError: If the batch does not exist
        InvalidAssessmentError: If a measurement or the price is out of range
        AssessmentStateError: If the batch is not pending
    """
    if suggested_price is None or suggested_price <= 0:
        raise InvalidAssessmentError("Suggested price must be greater than zero")
    unknown = set(measurements) - set(MEASUREMENT_FIELDS)
    if unknown:
        raise InvalidAssessmentError(f"Unknown measurements: {', '.join(sorted(unknown))}")
    if 'moisture' not in measurements:
        raise InvalidAssessmentError("Moisture is required")
    for name, value in measurements.items():
        if value is None or not Decimal('0') <= value <= Decimal('100'):
            raise InvalidAssessmentError(f"{name} must be between 0 and 100")

    try:
        record = lock_record(record_id)
    except CoffeeRecordNotFoundError as e:
        raise AssessmentNotFoundError(str(e))

    try:
        transition_record(record, CoffeeRecordStatus.ASSESSED, price_per_kg=suggested_price)
    except InvalidStatusTransitionError:
        raise AssessmentStateError(f"Batch {record.batch_number} is {record.status}, not pending")

    try:
        with transaction.atomic():
            assessment = QualityAssessment.objects.create(
                coffee_record=record,
                batch_number=record.batch_number,
                suggested_price=suggested_price,
                comments=comments,
                assessed_by=assessor,
                **measurements,
            )
    except IntegrityError:
        raise AssessmentStateError(f"Batch {record.batch_number} already has an assessment")

    logger.info("Batch %s assessed at %s/kg", record.batch_number, suggested_price)
    return assessment


def _lock_pending(assessment_id: UUID) -> QualityAssessment:
    try:
        assessment = QualityAssessment.objects.select_for_update().get(id=assessment_id)
    except QualityAssessment.DoesNotExist:
        raise AssessmentNotFoundError(f"Assessment {assessment_id} not found")
    if assessment.status != AssessmentStatus.PENDING:
        raise AssessmentStateError(f"Assessment is already {assessment.status}")
    return assessment


@transaction.atomic
def approve_assessment(*, assessment_id: UUID, reviewer: User) -> QualityAssessment:
    """
    Accept the batch into inventory and open the supplier payable for
    ``kilograms * suggested_price``.
    """
    assessment = _lock_pending(assessment_id)
    record = lock_record(assessment.coffee_record_id)
    try:
        transition_record(record, CoffeeRecordStatus.INVENTORY, price_per_kg=assessment.suggested_price)
    except InvalidStatusTransitionError as e:
        raise AssessmentStateError(str(e))

    assessment.status = AssessmentStatus.APPROVED
    assessment.reviewed_by = reviewer
    assessment.reviewed_at = timezone.now()
    assessment.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'updated_at'])

    open_payment_record(coffee_record=record)
    logger.info("Assessment for batch %s approved", record.batch_number)
    return assessment


@transaction.atomic
def reject_assessment(*, assessment_id: UUID, reviewer: User, reason: str = '') -> QualityAssessment:
    assessment = _lock_pending(assessment_id)
    record = lock_record(assessment.coffee_record_id)
    try:
        transition_record(record, CoffeeRecordStatus.REJECTED)
    except InvalidStatusTransitionError as e:
        raise AssessmentStateError(str(e))

    assessment.status = AssessmentStatus.REJECTED
    assessment.reviewed_by = reviewer
    assessment.reviewed_at = timezone.now()
    assessment.rejection_reason = reason
    assessment.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'rejection_reason', 'updated_at'])

    logger.info("Assessment for batch %s rejected", record.batch_number)
    return assessment
