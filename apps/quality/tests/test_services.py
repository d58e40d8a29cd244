import uuid
from decimal import Decimal

import pytest

from apps.finance.models import PaymentRecord
from apps.procurement.models import CoffeeRecordStatus
from apps.quality.models import AssessmentStatus
from apps.quality.services import (
    AssessmentNotFoundError,
    AssessmentStateError,
    InvalidAssessmentError,
    approve_assessment,
    reject_assessment,
    submit_assessment,
)


@pytest.mark.django_db
class TestSubmitAssessment:

    def test_batch_becomes_assessed_with_price(self, assessment, pending_record):
        pending_record.refresh_from_db()

        assert assessment.status == AssessmentStatus.PENDING
        assert assessment.batch_number == pending_record.batch_number
        assert pending_record.status == CoffeeRecordStatus.ASSESSED
        assert pending_record.price_per_kg == Decimal('7200.00')

    def test_batch_must_be_pending(self, assessor, make_coffee_record):
        record = make_coffee_record(status='inventory', price_per_kg=Decimal('7000.00'))

        with pytest.raises(AssessmentStateError):
            submit_assessment(
                record_id=record.id,
                assessor=assessor.user,
                measurements={'moisture': Decimal('12.00')},
                suggested_price=Decimal('7000.00'),
            )

    def test_second_assessment_rejected(self, assessment, assessor, pending_record):
        with pytest.raises(AssessmentStateError):
            submit_assessment(
                record_id=pending_record.id,
                assessor=assessor.user,
                measurements={'moisture': Decimal('12.00')},
                suggested_price=Decimal('7000.00'),
            )

    def test_out_of_range_measurement(self, assessor, pending_record):
        with pytest.raises(InvalidAssessmentError):
            submit_assessment(
                record_id=pending_record.id,
                assessor=assessor.user,
                measurements={'moisture': Decimal('120.00')},
                suggested_price=Decimal('7000.00'),
            )

        pending_record.refresh_from_db()
        assert pending_record.status == CoffeeRecordStatus.PENDING

    def test_price_must_be_positive(self, assessor, pending_record):
        with pytest.raises(InvalidAssessmentError):
            submit_assessment(
                record_id=pending_record.id,
                assessor=assessor.user,
                measurements={'moisture': Decimal('12.00')},
                suggested_price=Decimal('0'),
            )

    def test_unknown_batch(self, assessor):
        with pytest.raises(AssessmentNotFoundError):
            submit_assessment(
                record_id=uuid.uuid4(),
                assessor=assessor.user,
                measurements={'moisture': Decimal('12.00')},
                suggested_price=Decimal('7000.00'),
            )


@pytest.mark.django_db
class TestReviewAssessment:

    def test_approve_moves_to_inventory_and_opens_payable(self, assessment, quality_manager, pending_record):
        approve_assessment(assessment_id=assessment.id, reviewer=quality_manager.user)

        pending_record.refresh_from_db()
        payment = PaymentRecord.objects.get(coffee_record=pending_record)
        assert pending_record.status == CoffeeRecordStatus.INVENTORY
        assert payment.amount == Decimal('1800000.00')
        assert payment.status == 'pending'

    def test_reject_marks_batch_rejected(self, assessment, quality_manager, pending_record):
        rejected = reject_assessment(assessment_id=assessment.id, reviewer=quality_manager.user, reason='Mouldy')

        pending_record.refresh_from_db()
        assert rejected.status == AssessmentStatus.REJECTED
        assert rejected.rejection_reason == 'Mouldy'
        assert pending_record.status == CoffeeRecordStatus.REJECTED
        assert not PaymentRecord.objects.filter(coffee_record=pending_record).exists()

    def test_cannot_review_twice(self, assessment, quality_manager):
        approve_assessment(assessment_id=assessment.id, reviewer=quality_manager.user)

        with pytest.raises(AssessmentStateError):
            reject_assessment(assessment_id=assessment.id, reviewer=quality_manager.user)
