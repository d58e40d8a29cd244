from decimal import Decimal

import pytest

from apps.quality.services import submit_assessment


@pytest.fixture
def assessor(make_employee):
    return make_employee(
        permissions=['Quality Control:view', 'Quality Control:create'],
        role='Quality Analyst',
        department='Quality',
    )


@pytest.fixture
def quality_manager(make_employee):
    return make_employee(permissions=['Quality Control'], role='Quality Manager', department='Quality')


@pytest.fixture
def pending_record(make_coffee_record):
    return make_coffee_record(kilograms=Decimal('250.00'))


@pytest.fixture
def assessment(assessor, pending_record):
    return submit_assessment(
        record_id=pending_record.id,
        assessor=assessor.user,
        measurements={'moisture': Decimal('12.50'), 'group1_defects': Decimal('3.00')},
        suggested_price=Decimal('7200.00'),
    )
