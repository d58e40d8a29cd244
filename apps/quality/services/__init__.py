"""Services for quality assessments."""

from .exceptions import (
    QualityServiceError,
    AssessmentNotFoundError,
    InvalidAssessmentError,
    AssessmentStateError,
)
from .assessments import (
    MEASUREMENT_FIELDS,
    submit_assessment,
    approve_assessment,
    reject_assessment,
)

__all__ = [
    # Exceptions
    'QualityServiceError',
    'AssessmentNotFoundError',
    'InvalidAssessmentError',
    'AssessmentStateError',
    # Services
    'MEASUREMENT_FIELDS',
    'submit_assessment',
    'approve_assessment',
    'reject_assessment',
]
