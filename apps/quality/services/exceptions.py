"""Domain-specific exceptions for quality services."""


class QualityServiceError(Exception):
    """Base exception for quality services."""
    pass


class AssessmentNotFoundError(QualityServiceError):
    pass


class InvalidAssessmentError(QualityServiceError):
    """Raised when measurements or the price are invalid."""
    pass


class AssessmentStateError(QualityServiceError):
    """Raised when the assessment or its batch is in the wrong state."""
    pass
