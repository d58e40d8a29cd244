# ==========================================
# apps/quality/models.py
# ==========================================

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
import uuid


class AssessmentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending review'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


PERCENT_VALIDATORS = [MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]


class QualityAssessment(models.Model):
    """
    Lab measurements for one delivered batch.

    Percentages are stored as given by the lab. The suggested price is
    entered by the assessor.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    coffee_record = models.OneToOneField(
        'procurement.CoffeeRecord',
        on_delete=models.PROTECT,
        related_name='quality_assessment',
    )
    batch_number = models.CharField(max_length=20)
    moisture = models.DecimalField(max_digits=5, decimal_places=2, validators=PERCENT_VALIDATORS)
    group1_defects = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'), validators=PERCENT_VALIDATORS)
    group2_defects = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'), validators=PERCENT_VALIDATORS)
    below12 = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'), validators=PERCENT_VALIDATORS)
    pods = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'), validators=PERCENT_VALIDATORS)
    husks = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'), validators=PERCENT_VALIDATORS)
    stones = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'), validators=PERCENT_VALIDATORS)
    suggested_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    comments = models.TextField(blank=True)
    status = models.CharField(max_length=10, choices=AssessmentStatus.choices, default=AssessmentStatus.PENDING)
    assessed_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='quality_assessments')
    reviewed_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_assessments')
    reviewed_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'quality_assessments'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='assessments_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Assessment {self.batch_number} ({self.status})"
