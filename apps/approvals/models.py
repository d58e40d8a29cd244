# ==========================================
# apps/approvals/models.py
# ==========================================

from django.db import models
import uuid


class ApprovalRequestType(models.TextChoices):
    EXPENSE = 'expense', 'Expense request'
    REQUISITION = 'requisition', 'Requisition'
    SALARY = 'salary', 'Salary request'
    STORE_REPORT_EDIT = 'store_report_edit', 'Store report edit'
    STORE_REPORT_DELETION = 'store_report_deletion', 'Store report deletion'


# Types that move money and go through duplicate detection
MONEY_REQUEST_TYPES = (
    ApprovalRequestType.EXPENSE,
    ApprovalRequestType.REQUISITION,
    ApprovalRequestType.SALARY,
)


class ApprovalPriority(models.TextChoices):
    LOW = 'low', 'Low'
    NORMAL = 'normal', 'Normal'
    HIGH = 'high', 'High'
    URGENT = 'urgent', 'Urgent'


class ApprovalStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class ApprovalRequest(models.Model):
    """
    Request needing a reviewer's decision.

    ``details`` carries type-specific data, e.g. the store report id plus
    its original and updated values for store report edits.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    request_type = models.CharField(max_length=30, choices=ApprovalRequestType.choices)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    amount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    department = models.CharField(max_length=100, blank=True)
    priority = models.CharField(max_length=10, choices=ApprovalPriority.choices, default=ApprovalPriority.NORMAL)
    status = models.CharField(max_length=10, choices=ApprovalStatus.choices, default=ApprovalStatus.PENDING)
    details = models.JSONField(default=dict, blank=True)
    requested_by = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='approval_requests')
    reviewed_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_approval_requests')
    reviewed_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'approval_requests'
        indexes = [
            models.Index(fields=['requested_by', 'created_at'], name='approvals_requester_idx'),
            models.Index(fields=['status', 'request_type'], name='approvals_status_type_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_request_type_display()}: {self.title} ({self.status})"
