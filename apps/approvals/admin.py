# ==========================================
# apps/approvals/admin.py
# ==========================================

from django.contrib import admin

from .models import ApprovalRequest


@admin.register(ApprovalRequest)
class ApprovalRequestAdmin(admin.ModelAdmin):
    list_display = ['title', 'request_type', 'amount', 'department', 'priority', 'status', 'requested_by', 'created_at']
    list_filter = ['request_type', 'status', 'priority', 'department']
    search_fields = ['title', 'description', 'requested_by__email']
    raw_id_fields = ['requested_by', 'reviewed_by']
    # Decisions go through the API so approval actions run
    readonly_fields = ['status', 'reviewed_by', 'reviewed_at', 'rejection_reason', 'details']
