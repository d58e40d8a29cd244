from decimal import Decimal

from rest_framework import serializers

from .models import ApprovalPriority, ApprovalRequest, ApprovalRequestType


class ApprovalRequestSerializer(serializers.ModelSerializer):
    requested_by_email = serializers.EmailField(source='requested_by.email', read_only=True)

    class Meta:
        model = ApprovalRequest
        fields = [
            'id',
            'request_type',
            'title',
            'description',
            'amount',
            'department',
            'priority',
            'status',
            'details',
            'requested_by',
            'requested_by_email',
            'reviewed_by',
            'reviewed_at',
            'rejection_reason',
            'created_at',
        ]
        read_only_fields = fields


class ApprovalRequestCreateSerializer(serializers.Serializer):
    """
    Input for money requests.

    Store report edits and deletions are requested through the store API.
    """

    request_type = serializers.ChoiceField(choices=[
        ApprovalRequestType.EXPENSE,
        ApprovalRequestType.REQUISITION,
        ApprovalRequestType.SALARY,
    ])
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    department = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    priority = serializers.ChoiceField(choices=ApprovalPriority.choices, default=ApprovalPriority.NORMAL)
    details = serializers.DictField(required=False, default=dict)
    force = serializers.BooleanField(required=False, default=False)


class DuplicateCheckSerializer(serializers.Serializer):
    request_type = serializers.ChoiceField(choices=ApprovalRequestType.choices)
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True, default=None)


class DuplicateVerdictSerializer(serializers.Serializer):
    is_duplicate = serializers.BooleanField()
    confidence = serializers.IntegerField()
    reason = serializers.CharField()
    matched_request = ApprovalRequestSerializer(allow_null=True)


class RejectSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=1000)
