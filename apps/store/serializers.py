from rest_framework import serializers

from apps.approvals.serializers import ApprovalRequestSerializer

from .models import StoreReport
from .services import EDITABLE_FIELDS


class StoreReportSerializer(serializers.ModelSerializer):
    class Meta:
        model = StoreReport
        fields = ['id', *EDITABLE_FIELDS, 'input_by', 'created_at', 'updated_at']
        read_only_fields = ['id', 'input_by', 'created_at', 'updated_at']
        # Duplicate days are reported by the service as a conflict
        validators = []


class StoreReportEditRequestSerializer(serializers.Serializer):
    changes = serializers.DictField()
    reason = serializers.CharField(max_length=1000)

    def validate_changes(self, value):
        if not value:
            raise serializers.ValidationError("No changes given.")
        unknown = set(value) - set(EDITABLE_FIELDS)
        if unknown:
            raise serializers.ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        fields = StoreReportSerializer(data=value, partial=True)
        fields.is_valid(raise_exception=True)
        return fields.validated_data


class StoreReportDeletionRequestSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=1000)


class StoreChangeRequestResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    approval_request = ApprovalRequestSerializer()
