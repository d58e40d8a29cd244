from decimal import Decimal

from rest_framework import serializers

from .models import QualityAssessment


class QualityAssessmentSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source='coffee_record.supplier_name', read_only=True)
    kilograms = serializers.DecimalField(
        source='coffee_record.kilograms', max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = QualityAssessment
        fields = [
            'id',
            'coffee_record',
            'batch_number',
            'supplier_name',
            'kilograms',
            'moisture',
            'group1_defects',
            'group2_defects',
            'below12',
            'pods',
            'husks',
            'stones',
            'suggested_price',
            'comments',
            'status',
            'assessed_by',
            'reviewed_by',
            'reviewed_at',
            'rejection_reason',
            'created_at',
        ]
        read_only_fields = fields


def _percent(**kwargs):
    return serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), max_value=Decimal('100'), **kwargs
    )


class AssessmentCreateSerializer(serializers.Serializer):
    """Lab results for a pending batch."""

    coffee_record = serializers.UUIDField()
    moisture = _percent()
    group1_defects = _percent(required=False)
    group2_defects = _percent(required=False)
    below12 = _percent(required=False)
    pods = _percent(required=False)
    husks = _percent(required=False)
    stones = _percent(required=False)
    suggested_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    comments = serializers.CharField(required=False, allow_blank=True, default='')


class AssessmentRejectSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')
