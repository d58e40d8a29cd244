from decimal import Decimal

from rest_framework import serializers

from .models import CoffeeRecord, CoffeeType, Supplier, SupplierAdvance


class SupplierSerializer(serializers.ModelSerializer):
    """Supplier as returned by the API."""

    class Meta:
        model = Supplier
        fields = [
            'id',
            'code',
            'name',
            'phone',
            'origin',
            'opening_balance',
            'is_active',
            'date_registered',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'code', 'is_active', 'date_registered', 'created_at', 'updated_at']


class SupplierCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    origin = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    opening_balance = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, default=Decimal('0.00')
    )
    allow_duplicate = serializers.BooleanField(required=False, default=False)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Supplier name cannot be empty.")
        return value


class SimilarSupplierQuerySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    origin = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class SimilarSupplierSerializer(serializers.Serializer):
    """Supplier match with its similarity score."""

    supplier = SupplierSerializer()
    similarity = serializers.IntegerField()


class CoffeeRecordSerializer(serializers.ModelSerializer):
    supplier_code = serializers.CharField(source='supplier.code', read_only=True)
    value = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True, allow_null=True)

    class Meta:
        model = CoffeeRecord
        fields = [
            'id',
            'batch_number',
            'supplier',
            'supplier_code',
            'supplier_name',
            'coffee_type',
            'kilograms',
            'bags',
            'price_per_kg',
            'value',
            'date',
            'status',
            'received_by',
            'created_at',
        ]
        read_only_fields = fields


class DeliveryCreateSerializer(serializers.Serializer):
    """Input for recording a delivery."""

    supplier_id = serializers.UUIDField()
    coffee_type = serializers.ChoiceField(choices=CoffeeType.choices)
    kilograms = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    bags = serializers.IntegerField(min_value=0, required=False, default=0)
    delivery_date = serializers.DateField(required=False, allow_null=True, default=None)


class CoffeeRecordQuerySerializer(serializers.Serializer):
    """Filters for listing coffee records."""

    status = serializers.CharField(required=False)
    coffee_type = serializers.ChoiceField(choices=CoffeeType.choices, required=False)
    supplier = serializers.UUIDField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, data):
        if data.get('date_from') and data.get('date_to') and data['date_from'] > data['date_to']:
            raise serializers.ValidationError("date_from must be before date_to.")
        return data


class SupplierAdvanceSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source='supplier.name', read_only=True)

    class Meta:
        model = SupplierAdvance
        fields = [
            'id',
            'supplier',
            'supplier_name',
            'amount',
            'issued_at',
            'issued_by',
            'notes',
            'is_cleared',
            'cleared_at',
            'created_at',
        ]
        read_only_fields = fields


class AdvanceCreateSerializer(serializers.Serializer):
    supplier_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    issued_at = serializers.DateField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
