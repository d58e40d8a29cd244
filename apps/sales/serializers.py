from decimal import Decimal

from rest_framework import serializers

from apps.procurement.models import CoffeeType

from .models import SalesTransaction


class SalesTransactionSerializer(serializers.ModelSerializer):

    class Meta:
        model = SalesTransaction
        fields = [
            'id',
            'date',
            'customer',
            'coffee_type',
            'weight',
            'unit_price',
            'total_amount',
            'truck_details',
            'driver_details',
            'recorded_by',
            'created_at',
        ]
        read_only_fields = fields


class SaleCreateSerializer(serializers.Serializer):
    customer = serializers.CharField(max_length=200)
    coffee_type = serializers.ChoiceField(choices=CoffeeType.choices)
    weight = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    sale_date = serializers.DateField(required=False)
    truck_details = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    driver_details = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class SalesQuerySerializer(serializers.Serializer):
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        if attrs.get('date_from') and attrs.get('date_to') and attrs['date_from'] > attrs['date_to']:
            raise serializers.ValidationError("date_from must not be after date_to.")
        return attrs
