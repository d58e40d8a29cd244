from rest_framework import serializers


class ReconciliationQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    month = serializers.IntegerField(min_value=1, max_value=12)


def _money():
    return serializers.DecimalField(max_digits=20, decimal_places=2)


class ReconciliationSerializer(serializers.Serializer):
    """Monthly reconciliation figures, all amounts in UGX."""

    month = serializers.CharField()
    year = serializers.IntegerField()
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    # Purchases & sales
    total_purchases = _money()
    total_purchase_kg = _money()
    total_sales = _money()
    total_sales_kg = _money()
    # Inventory
    opening_inventory_value = _money()
    closing_inventory_value = _money()
    closing_inventory_kg = _money()
    # Payments & advances
    total_payments_to_suppliers = _money()
    total_advances_given = _money()
    total_expenses = _money()
    # Cash flow
    total_cash_in = _money()
    total_cash_out = _money()
    net_cash_flow = _money()
    # Profit & loss
    revenue = _money()
    cost_of_goods_sold = _money()
    gross_profit = _money()
    operating_expenses = _money()
    net_profit = _money()
    # Balance sheet
    total_assets = _money()
    total_liabilities = _money()
    equity = _money()
