from decimal import Decimal

import pytest

from apps.reports.exceptions import InvalidPeriodError
from apps.reports.pdf import format_ugx, render_reconciliation_pdf
from apps.reports.reconciliation import ReconciliationQueries, month_bounds


@pytest.mark.django_db
class TestReconciliationQueriesMonthly:
    """Tests for ReconciliationQueries.monthly()"""

    def test_purchases_and_sales(self, may_ledger):
        data = ReconciliationQueries.monthly(2024, 5)

        assert data['month'] == 'May'
        assert data['total_purchases'] == Decimal('1900000.00')
        assert data['total_purchase_kg'] == Decimal('280.00')
        assert data['total_sales'] == Decimal('500000.00')
        assert data['total_sales_kg'] == Decimal('50.00')

    def test_inventory(self, may_ledger):
        data = ReconciliationQueries.monthly(2024, 5)

        assert data['opening_inventory_value'] == Decimal('700000.00')
        assert data['closing_inventory_value'] == Decimal('2200000.00')
        assert data['closing_inventory_kg'] == Decimal('330.00')

    def test_payments_advances_expenses(self, may_ledger):
        data = ReconciliationQueries.monthly(2024, 5)

        assert data['total_payments_to_suppliers'] == Decimal('1500000.00')
        assert data['total_advances_given'] == Decimal('200000.00')
        assert data['total_expenses'] == Decimal('30000.00')

    def test_cash_flow_counts_confirmed_only(self, may_ledger):
        data = ReconciliationQueries.monthly(2024, 5)

        assert data['total_cash_in'] == Decimal('1000000.00')
        assert data['total_cash_out'] == Decimal('600000.00')
        assert data['net_cash_flow'] == Decimal('400000.00')

    def test_profit_and_balance_sheet(self, may_ledger):
        data = ReconciliationQueries.monthly(2024, 5)

        # 700,000 + 1,900,000 - 2,200,000
        assert data['cost_of_goods_sold'] == Decimal('400000.00')
        assert data['gross_profit'] == Decimal('100000.00')
        assert data['net_profit'] == Decimal('70000.00')
        assert data['total_assets'] == Decimal('2600000.00')
        assert data['total_liabilities'] == Decimal('200000.00')
        assert data['equity'] == Decimal('2400000.00')

    def test_empty_month(self, db):
        data = ReconciliationQueries.monthly(2023, 2)

        assert data['total_purchases'] == Decimal('0.00')
        assert data['net_profit'] == Decimal('0.00')
        assert data['period_end'].day == 28

    def test_invalid_month(self):
        with pytest.raises(InvalidPeriodError):
            month_bounds(2024, 13)


@pytest.mark.django_db
class TestReconciliationPdf:

    def test_renders_pdf(self, may_ledger):
        pdf = render_reconciliation_pdf(ReconciliationQueries.monthly(2024, 5))

        assert pdf.startswith(b'%PDF')

    def test_ugx_format(self):
        assert format_ugx(Decimal('1234567.5')) == 'UGX 1,234,567.50'
