"""
Monthly reconciliation.

Pulls one month of purchases, sales, inventory, payments, advances,
expenses and cash movements together and derives a profit and loss
statement and a simple balance sheet from them.

Example::

    from apps.reports.reconciliation import ReconciliationQueries

    data = ReconciliationQueries.monthly(2024, 5)
    print(data['net_profit'])

All amounts are UGX Decimals rounded to 2 places.
"""

import calendar
from datetime import date
from decimal import Decimal

from django.db.models import DecimalField, ExpressionWrapper, F, Q, Sum
from django.db.models.functions import Abs, Coalesce

from apps.approvals.models import ApprovalRequest, ApprovalRequestType, ApprovalStatus
from apps.finance.models import (
    CASH_IN_TYPES,
    CASH_OUT_TYPES,
    CashTransaction,
    CashTransactionStatus,
    PaymentRecord,
    PaymentStatus,
)
from apps.procurement.models import CoffeeRecord, CoffeeRecordStatus, SupplierAdvance
from apps.sales.models import SalesTransaction

from .exceptions import InvalidPeriodError

ZERO = Decimal('0.00')


def money_field():
    return DecimalField(max_digits=20, decimal_places=2)


def record_value():
    return ExpressionWrapper(F('kilograms') * F('price_per_kg'), output_field=money_field())


def _total(expression):
    return Coalesce(Sum(expression), ZERO, output_field=money_field())


def _money(value) -> Decimal:
    return Decimal(value or 0).quantize(Decimal('0.01'))


def month_bounds(year: int, month: int):
    """First and last day of a month."""
    if not 1 <= month <= 12:
        raise InvalidPeriodError("Month must be between 1 and 12")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class ReconciliationQueries:
    """
    Read-only aggregate queries for the reconciliation report.

    Records without a price contribute kilograms but no value.
    """

    @staticmethod
    def purchases(start, end):
        return CoffeeRecord.objects.filter(date__range=(start, end)).aggregate(
            value=_total(record_value()),
            kilograms=_total('kilograms'),
        )

    @staticmethod
    def inventory(*, before=None, up_to=None):
        """Value and kilograms of unsold batches dated before or up to a day."""
        queryset = CoffeeRecord.objects.exclude(status=CoffeeRecordStatus.SOLD)
        if before is not None:
            queryset = queryset.filter(date__lt=before)
        if up_to is not None:
            queryset = queryset.filter(date__lte=up_to)
        return queryset.aggregate(value=_total(record_value()), kilograms=_total('kilograms'))

    @staticmethod
    def sales(start, end):
        return SalesTransaction.objects.filter(date__range=(start, end)).aggregate(
            value=_total('total_amount'),
            kilograms=_total('weight'),
        )

    @staticmethod
    def cash_flow(start, end):
        confirmed = CashTransaction.objects.filter(
            status=CashTransactionStatus.CONFIRMED,
            confirmed_at__date__range=(start, end),
        )
        return confirmed.aggregate(
            cash_in=Coalesce(
                Sum(Abs('amount'), filter=Q(transaction_type__in=CASH_IN_TYPES)), ZERO, output_field=money_field()
            ),
            cash_out=Coalesce(
                Sum(Abs('amount'), filter=Q(transaction_type__in=CASH_OUT_TYPES)), ZERO, output_field=money_field()
            ),
        )

    @staticmethod
    def monthly(year: int, month: int) -> dict:
        """
        Build the reconciliation for one calendar month.

        Raises:
            InvalidPeriodError: If month is not in 1..12
        """
        start, end = month_bounds(year, month)

        purchases = ReconciliationQueries.purchases(start, end)
        opening = ReconciliationQueries.inventory(before=start)
        closing = ReconciliationQueries.inventory(up_to=end)
        sales = ReconciliationQueries.sales(start, end)
        cash = ReconciliationQueries.cash_flow(start, end)

        payments = PaymentRecord.objects.filter(
            status=PaymentStatus.PAID, date__range=(start, end)
        ).aggregate(total=_total('amount'))['total']
        advances = SupplierAdvance.objects.filter(
            issued_at__range=(start, end)
        ).aggregate(total=_total('amount'))['total']
        expenses = ApprovalRequest.objects.filter(
            request_type=ApprovalRequestType.EXPENSE,
            status=ApprovalStatus.APPROVED,
            created_at__date__range=(start, end),
        ).aggregate(total=_total('amount'))['total']

        total_purchases = _money(purchases['value'])
        opening_value = _money(opening['value'])
        closing_value = _money(closing['value'])
        revenue = _money(sales['value'])
        cash_in = _money(cash['cash_in'])
        cash_out = _money(cash['cash_out'])
        net_cash_flow = cash_in - cash_out

        cost_of_goods_sold = opening_value + total_purchases - closing_value
        gross_profit = revenue - cost_of_goods_sold
        operating_expenses = _money(expenses)
        total_assets = closing_value + net_cash_flow
        total_liabilities = _money(advances)

        return {
            'month': calendar.month_name[month],
            'year': year,
            'period_start': start,
            'period_end': end,
            'total_purchases': total_purchases,
            'total_purchase_kg': _money(purchases['kilograms']),
            'total_sales': revenue,
            'total_sales_kg': _money(sales['kilograms']),
            'opening_inventory_value': opening_value,
            'closing_inventory_value': closing_value,
            'closing_inventory_kg': _money(closing['kilograms']),
            'total_payments_to_suppliers': _money(payments),
            'total_advances_given': total_liabilities,
            'total_expenses': operating_expenses,
            'total_cash_in': cash_in,
            'total_cash_out': cash_out,
            'net_cash_flow': net_cash_flow,
            'revenue': revenue,
            'cost_of_goods_sold': cost_of_goods_sold,
            'gross_profit': gross_profit,
            'operating_expenses': operating_expenses,
            'net_profit': gross_profit - operating_expenses,
            'total_assets': total_assets,
            'total_liabilities': total_liabilities,
            'equity': total_assets - total_liabilities,
        }
