from datetime import date, datetime
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.approvals.models import ApprovalRequest
from apps.finance.models import CashTransaction, PaymentRecord
from apps.procurement.models import SupplierAdvance
from apps.sales.models import SalesTransaction


def _aware(*args):
    return timezone.make_aware(datetime(*args))


@pytest.fixture
def reports_officer(make_employee):
    return make_employee(permissions=['Reports:view'], role='Reports Officer')


@pytest.fixture
def may_ledger(make_employee, make_supplier, make_coffee_record):
    """
    One month of activity for May 2024, plus rows outside it.

    Expected May figures:
        purchases 1,900,000 for 280 kg; opening inventory 700,000;
        closing inventory 2,200,000 for 330 kg; sales 500,000;
        cash in 1,000,000, cash out 600,000; advances 200,000;
        expenses 30,000
    """
    supplier = make_supplier(name='Reconciliation Farm')
    requester = make_employee(permissions=['General Access'])

    make_coffee_record(supplier=supplier, date=date(2024, 4, 20), kilograms=Decimal('100.00'),
                       price_per_kg=Decimal('7000.00'), status='inventory')
    bought = make_coffee_record(supplier=supplier, date=date(2024, 5, 5), kilograms=Decimal('200.00'),
                                price_per_kg=Decimal('7500.00'), status='inventory')
    make_coffee_record(supplier=supplier, date=date(2024, 5, 10), kilograms=Decimal('50.00'),
                       price_per_kg=Decimal('8000.00'), status='sold')
    make_coffee_record(supplier=supplier, date=date(2024, 5, 12), kilograms=Decimal('30.00'))
    make_coffee_record(supplier=supplier, date=date(2024, 6, 2), kilograms=Decimal('10.00'),
                       price_per_kg=Decimal('7000.00'), status='inventory')

    SalesTransaction.objects.create(
        date=date(2024, 5, 25), customer='Kampala Roasters', coffee_type='arabica',
        weight=Decimal('50.00'), unit_price=Decimal('10000.00'), total_amount=Decimal('500000.00'),
    )

    PaymentRecord.objects.create(
        coffee_record=bought, supplier=supplier, batch_number=bought.batch_number,
        amount=Decimal('1500000.00'), amount_paid=Decimal('1500000.00'), status='paid', date=date(2024, 5, 15),
    )

    SupplierAdvance.objects.create(supplier=supplier, amount=Decimal('200000.00'), issued_at=date(2024, 5, 3))
    SupplierAdvance.objects.create(supplier=supplier, amount=Decimal('90000.00'), issued_at=date(2024, 4, 28))

    expense = ApprovalRequest.objects.create(
        request_type='expense', title='Generator fuel', amount=Decimal('30000.00'),
        status='approved', requested_by=requester.user,
    )
    pending_expense = ApprovalRequest.objects.create(
        request_type='expense', title='Tarpaulins', amount=Decimal('45000.00'),
        status='pending', requested_by=requester.user,
    )
    ApprovalRequest.objects.filter(id__in=[expense.id, pending_expense.id]).update(
        created_at=_aware(2024, 5, 8, 9, 0)
    )

    CashTransaction.objects.create(transaction_type='DEPOSIT', amount=Decimal('1000000.00'),
                                   status='confirmed', confirmed_at=_aware(2024, 5, 20, 10, 0))
    CashTransaction.objects.create(transaction_type='PAYMENT', amount=Decimal('600000.00'),
                                   status='confirmed', confirmed_at=_aware(2024, 5, 21, 10, 0))
    CashTransaction.objects.create(transaction_type='DEPOSIT', amount=Decimal('250000.00'))
    CashTransaction.objects.create(transaction_type='EXPENSE', amount=Decimal('80000.00'),
                                   status='confirmed', confirmed_at=_aware(2024, 6, 1, 10, 0))
    return supplier
