"""Employee wallets."""

import calendar
import logging
import uuid
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.accounts.models import Employee, EmployeeStatus, User
from apps.finance.models import (
    OPEN_WITHDRAWAL_STATUSES,
    CreditType,
    UserAccount,
    WalletCredit,
    WithdrawalRequest,
    WithdrawalStatus,
)

from .exceptions import InvalidPaymentError

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')

# Salary credits are paid Monday to Saturday
WORKING_DAYS_PER_MONTH = 26


def get_or_create_account(user: User) -> UserAccount:
    account, _ = UserAccount.objects.get_or_create(user=user)
    return account


def lock_account(user: User) -> UserAccount:
    """Fetch the wallet row locked for update, creating it first if needed."""
    get_or_create_account(user)
    return UserAccount.objects.select_for_update().get(user=user)


def pending_withdrawals_total(user: User) -> Decimal:
    """Sum of requests that still reserve wallet money."""
    total = (
        WithdrawalRequest.objects
        .filter(user=user, status__in=OPEN_WITHDRAWAL_STATUSES)
        .aggregate(total=Sum('amount'))['total']
    )
    return total or Decimal('0.00')


def daily_salary(monthly_salary: Decimal, today=None) -> Decimal:
    """Monthly salary spread over the days of the current month."""
    today = today or timezone.localdate()
    days = calendar.monthrange(today.year, today.month)[1]
    return (Decimal(monthly_salary) / days).quantize(TWO_PLACES)


def get_wallet(*, user: User) -> dict:
    """
    Wallet summary for a user.

    Processing requests are already deducted from the balance, so only
    pending and approved ones reduce what is available.
    """
    account = get_or_create_account(user)
    reserved = (
        WithdrawalRequest.objects
        .filter(user=user, status__in=[WithdrawalStatus.PENDING, WithdrawalStatus.APPROVED])
        .aggregate(total=Sum('amount'))['total']
    ) or Decimal('0.00')

    employee = getattr(user, 'employee', None)
    monthly = employee.salary if employee else Decimal('0.00')

    return {
        'current_balance': account.current_balance,
        'total_earned': account.total_earned,
        'total_withdrawn': account.total_withdrawn,
        'salary_approved': account.salary_approved,
        'pending_withdrawals': pending_withdrawals_total(user),
        'available_balance': account.current_balance - reserved,
        'monthly_salary': monthly,
        'daily_salary': daily_salary(monthly),
    }


def working_day_salary(monthly_salary: Decimal) -> Decimal:
    """Daily salary credit: monthly salary over the fixed working month."""
    return (Decimal(monthly_salary) / WORKING_DAYS_PER_MONTH).quantize(TWO_PLACES)


def is_working_day(day) -> bool:
    return day.weekday() != calendar.SUNDAY


def _post_credit(account, *, amount, credit_type, reference, reason='', credit_date=None) -> UserAccount:
    """Record a credit row and add it to an already locked wallet."""
    WalletCredit.objects.create(
        user=account.user,
        credit_type=credit_type,
        amount=amount,
        reference=reference,
        reason=reason,
        credit_date=credit_date or timezone.localdate(),
    )
    account.current_balance += amount
    account.total_earned += amount
    account.save(update_fields=['current_balance', 'total_earned', 'updated_at'])
    return account


@transaction.atomic
def credit_account(*, user: User, amount: Decimal, reason: str = '', reference: str = None) -> UserAccount:
    """
    Add earnings to a wallet.

    Raises:
        InvalidPaymentError: If the amount is not positive or the
            reference was already used
    """
    if amount is None or amount <= 0:
        raise InvalidPaymentError("Credit amount must be greater than zero")

    account = lock_account(user)
    reference = reference or f"CREDIT-{uuid.uuid4().hex[:12].upper()}"
    if WalletCredit.objects.filter(reference=reference).exists():
        raise InvalidPaymentError(f"Credit {reference} was already posted")

    _post_credit(account, amount=amount, credit_type=CreditType.MANUAL, reference=reference, reason=reason)
    logger.info("Credited %s to wallet of %s: %s", amount, user.email, reason or 'no reason given')
    return account


def credit_daily_salaries(day=None) -> dict:
    """
    Credit one day of salary to every active, salaried employee with a login.

    Sundays are not paid. An employee already credited for ``day`` is
    skipped, so running this twice for the same date changes nothing.
    Each wallet is credited in its own transaction.

    Returns:
        Dict with the date, the number of wallets credited and skipped,
        and the total amount credited
    """
    day = day or timezone.localdate()
    summary = {'date': day, 'credited': 0, 'skipped': 0, 'total': Decimal('0.00')}

    if not is_working_day(day):
        logger.info("No salary credits on %s (Sunday)", day)
        return summary

    employees = (
        Employee.objects
        .filter(status=EmployeeStatus.ACTIVE, salary__gt=0, user__isnull=False)
        .select_related('user')
    )
    for employee in employees:
        amount = working_day_salary(employee.salary)
        with transaction.atomic():
            account = lock_account(employee.user)
            already_credited = WalletCredit.objects.filter(
                user=employee.user, credit_type=CreditType.DAILY_SALARY, credit_date=day,
            ).exists()
            if already_credited:
                summary['skipped'] += 1
                continue
            _post_credit(
                account,
                amount=amount,
                credit_type=CreditType.DAILY_SALARY,
                reference=f"DAILY-{day.isoformat()}-{employee.employee_id}",
                reason=f"Daily salary for {day.isoformat()}",
                credit_date=day,
            )
        summary['credited'] += 1
        summary['total'] += amount

    logger.info(
        "Daily salary for %s: %s credited, %s skipped, total %s",
        day, summary['credited'], summary['skipped'], summary['total'],
    )
    return summary
