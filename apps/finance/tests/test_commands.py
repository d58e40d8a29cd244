from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.finance.models import UserAccount, WalletCredit


@pytest.mark.django_db
class TestCreditDailySalariesCommand:

    def test_credits_given_date(self, earner):
        out = StringIO()

        call_command('credit_daily_salaries', date='2024-03-18', stdout=out)

        assert '2024-03-18: 1 credited' in out.getvalue()
        assert UserAccount.objects.get(user=earner.user).current_balance == Decimal('123846.15')

    def test_backfill_skips_sundays_and_credited_days(self, earner):
        call_command('credit_daily_salaries', date='2024-03-05', stdout=StringIO())

        # March 1-9 2024 holds one Sunday (the 3rd)
        call_command('credit_daily_salaries', date='2024-03-09', backfill=True, stdout=StringIO())

        credits = WalletCredit.objects.filter(user=earner.user)
        assert credits.count() == 8
        assert not credits.filter(credit_date='2024-03-03').exists()
        assert credits.filter(credit_date='2024-03-05').count() == 1

    def test_invalid_date(self, db):
        with pytest.raises(CommandError):
            call_command('credit_daily_salaries', date='18/03/2024', stdout=StringIO())
