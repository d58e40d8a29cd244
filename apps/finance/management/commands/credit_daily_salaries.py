"""
Management command crediting one day of salary to employee wallets.

Usage:
    python manage.py credit_daily_salaries
    python manage.py credit_daily_salaries --date 2024-03-18
    python manage.py credit_daily_salaries --date 2024-03-18 --backfill

Meant to run once a day from cron. With --backfill every working day
from the first of the month up to the date is credited; days that were
already credited are skipped.
"""

from datetime import date, timedelta

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.finance.services import credit_daily_salaries


class Command(BaseCommand):
    help = 'Credit the daily salary to every active employee wallet'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            help='Day to credit as YYYY-MM-DD (default: today)',
        )
        parser.add_argument(
            '--backfill',
            action='store_true',
            help='Also credit missed working days earlier in the same month',
        )

    def handle(self, *args, **options):
        day = self.parse_day(options['date'])

        days = [day]
        if options['backfill']:
            first = day.replace(day=1)
            days = [first + timedelta(days=offset) for offset in range((day - first).days + 1)]

        credited = 0
        for current in days:
            summary = credit_daily_salaries(current)
            credited += summary['credited']
            self.stdout.write(
                f"  {current.isoformat()}: {summary['credited']} credited, "
                f"{summary['skipped']} skipped, total {summary['total']}"
            )

        self.stdout.write(self.style.SUCCESS(f'Daily salary run finished: {credited} credits posted'))

    def parse_day(self, value):
        if not value:
            return timezone.localdate()
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise CommandError(f"Invalid date '{value}', expected YYYY-MM-DD")
