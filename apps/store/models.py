# ==========================================
# apps/store/models.py
# ==========================================

from decimal import Decimal
import uuid

from django.db import models

from apps.procurement.models import CoffeeType


class StoreReport(models.Model):
    """Daily stock movement for one coffee type at the store."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()
    coffee_type = models.CharField(max_length=20, choices=CoffeeType.choices)
    kilograms_bought = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    average_buying_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    kilograms_sold = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    bags_sold = models.PositiveIntegerField(default=0)
    sold_to = models.CharField(max_length=200, blank=True)
    bags_left = models.PositiveIntegerField(default=0)
    kilograms_left = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    kilograms_unbought = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    advances_given = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    comments = models.TextField(blank=True)
    input_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='store_reports')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'store_reports'
        constraints = [
            models.UniqueConstraint(fields=['date', 'coffee_type'], name='unique_store_report_per_day'),
        ]
        ordering = ['-date', 'coffee_type']

    def __str__(self):
        return f"Store report {self.date} ({self.coffee_type})"
