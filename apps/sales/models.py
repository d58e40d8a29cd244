# ==========================================
# apps/sales/models.py
# ==========================================

from django.db import models
import uuid

from apps.procurement.models import CoffeeType


class SalesTransaction(models.Model):
    """Coffee sold and dispatched to a customer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()
    customer = models.CharField(max_length=200)
    coffee_type = models.CharField(max_length=20, choices=CoffeeType.choices)
    weight = models.DecimalField(max_digits=12, decimal_places=2)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total_amount = models.DecimalField(max_digits=16, decimal_places=2)
    truck_details = models.CharField(max_length=200, blank=True)
    driver_details = models.CharField(max_length=200, blank=True)
    recorded_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sales_recorded',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sales_transactions'
        indexes = [
            models.Index(fields=['date'], name='sales_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.customer} {self.weight}kg on {self.date}"
