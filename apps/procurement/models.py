# ==========================================
# apps/procurement/models.py
# ==========================================

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
import re
import uuid


class Supplier(models.Model):
    """Coffee farmer or trader selling to the company."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=20, unique=True, editable=False)
    name = models.CharField(max_length=200)
    name_normalized = models.CharField(max_length=200, db_index=True, editable=False)
    phone = models.CharField(max_length=20, blank=True)
    origin = models.CharField(max_length=100, blank=True)
    opening_balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    is_active = models.BooleanField(default=True)
    date_registered = models.DateField(default=timezone.localdate)
    created_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='registered_suppliers')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'suppliers'
        indexes = [
            models.Index(fields=['origin', 'is_active'], name='suppliers_origin_active_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.code})"

    def save(self, *args, **kwargs):
        self.name_normalized = self._normalize_string(self.name)
        if not self.code:
            last = Supplier.objects.order_by('-code').values_list('code', flat=True).first()
            number = int(last.split('-')[1]) + 1 if last else 1
            self.code = f"SUP-{number:04d}"
        super().save(*args, **kwargs)

    @staticmethod
    def _normalize_string(text):
        """Lowercase, strip punctuation, collapse whitespace."""
        text = text.lower().strip()
        text = re.sub(r"[^\w\s-]", "", text)
        return re.sub(r"\s+", " ", text)


class CoffeeType(models.TextChoices):
    ARABICA = 'arabica', 'Arabica'
    ROBUSTA = 'robusta', 'Robusta'


class CoffeeRecordStatus(models.TextChoices):
    PENDING = 'pending', 'Pending assessment'
    ASSESSED = 'assessed', 'Assessed'
    REJECTED = 'rejected', 'Rejected'
    INVENTORY = 'inventory', 'In inventory'
    SOLD = 'sold', 'Sold'


class CoffeeRecord(models.Model):
    """A delivered batch of coffee from one supplier."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    batch_number = models.CharField(max_length=20, unique=True, editable=False)
    supplier = models.ForeignKey(Supplier, on_delete=models.PROTECT, related_name='coffee_records')
    # Snapshot so reports survive supplier renames
    supplier_name = models.CharField(max_length=200)
    coffee_type = models.CharField(max_length=20, choices=CoffeeType.choices)
    kilograms = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    bags = models.PositiveIntegerField(default=0)
    price_per_kg = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=20, choices=CoffeeRecordStatus.choices, default=CoffeeRecordStatus.PENDING)
    received_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='received_coffee_records')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'coffee_records'
        indexes = [
            models.Index(fields=['date', 'status'], name='coffee_records_date_status_idx'),
            models.Index(fields=['supplier', 'date'], name='coffee_records_supplier_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.batch_number} - {self.supplier_name} ({self.kilograms} kg)"

    @property
    def value(self):
        if self.price_per_kg is None:
            return None
        return (self.kilograms * self.price_per_kg).quantize(Decimal('0.01'))


class SupplierAdvance(models.Model):
    """Cash advanced to a supplier ahead of deliveries."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    supplier = models.ForeignKey(Supplier, on_delete=models.PROTECT, related_name='advances')
    amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    issued_at = models.DateField(default=timezone.localdate)
    issued_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='issued_advances')
    notes = models.TextField(blank=True)
    is_cleared = models.BooleanField(default=False)
    cleared_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'supplier_advances'
        indexes = [
            models.Index(fields=['supplier', 'is_cleared'], name='advances_supplier_open_idx'),
        ]
        ordering = ['-issued_at', '-created_at']

    def __str__(self):
        return f"Advance {self.amount} to {self.supplier.name}"
