# ==========================================
# apps/procurement/admin.py
# ==========================================

from django.contrib import admin

from .models import CoffeeRecord, Supplier, SupplierAdvance


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'origin', 'phone', 'opening_balance', 'is_active', 'date_registered']
    list_filter = ['is_active', 'origin']
    search_fields = ['code', 'name', 'phone']
    readonly_fields = ['code', 'name_normalized', 'created_at', 'updated_at']


@admin.register(CoffeeRecord)
class CoffeeRecordAdmin(admin.ModelAdmin):
    list_display = ['batch_number', 'supplier_name', 'coffee_type', 'kilograms', 'bags', 'price_per_kg', 'status', 'date']
    list_filter = ['status', 'coffee_type', 'date']
    search_fields = ['batch_number', 'supplier_name']
    raw_id_fields = ['supplier', 'received_by']
    date_hierarchy = 'date'


@admin.register(SupplierAdvance)
class SupplierAdvanceAdmin(admin.ModelAdmin):
    list_display = ['supplier', 'amount', 'issued_at', 'is_cleared', 'cleared_at']
    list_filter = ['is_cleared']
    search_fields = ['supplier__name', 'supplier__code']
    raw_id_fields = ['supplier', 'issued_by']
