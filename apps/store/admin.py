# ==========================================
# apps/store/admin.py
# ==========================================

from django.contrib import admin

from .models import StoreReport


@admin.register(StoreReport)
class StoreReportAdmin(admin.ModelAdmin):
    list_display = ['date', 'coffee_type', 'kilograms_bought', 'average_buying_price', 'kilograms_sold', 'kilograms_left', 'input_by']
    list_filter = ['coffee_type', 'date']
    date_hierarchy = 'date'
    raw_id_fields = ['input_by']
