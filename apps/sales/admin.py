from django.contrib import admin

from .models import SalesTransaction


@admin.register(SalesTransaction)
class SalesTransactionAdmin(admin.ModelAdmin):
    list_display = ['date', 'customer', 'coffee_type', 'weight', 'unit_price', 'total_amount']
    list_filter = ['coffee_type', 'date']
    search_fields = ['customer', 'truck_details', 'driver_details']
    date_hierarchy = 'date'
