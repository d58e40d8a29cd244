from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'procurement'

router = DefaultRouter()
router.register(r'suppliers', views.SupplierViewSet, basename='supplier')
router.register(r'coffee-records', views.CoffeeRecordViewSet, basename='coffee-record')
router.register(r'advances', views.SupplierAdvanceViewSet, basename='advance')

urlpatterns = [
    # Supplier routes
    # GET    /api/procurement/suppliers/                     - List active suppliers
    # POST   /api/procurement/suppliers/                     - Register supplier
    # GET    /api/procurement/suppliers/similar/?name=       - Fuzzy name lookup
    # DELETE /api/procurement/suppliers/{id}/                - Deactivate supplier

    # Coffee record routes
    # GET    /api/procurement/coffee-records/                - List deliveries
    # POST   /api/procurement/coffee-records/                - Record delivery
    # POST   /api/procurement/coffee-records/{id}/mark_sold/ - Inventory -> sold

    # Advance routes
    # GET    /api/procurement/advances/                      - List advances
    # POST   /api/procurement/advances/                      - Issue advance
    # POST   /api/procurement/advances/{id}/clear/           - Clear advance
    path('', include(router.urls)),
]
