from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'sales'

router = DefaultRouter()
router.register(r'transactions', views.SalesTransactionViewSet, basename='sale')

urlpatterns = [
    # GET  /api/sales/transactions/?date_from=&date_to=  - List sales
    # POST /api/sales/transactions/                      - Record sale
    path('', include(router.urls)),
]
