from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    # Monthly reconciliation
    path('reconciliation/', views.reconciliation, name='reconciliation'),
    path('reconciliation/pdf/', views.reconciliation_pdf, name='reconciliation-pdf'),
]
