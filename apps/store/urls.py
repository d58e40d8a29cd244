from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'store'

router = DefaultRouter()
router.register(r'reports', views.StoreReportViewSet, basename='report')

urlpatterns = [
    # Store report routes
    # GET    /api/store/reports/                          - List reports
    # POST   /api/store/reports/                          - File today's report
    # POST   /api/store/reports/{id}/request_edit/        - Ask approval for an edit
    # POST   /api/store/reports/{id}/request_deletion/    - Ask approval for deletion
    path('', include(router.urls)),
]
