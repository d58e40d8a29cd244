from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'quality'

router = DefaultRouter()
router.register(r'assessments', views.QualityAssessmentViewSet, basename='assessment')

urlpatterns = [
    # GET  /api/quality/assessments/               - List assessments (?status=)
    # POST /api/quality/assessments/               - Submit lab results
    # POST /api/quality/assessments/{id}/approve/  - Accept batch into inventory
    # POST /api/quality/assessments/{id}/reject/   - Reject batch
    path('', include(router.urls)),
]
