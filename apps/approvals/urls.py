from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'approvals'

router = DefaultRouter()
router.register(r'requests', views.ApprovalRequestViewSet, basename='request')

urlpatterns = [
    # Approval request routes
    # GET    /api/approvals/requests/                    - Own requests (all for reviewers)
    # POST   /api/approvals/requests/                    - Submit money request
    # POST   /api/approvals/requests/check_duplicate/    - Duplicate verdict only
    # POST   /api/approvals/requests/{id}/approve/       - Approve and run the action
    # POST   /api/approvals/requests/{id}/reject/        - Reject with reason
    path('', include(router.urls)),
]
