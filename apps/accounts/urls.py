from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'accounts'

router = DefaultRouter()
router.register(r'employees', views.EmployeeViewSet, basename='employee')

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),
    path('me/', views.get_current_user, name='current-user'),

    # SMS login link
    path('login-link/request/', views.request_sms_login, name='login-link-request'),
    path('login-link/', views.approve_sms_login, name='login-link-approve'),
    path('login-link/redeem/', views.redeem_sms_login, name='login-link-redeem'),

    # Employee ViewSet routes
    # GET    /api/auth/employees/                        - List employees (admin/HR)
    # POST   /api/auth/employees/                        - Create employee
    # GET    /api/auth/employees/{id}/                   - Employee detail
    # PATCH  /api/auth/employees/{id}/                   - Update profile fields
    # POST   /api/auth/employees/{id}/set_permissions/   - Replace permissions
    # POST   /api/auth/employees/{id}/assign_role/       - Apply role preset
    # POST   /api/auth/employees/{id}/deactivate/        - Deactivate employee
    path('', include(router.urls)),
]
