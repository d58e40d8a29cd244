# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import User, Employee, EmployeeStatus, VerificationCode, LoginToken


def _badge(text, background, color='white'):
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        background, color, text,
    )


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for login accounts. Business data is edited on the Employee."""

    list_display = ['email', 'display_name', 'phone', 'is_active_badge', 'is_staff', 'created_at', 'last_login']
    list_filter = ['is_active', 'is_staff', 'is_superuser', 'created_at']
    search_fields = ['email', 'display_name', 'phone']
    ordering = ['-created_at']

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'phone', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        if obj.is_active:
            return _badge('Active', '#6B8E5E')
        return _badge('Inactive', '#B85C5C')
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['employee_id', 'name', 'email', 'phone', 'department', 'role', 'status_badge', 'join_date']
    list_filter = ['status', 'department', 'role']
    search_fields = ['name', 'email', 'phone', 'employee_id']
    readonly_fields = ['employee_id', 'created_at', 'updated_at']
    raw_id_fields = ['user']

    actions = ['deactivate_employees']

    def status_badge(self, obj):
        if obj.status == EmployeeStatus.ACTIVE:
            return _badge('Active', '#6B8E5E')
        return _badge('Inactive', '#B85C5C')
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    @admin.action(description='Deactivate selected employees')
    def deactivate_employees(self, request, queryset):
        count = queryset.update(status=EmployeeStatus.INACTIVE)
        User.objects.filter(employee__in=queryset).update(is_active=False)
        self.message_user(request, f'Deactivated {count} employee(s).')


@admin.register(VerificationCode)
class VerificationCodeAdmin(admin.ModelAdmin):
    list_display = ['email', 'phone', 'expires_at', 'attempts', 'used_at', 'created_at']
    search_fields = ['email', 'phone']
    readonly_fields = ['code']


@admin.register(LoginToken)
class LoginTokenAdmin(admin.ModelAdmin):
    list_display = ['email', 'phone', 'expires_at', 'used_at', 'created_at']
    search_fields = ['email']
