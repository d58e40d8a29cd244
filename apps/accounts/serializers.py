from rest_framework import serializers

from .access import ROLE_PERMISSION_PRESETS, GRANULAR_ROLE_PRESETS
from .models import User, Employee


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'phone',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'created_at', 'last_login']


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class EmployeeSerializer(serializers.ModelSerializer):
    """Employee record as returned by the API."""

    user_id = serializers.UUIDField(source='user.id', read_only=True, allow_null=True)

    class Meta:
        model = Employee
        fields = [
            'id',
            'employee_id',
            'user_id',
            'name',
            'email',
            'phone',
            'department',
            'position',
            'role',
            'permissions',
            'salary',
            'status',
            'join_date',
            'address',
            'emergency_contact',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'employee_id', 'permissions', 'role', 'status', 'created_at', 'updated_at']


class EmployeeCreateSerializer(serializers.Serializer):
    """Input for creating an employee."""

    name = serializers.CharField(max_length=200)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    department = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    position = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    role = serializers.CharField(max_length=50, required=False, default='User')
    permissions = serializers.ListField(child=serializers.CharField(), required=False)
    salary = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    password = serializers.CharField(write_only=True, required=False, min_length=8)


class EmployeePermissionsSerializer(serializers.Serializer):
    permissions = serializers.ListField(child=serializers.CharField(), allow_empty=True)


class AssignRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(
        choices=sorted(set(ROLE_PERMISSION_PRESETS) | set(GRANULAR_ROLE_PRESETS))
    )


class LoginLinkRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=20)


class RedeemLoginTokenSerializer(serializers.Serializer):
    login_token = serializers.UUIDField()
