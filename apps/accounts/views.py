from django.conf import settings
from django.http import JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_GET
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, serializers, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from .access import EmployeeAccess
from .models import Employee
from .permissions import CanManageEmployees, get_access
from .serializers import (
    AssignRoleSerializer,
    EmployeeCreateSerializer,
    EmployeePermissionsSerializer,
    EmployeeSerializer,
    LoginLinkRequestSerializer,
    RedeemLoginTokenSerializer,
    UserLoginSerializer,
    UserSerializer,
)
from .services import (
    AccountsServiceError,
    EmployeeExistsError,
    EmployeeNotFoundError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidLoginCodeError,
    InvalidTokenError,
    approve_login_link,
    assign_role,
    authenticate_user,
    create_employee,
    deactivate_employee,
    issue_tokens,
    redeem_login_token,
    request_login_link,
    update_employee_permissions,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    access_context = serializers.DictField()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _auth_payload(user, message):
    return {
        'message': message,
        'user': UserSerializer(user).data,
        'access_context': EmployeeAccess.for_user(user).as_dict(),
        'tokens': issue_tokens(user),
    }


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens and the access context.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(_auth_payload(user, 'Login successful'))


@extend_schema(
    responses={200: UserSerializer},
    description="Current user plus the permission context derived from the employee record.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile and access context."""
    employee = getattr(request.user, 'employee', None)
    return Response({
        'user': UserSerializer(request.user).data,
        'employee': EmployeeSerializer(employee).data if employee else None,
        'access_context': get_access(request).as_dict(),
    })


# =============================================================================
# SMS login link
# =============================================================================

@extend_schema(
    request=LoginLinkRequestSerializer,
    responses={202: MessageResponseSerializer},
    description="Text a one-time approval link to the employee's phone.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def request_sms_login(request):
    """Send an SMS login link. Responds the same for unknown employees."""
    serializer = LoginLinkRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    request_login_link(**serializer.validated_data)

    return Response(
        {'message': 'If the details match an employee, a login link has been sent.'},
        status=status.HTTP_202_ACCEPTED
    )


@require_GET
def approve_sms_login(request):
    """HTML page opened from the SMS link."""
    code = request.GET.get('code')
    email = request.GET.get('email')
    phone = request.GET.get('phone')

    if not code or not email or not phone:
        return JsonResponse({'error': 'Missing required parameters'}, status=400)

    try:
        token = approve_login_link(code=code, email=email, phone=phone)
    except InvalidLoginCodeError:
        return render(request, 'accounts/login_link.html', {
            'title': 'Invalid or Expired Code',
            'message': 'This login link is invalid or has expired. Request a new one from the login page.',
            'approved': False,
        }, status=400)
    except EmployeeNotFoundError:
        return render(request, 'accounts/login_link.html', {
            'title': 'User Not Found',
            'message': 'No active employee matches this email and phone number.',
            'approved': False,
        }, status=404)

    return render(request, 'accounts/login_link.html', {
        'title': 'Login Approved',
        'message': 'Your login has been approved. Redirecting you to the app.',
        'approved': True,
        'redirect_url': f"{settings.LOGIN_LINK_BASE_URL.rstrip('/')}/?login_token={token.token}",
    })


@extend_schema(
    request=RedeemLoginTokenSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Exchange a one-time login token for JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def redeem_sms_login(request):
    serializer = RedeemLoginTokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = redeem_login_token(token=serializer.validated_data['login_token'])
    except InvalidTokenError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(_auth_payload(user, 'Login successful'))


# =============================================================================
# Employees
# =============================================================================

class EmployeePagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class EmployeeViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    Employee administration for administrators and Human Resources.

    Role and permissions change only through the dedicated actions.
    """

    queryset = Employee.objects.select_related('user')
    serializer_class = EmployeeSerializer
    permission_classes = [IsAuthenticated, CanManageEmployees]
    pagination_class = EmployeePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        department = self.request.query_params.get('department')
        status_filter = self.request.query_params.get('status')
        if department:
            queryset = queryset.filter(department=department)
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    def get_serializer_class(self):
        if self.action == 'create':
            return EmployeeCreateSerializer
        return EmployeeSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            employee = create_employee(**serializer.validated_data)
        except EmployeeExistsError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except AccountsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EmployeeSerializer(employee).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=EmployeePermissionsSerializer, responses={200: EmployeeSerializer})
    @action(detail=True, methods=['post'])
    def set_permissions(self, request, pk=None):
        """Replace the employee's permission list."""
        serializer = EmployeePermissionsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            employee = update_employee_permissions(
                employee_id=pk,
                permissions=serializer.validated_data['permissions'],
            )
        except EmployeeNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AccountsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EmployeeSerializer(employee).data)

    @extend_schema(request=AssignRoleSerializer, responses={200: EmployeeSerializer})
    @action(detail=True, methods=['post'])
    def assign_role(self, request, pk=None):
        """Apply a role preset."""
        serializer = AssignRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            employee = assign_role(employee_id=pk, role=serializer.validated_data['role'])
        except EmployeeNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AccountsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EmployeeSerializer(employee).data)

    @action(detail=True, methods=['post'])
    def deactivate(self, request, pk=None):
        try:
            employee = deactivate_employee(employee_id=pk)
        except EmployeeNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(EmployeeSerializer(employee).data)
