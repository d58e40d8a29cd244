from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.access import CREATE, STORE_MANAGEMENT
from apps.accounts.permissions import HasModuleAccess
from apps.approvals.serializers import ApprovalRequestSerializer
from apps.approvals.services import ApprovalsServiceError

from .models import StoreReport
from .serializers import (
    StoreChangeRequestResponseSerializer,
    StoreReportDeletionRequestSerializer,
    StoreReportEditRequestSerializer,
    StoreReportSerializer,
)
from .services import (
    DuplicateStoreReportError,
    InvalidReportChangeError,
    StoreReportNotFoundError,
    add_store_report,
    request_report_deletion,
    request_report_edit,
)


class StoreReportPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class StoreReportViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Daily store reports.

    Filed reports change only through approval requests:
    request_edit and request_deletion answer 202 with the created request.
    """

    queryset = StoreReport.objects.select_related('input_by')
    serializer_class = StoreReportSerializer
    permission_classes = [IsAuthenticated, HasModuleAccess]
    required_module = STORE_MANAGEMENT
    required_actions = {'create': CREATE, 'request_edit': CREATE, 'request_deletion': CREATE}
    pagination_class = StoreReportPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        coffee_type = self.request.query_params.get('coffee_type')
        date_from = self.request.query_params.get('date_from')
        date_to = self.request.query_params.get('date_to')
        if coffee_type:
            queryset = queryset.filter(coffee_type=coffee_type)
        if date_from:
            queryset = queryset.filter(date__gte=date_from)
        if date_to:
            queryset = queryset.filter(date__lte=date_to)
        return queryset

    def create(self, request):
        serializer = StoreReportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            report = add_store_report(input_by=request.user, **serializer.validated_data)
        except DuplicateStoreReportError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(StoreReportSerializer(report).data, status=status.HTTP_201_CREATED)

    def _change_requested(self, approval):
        return Response({
            'message': 'Change submitted for approval',
            'approval_request': ApprovalRequestSerializer(approval).data,
        }, status=status.HTTP_202_ACCEPTED)

    @extend_schema(request=StoreReportEditRequestSerializer, responses={202: StoreChangeRequestResponseSerializer})
    @action(detail=True, methods=['post'])
    def request_edit(self, request, pk=None):
        serializer = StoreReportEditRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            approval = request_report_edit(
                report_id=pk,
                changes=serializer.validated_data['changes'],
                reason=serializer.validated_data['reason'],
                requested_by=request.user,
            )
        except StoreReportNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidReportChangeError, ApprovalsServiceError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._change_requested(approval)

    @extend_schema(request=StoreReportDeletionRequestSerializer, responses={202: StoreChangeRequestResponseSerializer})
    @action(detail=True, methods=['post'])
    def request_deletion(self, request, pk=None):
        serializer = StoreReportDeletionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            approval = request_report_deletion(
                report_id=pk,
                reason=serializer.validated_data['reason'],
                requested_by=request.user,
            )
        except StoreReportNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ApprovalsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._change_requested(approval)
