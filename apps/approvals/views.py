from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import get_access

from .models import ApprovalRequest
from .permissions import CanReviewApprovals, can_review_approvals
from .serializers import (
    ApprovalRequestCreateSerializer,
    ApprovalRequestSerializer,
    DuplicateCheckSerializer,
    DuplicateVerdictSerializer,
    RejectSerializer,
)
from .services import (
    ApprovalActionError,
    ApprovalNotFoundError,
    ApprovalStateError,
    DuplicateRequestError,
    InvalidApprovalRequestError,
    approve_request,
    check_duplicate,
    reject_request,
    submit_request,
)


class ApprovalPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _verdict_data(verdict):
    return DuplicateVerdictSerializer(verdict).data


class ApprovalRequestViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Approval requests.

    list: Own requests; reviewers see every request
    create: Submit a money request (409 when it duplicates a recent one)
    check_duplicate: Duplicate verdict without creating anything
    approve / reject: Reviewer decisions
    """

    queryset = ApprovalRequest.objects.select_related('requested_by', 'reviewed_by')
    serializer_class = ApprovalRequestSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ApprovalPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        if not can_review_approvals(get_access(self.request)):
            queryset = queryset.filter(requested_by=self.request.user)
        for param in ('status', 'request_type', 'department'):
            value = self.request.query_params.get(param)
            if value:
                queryset = queryset.filter(**{param: value})
        return queryset

    @extend_schema(request=ApprovalRequestCreateSerializer, responses={201: ApprovalRequestSerializer})
    def create(self, request):
        serializer = ApprovalRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            approval = submit_request(requested_by=request.user, **serializer.validated_data)
        except DuplicateRequestError as e:
            return Response(
                {'error': str(e), 'duplicate': _verdict_data(e.verdict)},
                status=status.HTTP_409_CONFLICT
            )
        except InvalidApprovalRequestError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ApprovalRequestSerializer(approval).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=DuplicateCheckSerializer, responses={200: DuplicateVerdictSerializer})
    @action(detail=False, methods=['post'])
    def check_duplicate(self, request):
        serializer = DuplicateCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        verdict = check_duplicate(requested_by=request.user, **serializer.validated_data)
        return Response(_verdict_data(verdict))

    @extend_schema(request=None, responses={200: ApprovalRequestSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, CanReviewApprovals])
    def approve(self, request, pk=None):
        try:
            approval = approve_request(request_id=pk, reviewer=request.user)
        except ApprovalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ApprovalStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except ApprovalActionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ApprovalRequestSerializer(approval).data)

    @extend_schema(request=RejectSerializer, responses={200: ApprovalRequestSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, CanReviewApprovals])
    def reject(self, request, pk=None):
        serializer = RejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            approval = reject_request(
                request_id=pk,
                reviewer=request.user,
                reason=serializer.validated_data['reason'],
            )
        except ApprovalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ApprovalStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidApprovalRequestError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ApprovalRequestSerializer(approval).data)
