from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.access import APPROVE, CREATE, QUALITY_CONTROL
from apps.accounts.permissions import HasModuleAccess

from .models import QualityAssessment
from .serializers import (
    AssessmentCreateSerializer,
    AssessmentRejectSerializer,
    QualityAssessmentSerializer,
)
from .services import (
    MEASUREMENT_FIELDS,
    AssessmentNotFoundError,
    AssessmentStateError,
    InvalidAssessmentError,
    approve_assessment,
    reject_assessment,
    submit_assessment,
)


class QualityPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class QualityAssessmentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Quality assessments.

    create: Record lab results, the batch becomes assessed
    approve: Batch goes to inventory and a supplier payable is opened
    reject: Batch is rejected
    """

    queryset = QualityAssessment.objects.select_related('coffee_record')
    serializer_class = QualityAssessmentSerializer
    permission_classes = [IsAuthenticated, HasModuleAccess]
    required_module = QUALITY_CONTROL
    required_actions = {'create': CREATE, 'approve': APPROVE, 'reject': APPROVE}
    pagination_class = QualityPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    @extend_schema(request=AssessmentCreateSerializer, responses={201: QualityAssessmentSerializer})
    def create(self, request):
        serializer = AssessmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            assessment = submit_assessment(
                record_id=data['coffee_record'],
                assessor=request.user,
                measurements={name: data[name] for name in MEASUREMENT_FIELDS if name in data},
                suggested_price=data['suggested_price'],
                comments=data['comments'],
            )
        except AssessmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidAssessmentError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except AssessmentStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(QualityAssessmentSerializer(assessment).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: QualityAssessmentSerializer})
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        try:
            assessment = approve_assessment(assessment_id=pk, reviewer=request.user)
        except AssessmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AssessmentStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(QualityAssessmentSerializer(assessment).data)

    @extend_schema(request=AssessmentRejectSerializer, responses={200: QualityAssessmentSerializer})
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        serializer = AssessmentRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            assessment = reject_assessment(
                assessment_id=pk,
                reviewer=request.user,
                reason=serializer.validated_data['reason'],
            )
        except AssessmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AssessmentStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(QualityAssessmentSerializer(assessment).data)
