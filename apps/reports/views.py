from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.access import FINANCE, REPORTS
from apps.accounts.permissions import module_permission

from .pdf import render_reconciliation_pdf
from .reconciliation import ReconciliationQueries
from .serializers import ReconciliationQuerySerializer, ReconciliationSerializer

CanViewReports = module_permission(FINANCE, REPORTS)

PERIOD_PARAMETERS = [
    OpenApiParameter('year', OpenApiTypes.INT, required=True),
    OpenApiParameter('month', OpenApiTypes.INT, required=True, description='1-12'),
]


def _period(request):
    serializer = ReconciliationQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data['year'], serializer.validated_data['month']


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: ReconciliationSerializer},
    description="Monthly reconciliation: purchases, sales, inventory, cash flow, P&L and balance sheet.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanViewReports])
def reconciliation(request):
    year, month = _period(request)
    data = ReconciliationQueries.monthly(year, month)
    return Response(ReconciliationSerializer(data).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={(200, 'application/pdf'): OpenApiTypes.BINARY},
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanViewReports])
def reconciliation_pdf(request):
    """Reconciliation as a downloadable PDF."""
    year, month = _period(request)
    data = ReconciliationQueries.monthly(year, month)

    response = HttpResponse(render_reconciliation_pdf(data), content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="reconciliation-{year}-{month:02d}.pdf"'
    return response
