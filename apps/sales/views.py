from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import mixins, status, viewsets
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.access import CREATE, SALES_MARKETING
from apps.accounts.permissions import HasModuleAccess

from .models import SalesTransaction
from .serializers import SaleCreateSerializer, SalesQuerySerializer, SalesTransactionSerializer
from .services import InvalidSaleError, record_sale


class SalesPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class SalesTransactionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    queryset = SalesTransaction.objects.all()
    serializer_class = SalesTransactionSerializer
    permission_classes = [IsAuthenticated, HasModuleAccess]
    required_module = SALES_MARKETING
    required_actions = {'create': CREATE}
    pagination_class = SalesPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        params = SalesQuerySerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        if params.validated_data.get('date_from'):
            queryset = queryset.filter(date__gte=params.validated_data['date_from'])
        if params.validated_data.get('date_to'):
            queryset = queryset.filter(date__lte=params.validated_data['date_to'])
        return queryset

    @extend_schema(
        parameters=[
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=SaleCreateSerializer, responses={201: SalesTransactionSerializer})
    def create(self, request):
        serializer = SaleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            sale = record_sale(recorded_by=request.user, **serializer.validated_data)
        except InvalidSaleError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SalesTransactionSerializer(sale).data, status=status.HTTP_201_CREATED)
