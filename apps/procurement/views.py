from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.access import CREATE, EDIT, PROCUREMENT, STORE_MANAGEMENT
from apps.accounts.permissions import HasModuleAccess

from .models import CoffeeRecord, Supplier, SupplierAdvance
from .serializers import (
    AdvanceCreateSerializer,
    CoffeeRecordQuerySerializer,
    CoffeeRecordSerializer,
    DeliveryCreateSerializer,
    SimilarSupplierQuerySerializer,
    SimilarSupplierSerializer,
    SupplierAdvanceSerializer,
    SupplierCreateSerializer,
    SupplierSerializer,
)
from .services import (
    AdvanceAlreadyClearedError,
    AdvanceNotFoundError,
    CoffeeRecordNotFoundError,
    DuplicateSupplierError,
    InvalidDeliveryError,
    InvalidStatusTransitionError,
    SupplierNotFoundError,
    clear_advance,
    create_supplier,
    find_similar_suppliers,
    issue_advance,
    mark_batch_sold,
    record_delivery,
)


class ProcurementPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


# =============================================================================
# Suppliers
# =============================================================================

class SupplierViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Supplier register.

    list: Active suppliers (``?include_inactive=true`` for all)
    create: Register a supplier; near-duplicates answer 409
    destroy: Deactivates the supplier, deliveries keep referencing it
    similar: Fuzzy name lookup
    """

    queryset = Supplier.objects.all()
    serializer_class = SupplierSerializer
    permission_classes = [IsAuthenticated, HasModuleAccess]
    required_module = PROCUREMENT
    required_actions = {'create': CREATE, 'update': EDIT, 'partial_update': EDIT, 'destroy': EDIT}
    pagination_class = ProcurementPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'list':
            if self.request.query_params.get('include_inactive') != 'true':
                queryset = queryset.filter(is_active=True)
            origin = self.request.query_params.get('origin')
            if origin:
                queryset = queryset.filter(origin__iexact=origin)
        return queryset

    @extend_schema(
        request=SupplierCreateSerializer,
        responses={201: SupplierSerializer},
        description="Register a supplier. Returns 409 with matches when a similar supplier exists.",
    )
    def create(self, request, *args, **kwargs):
        serializer = SupplierCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            supplier = create_supplier(created_by=request.user, **serializer.validated_data)
        except DuplicateSupplierError as e:
            return Response({
                'error': str(e),
                'matches': [
                    {'supplier': SupplierSerializer(match).data, 'similarity': score}
                    for match, score in e.matches
                ],
            }, status=status.HTTP_409_CONFLICT)

        return Response(SupplierSerializer(supplier).data, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance):
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])

    @extend_schema(
        parameters=[
            OpenApiParameter('name', OpenApiTypes.STR, description='Name to compare'),
            OpenApiParameter('origin', OpenApiTypes.STR, description='Restrict to one origin'),
        ],
        responses={200: SimilarSupplierSerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def similar(self, request):
        serializer = SimilarSupplierQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        matches = find_similar_suppliers(**serializer.validated_data)
        return Response([
            {'supplier': SupplierSerializer(supplier).data, 'similarity': score}
            for supplier, score in matches
        ])


# =============================================================================
# Coffee records (deliveries)
# =============================================================================

class CoffeeRecordViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Delivered batches.

    list: Filter by status, coffee_type, supplier, date_from, date_to
    create: Record a delivery awaiting assessment
    mark_sold: inventory -> sold
    """

    queryset = CoffeeRecord.objects.select_related('supplier')
    serializer_class = CoffeeRecordSerializer
    permission_classes = [IsAuthenticated, HasModuleAccess]
    required_module = [PROCUREMENT, STORE_MANAGEMENT]
    required_actions = {'create': CREATE, 'mark_sold': EDIT}
    pagination_class = ProcurementPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        params = CoffeeRecordQuerySerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        filters = params.validated_data

        if filters.get('status'):
            queryset = queryset.filter(status=filters['status'])
        if filters.get('coffee_type'):
            queryset = queryset.filter(coffee_type=filters['coffee_type'])
        if filters.get('supplier'):
            queryset = queryset.filter(supplier_id=filters['supplier'])
        if filters.get('date_from'):
            queryset = queryset.filter(date__gte=filters['date_from'])
        if filters.get('date_to'):
            queryset = queryset.filter(date__lte=filters['date_to'])
        return queryset

    @extend_schema(request=DeliveryCreateSerializer, responses={201: CoffeeRecordSerializer})
    def create(self, request):
        serializer = DeliveryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            record = record_delivery(received_by=request.user, **serializer.validated_data)
        except SupplierNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidDeliveryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CoffeeRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: CoffeeRecordSerializer})
    @action(detail=True, methods=['post'])
    def mark_sold(self, request, pk=None):
        try:
            record = mark_batch_sold(record_id=pk)
        except CoffeeRecordNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidStatusTransitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(CoffeeRecordSerializer(record).data)


# =============================================================================
# Advances
# =============================================================================

class SupplierAdvanceViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    queryset = SupplierAdvance.objects.select_related('supplier')
    serializer_class = SupplierAdvanceSerializer
    permission_classes = [IsAuthenticated, HasModuleAccess]
    required_module = PROCUREMENT
    required_actions = {'create': CREATE, 'clear': EDIT}
    pagination_class = ProcurementPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        supplier = self.request.query_params.get('supplier')
        cleared = self.request.query_params.get('is_cleared')
        if supplier:
            queryset = queryset.filter(supplier_id=supplier)
        if cleared in ('true', 'false'):
            queryset = queryset.filter(is_cleared=cleared == 'true')
        return queryset

    @extend_schema(request=AdvanceCreateSerializer, responses={201: SupplierAdvanceSerializer})
    def create(self, request):
        serializer = AdvanceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            advance = issue_advance(issued_by=request.user, **serializer.validated_data)
        except SupplierNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidDeliveryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SupplierAdvanceSerializer(advance).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: SupplierAdvanceSerializer})
    @action(detail=True, methods=['post'])
    def clear(self, request, pk=None):
        """Mark the advance as recovered."""
        try:
            advance = clear_advance(advance_id=pk)
        except AdvanceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AdvanceAlreadyClearedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(SupplierAdvanceSerializer(advance).data)
