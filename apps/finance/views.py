from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.access import APPROVE, CREATE, FINANCE, PROCESS
from apps.accounts.models import User
from apps.accounts.permissions import HasModuleAccess, get_access, module_permission

from .models import CashTransaction, PaymentRecord, WithdrawalRequest, WithdrawalStatus
from .serializers import (
    CashTransactionCreateSerializer,
    CashTransactionSerializer,
    CreditWalletSerializer,
    FailWithdrawalSerializer,
    PaymentInputSerializer,
    PaymentRecordSerializer,
    ReasonSerializer,
    WalletSerializer,
    WithdrawalCreateSerializer,
    WithdrawalRequestSerializer,
)
from .services import (
    INSUFFICIENT_BALANCE,
    CashTransactionNotFoundError,
    CashTransactionStateError,
    InvalidPaymentError,
    InvalidWithdrawalError,
    InvalidWithdrawalTransitionError,
    PaymentNotFoundError,
    SelfReviewError,
    WithdrawalNotFoundError,
    approve_withdrawal,
    complete_withdrawal,
    confirm_cash_transaction,
    create_withdrawal_request,
    credit_account,
    fail_withdrawal,
    get_wallet,
    process_supplier_payment,
    process_withdrawal,
    record_cash_transaction,
    reject_withdrawal,
)

CanApproveFinance = module_permission(FINANCE, action=APPROVE)
CanProcessFinance = module_permission(FINANCE, action=PROCESS)


class FinancePagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _withdrawal_error_response(e):
    if isinstance(e, WithdrawalNotFoundError):
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(e, SelfReviewError):
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)


# =============================================================================
# Supplier payments
# =============================================================================

class PaymentRecordViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Supplier payables opened by approved quality assessments.

    list: Filter by status and supplier
    pay: Pay part or all of the outstanding balance
    """

    queryset = PaymentRecord.objects.select_related('supplier')
    serializer_class = PaymentRecordSerializer
    permission_classes = [IsAuthenticated, HasModuleAccess]
    required_module = FINANCE
    required_actions = {'pay': PROCESS}
    pagination_class = FinancePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        status_filter = self.request.query_params.get('status')
        supplier = self.request.query_params.get('supplier')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        if supplier:
            queryset = queryset.filter(supplier_id=supplier)
        return queryset

    @extend_schema(request=PaymentInputSerializer, responses={200: PaymentRecordSerializer})
    @action(detail=True, methods=['post'])
    def pay(self, request, pk=None):
        serializer = PaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment = process_supplier_payment(
                payment_id=pk,
                amount=serializer.validated_data['amount'],
                processed_by=request.user,
            )
        except PaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidPaymentError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentRecordSerializer(payment).data)


class CashTransactionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    queryset = CashTransaction.objects.all()
    serializer_class = CashTransactionSerializer
    permission_classes = [IsAuthenticated, HasModuleAccess]
    required_module = FINANCE
    required_actions = {'create': CREATE, 'confirm': APPROVE}
    pagination_class = FinancePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        for param in ('status', 'transaction_type'):
            value = self.request.query_params.get(param)
            if value:
                queryset = queryset.filter(**{param: value})
        return queryset

    @extend_schema(request=CashTransactionCreateSerializer, responses={201: CashTransactionSerializer})
    def create(self, request):
        serializer = CashTransactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            cash = record_cash_transaction(created_by=request.user, **serializer.validated_data)
        except InvalidPaymentError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CashTransactionSerializer(cash).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: CashTransactionSerializer})
    @action(detail=True, methods=['post'])
    def confirm(self, request, pk=None):
        try:
            cash = confirm_cash_transaction(transaction_id=pk, confirmed_by=request.user)
        except CashTransactionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CashTransactionStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(CashTransactionSerializer(cash).data)


# =============================================================================
# Wallets
# =============================================================================

@extend_schema(responses={200: WalletSerializer}, tags=['finance'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_wallet(request):
    """Current user's wallet summary."""
    return Response(WalletSerializer(get_wallet(user=request.user)).data)


@extend_schema(request=CreditWalletSerializer, responses={200: WalletSerializer}, tags=['finance'])
@api_view(['POST'])
@permission_classes([IsAuthenticated, CanProcessFinance])
def credit_wallet(request):
    """Credit earnings to an employee's wallet."""
    serializer = CreditWalletSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = get_object_or_404(User, id=serializer.validated_data['user_id'])
    try:
        credit_account(
            user=user,
            amount=serializer.validated_data['amount'],
            reason=serializer.validated_data['reason'],
        )
    except InvalidPaymentError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(WalletSerializer(get_wallet(user=user)).data)


# =============================================================================
# Withdrawals
# =============================================================================

class WithdrawalRequestViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Withdrawal requests.

    Every user lists and creates their own requests. Finance staff see all
    of them and drive the lifecycle: approve/reject need ``Finance:approve``,
    process/complete/fail need ``Finance:process``.
    """

    queryset = WithdrawalRequest.objects.select_related('user')
    serializer_class = WithdrawalRequestSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = FinancePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        queryset = super().get_queryset()
        if not get_access(self.request).has_module_access(FINANCE):
            queryset = queryset.filter(user=self.request.user)
        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    @extend_schema(request=WithdrawalCreateSerializer, responses={201: WithdrawalRequestSerializer})
    def create(self, request):
        serializer = WithdrawalCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            withdrawal = create_withdrawal_request(user=request.user, **serializer.validated_data)
        except InvalidWithdrawalError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(WithdrawalRequestSerializer(withdrawal).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: WithdrawalRequestSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, CanApproveFinance])
    def approve(self, request, pk=None):
        try:
            withdrawal = approve_withdrawal(request_id=pk, approved_by=request.user)
        except (WithdrawalNotFoundError, SelfReviewError, InvalidWithdrawalTransitionError) as e:
            return _withdrawal_error_response(e)
        return Response(WithdrawalRequestSerializer(withdrawal).data)

    @extend_schema(request=ReasonSerializer, responses={200: WithdrawalRequestSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, CanApproveFinance])
    def reject(self, request, pk=None):
        serializer = ReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            withdrawal = reject_withdrawal(
                request_id=pk,
                rejected_by=request.user,
                reason=serializer.validated_data['reason'],
            )
        except (WithdrawalNotFoundError, SelfReviewError, InvalidWithdrawalTransitionError) as e:
            return _withdrawal_error_response(e)
        return Response(WithdrawalRequestSerializer(withdrawal).data)

    @extend_schema(
        request=None,
        responses={200: WithdrawalRequestSerializer},
        description="Send an approved request to the payout gateway. "
                    "400 on insufficient balance, 502 when the gateway refuses.",
    )
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, CanProcessFinance])
    def process(self, request, pk=None):
        try:
            withdrawal = process_withdrawal(request_id=pk)
        except (WithdrawalNotFoundError, InvalidWithdrawalTransitionError) as e:
            return _withdrawal_error_response(e)

        data = WithdrawalRequestSerializer(withdrawal).data
        if withdrawal.status == WithdrawalStatus.FAILED:
            code = (
                status.HTTP_400_BAD_REQUEST
                if withdrawal.failure_reason == INSUFFICIENT_BALANCE
                else status.HTTP_502_BAD_GATEWAY
            )
            return Response({'error': withdrawal.failure_reason, 'withdrawal': data}, status=code)
        return Response(data)

    @extend_schema(request=None, responses={200: WithdrawalRequestSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, CanProcessFinance])
    def complete(self, request, pk=None):
        try:
            withdrawal = complete_withdrawal(request_id=pk)
        except (WithdrawalNotFoundError, InvalidWithdrawalTransitionError) as e:
            return _withdrawal_error_response(e)
        return Response(WithdrawalRequestSerializer(withdrawal).data)

    @extend_schema(request=FailWithdrawalSerializer, responses={200: WithdrawalRequestSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, CanProcessFinance])
    def fail(self, request, pk=None):
        serializer = FailWithdrawalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            withdrawal = fail_withdrawal(request_id=pk, reason=serializer.validated_data['reason'])
        except (WithdrawalNotFoundError, InvalidWithdrawalTransitionError) as e:
            return _withdrawal_error_response(e)
        return Response(WithdrawalRequestSerializer(withdrawal).data)
