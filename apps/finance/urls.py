from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'finance'

router = DefaultRouter()
router.register(r'payments', views.PaymentRecordViewSet, basename='payment')
router.register(r'cash-transactions', views.CashTransactionViewSet, basename='cash-transaction')
router.register(r'withdrawals', views.WithdrawalRequestViewSet, basename='withdrawal')

urlpatterns = [
    # Wallet
    path('wallet/', views.my_wallet, name='wallet'),
    path('wallet/credit/', views.credit_wallet, name='wallet-credit'),

    # Payment routes
    # GET    /api/finance/payments/                       - List supplier payables
    # POST   /api/finance/payments/{id}/pay/              - Pay towards a payable

    # Cash book routes
    # GET    /api/finance/cash-transactions/              - List cash book
    # POST   /api/finance/cash-transactions/              - Record entry
    # POST   /api/finance/cash-transactions/{id}/confirm/ - Confirm entry

    # Withdrawal routes
    # GET    /api/finance/withdrawals/                    - Own requests (all for Finance)
    # POST   /api/finance/withdrawals/                    - Request withdrawal
    # POST   /api/finance/withdrawals/{id}/approve/       - Approve (Finance:approve)
    # POST   /api/finance/withdrawals/{id}/reject/        - Reject (Finance:approve)
    # POST   /api/finance/withdrawals/{id}/process/       - Pay out (Finance:process)
    # POST   /api/finance/withdrawals/{id}/complete/      - Mark completed
    # POST   /api/finance/withdrawals/{id}/fail/          - Mark failed, refund if processing
    path('', include(router.urls)),
]
