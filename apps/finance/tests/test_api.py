from decimal import Decimal
from unittest.mock import patch

import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestWalletApi:

    def test_any_employee_sees_own_wallet(self, client_for, earner):
        response = client_for(earner.user).get(reverse('finance:wallet'))

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['current_balance']) == Decimal('100000.00')

    def test_credit_requires_finance_process(self, client_for, plain_client, finance_assistant, earner):
        payload = {'user_id': str(earner.user.id), 'amount': '5000.00', 'reason': 'Bonus'}

        assert plain_client.post(reverse('finance:wallet-credit'), payload, format='json').status_code == 403

        response = client_for(finance_assistant.user).post(reverse('finance:wallet-credit'), payload, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['current_balance']) == Decimal('105000.00')


@pytest.mark.django_db
class TestWithdrawalApi:

    def test_user_creates_and_lists_own(self, client_for, earner, make_withdrawal, make_employee):
        other = make_employee()
        make_withdrawal(user=other.user)
        client = client_for(earner.user)

        created = client.post(reverse('finance:withdrawal-list'), {
            'amount': '25000.00',
            'phone_number': '0772123456',
        }, format='json')
        listed = client.get(reverse('finance:withdrawal-list'))

        assert created.status_code == status.HTTP_201_CREATED
        assert listed.data['count'] == 1

    def test_over_available_rejected(self, client_for, earner):
        response = client_for(earner.user).post(reverse('finance:withdrawal-list'), {
            'amount': '100000.01',
            'phone_number': '0772123456',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_assistant_cannot_approve(self, client_for, finance_assistant, make_withdrawal):
        withdrawal = make_withdrawal()
        url = reverse('finance:withdrawal-approve', kwargs={'pk': withdrawal.id})

        response = client_for(finance_assistant.user).post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_manager_approves_twice_conflict(self, client_for, finance_manager, make_withdrawal):
        withdrawal = make_withdrawal()
        client = client_for(finance_manager.user)
        url = reverse('finance:withdrawal-approve', kwargs={'pk': withdrawal.id})

        assert client.post(url).status_code == status.HTTP_200_OK
        assert client.post(url).status_code == status.HTTP_409_CONFLICT

    def test_manager_cannot_approve_own_request(self, client_for, finance_manager, make_withdrawal):
        withdrawal = make_withdrawal(user=finance_manager.user)
        client = client_for(finance_manager.user)

        approve = client.post(reverse('finance:withdrawal-approve', kwargs={'pk': withdrawal.id}))
        reject = client.post(reverse('finance:withdrawal-reject', kwargs={'pk': withdrawal.id}), {}, format='json')

        assert approve.status_code == status.HTTP_403_FORBIDDEN
        assert reject.status_code == status.HTTP_403_FORBIDDEN
        withdrawal.refresh_from_db()
        assert withdrawal.status == 'pending'

    @patch('apps.finance.services.payout_gateway.initiate_transfer', return_value={
        'accepted': False, 'transaction_reference': '', 'message': 'Gateway down', 'response': {},
    })
    def test_refused_transfer_is_bad_gateway(self, mock_transfer, client_for, finance_assistant, make_withdrawal):
        withdrawal = make_withdrawal(status='approved')
        url = reverse('finance:withdrawal-process', kwargs={'pk': withdrawal.id})

        response = client_for(finance_assistant.user).post(url)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['withdrawal']['status'] == 'failed'

    def test_insufficient_balance_is_bad_request(self, client_for, finance_assistant, make_withdrawal):
        withdrawal = make_withdrawal(amount=Decimal('500000'), status='approved')
        url = reverse('finance:withdrawal-process', kwargs={'pk': withdrawal.id})

        response = client_for(finance_assistant.user).post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Insufficient balance'


@pytest.mark.django_db
class TestPaymentApi:

    def test_pay(self, client_for, finance_assistant, payment):
        url = reverse('finance:payment-pay', kwargs={'pk': payment.id})

        response = client_for(finance_assistant.user).post(url, {'amount': '700000.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'paid'

    def test_view_only_cannot_pay(self, client_for, make_employee, payment):
        viewer = make_employee(permissions=['Finance:view'])
        url = reverse('finance:payment-pay', kwargs={'pk': payment.id})

        response = client_for(viewer.user).post(url, {'amount': '1000.00'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_requires_finance(self, plain_client):
        assert plain_client.get(reverse('finance:payment-list')).status_code == status.HTTP_403_FORBIDDEN
