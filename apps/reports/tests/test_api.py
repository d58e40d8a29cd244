import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestReconciliationApi:

    def test_finance_gets_json(self, admin_client, may_ledger):
        response = admin_client.get(reverse('reports:reconciliation'), {'year': 2024, 'month': 5})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['net_profit'] == '70000.00'

    def test_reports_module_gets_pdf(self, client_for, reports_officer):
        response = client_for(reports_officer.user).get(
            reverse('reports:reconciliation-pdf'), {'year': 2024, 'month': 5}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert 'reconciliation-2024-05.pdf' in response['Content-Disposition']
        assert response.content.startswith(b'%PDF')

    def test_month_out_of_range(self, admin_client):
        response = admin_client.get(reverse('reports:reconciliation'), {'year': 2024, 'month': 13})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_finance_or_reports(self, plain_client):
        response = plain_client.get(reverse('reports:reconciliation'), {'year': 2024, 'month': 5})

        assert response.status_code == status.HTTP_403_FORBIDDEN
