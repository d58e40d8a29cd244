import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestStoreReportApi:

    def test_file_report(self, store_client):
        response = store_client.post(reverse('store:report-list'), {
            'date': '2024-05-12',
            'coffee_type': 'arabica',
            'kilograms_bought': '640.00',
            'average_buying_price': '7350.00',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['kilograms_bought'] == '640.00'

    def test_duplicate_day_conflicts(self, store_client, report):
        response = store_client.post(reverse('store:report-list'), {
            'date': '2024-05-10',
            'coffee_type': 'robusta',
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_request_edit(self, store_client, report):
        url = reverse('store:report-request-edit', kwargs={'pk': report.id})

        response = store_client.post(url, {
            'changes': {'kilograms_left': '850.00'},
            'reason': 'Recount after drying',
        }, format='json')

        assert response.status_code == status.HTTP_202_ACCEPTED
        details = response.data['approval_request']['details']
        assert details['updated_data'] == {'kilograms_left': '850.00'}
        report.refresh_from_db()
        assert str(report.kilograms_left) == '900.00'

    def test_request_edit_unknown_field(self, store_client, report):
        url = reverse('store:report-request-edit', kwargs={'pk': report.id})

        response = store_client.post(url, {'changes': {'input_by': None}, 'reason': 'x'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_request_deletion(self, store_client, report):
        url = reverse('store:report-request-deletion', kwargs={'pk': report.id})

        response = store_client.post(url, {'reason': 'Entered twice'}, format='json')

        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.data['approval_request']['request_type'] == 'store_report_deletion'

    def test_viewer_cannot_file(self, client_for, make_employee):
        viewer = make_employee(permissions=['Store Management:view'])

        response = client_for(viewer.user).post(reverse('store:report-list'), {
            'date': '2024-05-12',
            'coffee_type': 'arabica',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_requires_store_module(self, plain_client):
        response = plain_client.get(reverse('store:report-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
