import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestSalesApi:

    def test_record_sale(self, sales_client):
        response = sales_client.post(reverse('sales:sale-list'), {
            'customer': 'Kampala Roasters',
            'coffee_type': 'robusta',
            'weight': '500.00',
            'unit_price': '8800.00',
            'sale_date': '2024-05-15',
            'truck_details': 'UBA 123X',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['total_amount'] == '4400000.00'

    def test_zero_weight_rejected(self, sales_client):
        response = sales_client.post(reverse('sales:sale-list'), {
            'customer': 'Kampala Roasters',
            'coffee_type': 'robusta',
            'weight': '0',
            'unit_price': '8800.00',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_filtered_by_date_range(self, sales_client, may_sales):
        response = sales_client.get(
            reverse('sales:sale-list'),
            {'date_from': '2024-05-01', 'date_to': '2024-05-31'},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_requires_sales_module(self, plain_client):
        response = plain_client.get(reverse('sales:sale-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
