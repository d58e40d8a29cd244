import pytest
from django.urls import reverse
from rest_framework import status

from apps.procurement.models import CoffeeRecord


@pytest.mark.django_db
class TestSupplierApi:

    def test_create_supplier(self, procurement_client):
        response = procurement_client.post(reverse('procurement:supplier-list'), {
            'name': 'Masereka Growers',
            'origin': 'Kasese',
            'phone': '0772000111',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['code'].startswith('SUP-')

    def test_duplicate_returns_conflict_with_matches(self, procurement_client, supplier):
        response = procurement_client.post(reverse('procurement:supplier-list'), {
            'name': 'Bwambale Coffee Farms',
            'origin': 'Kasese',
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['matches'][0]['supplier']['id'] == str(supplier.id)

    def test_similar_lookup(self, procurement_client, supplier):
        response = procurement_client.get(
            reverse('procurement:supplier-similar'),
            {'name': 'Bwambale Coffee', 'origin': 'Kasese'},
        )

        assert response.status_code == status.HTTP_200_OK
        assert all(match['similarity'] >= 85 for match in response.data)

    def test_delete_deactivates(self, procurement_client, supplier):
        url = reverse('procurement:supplier-detail', kwargs={'pk': supplier.id})

        response = procurement_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        supplier.refresh_from_db()
        assert supplier.is_active is False

    def test_requires_procurement_module(self, plain_client):
        response = plain_client.get(reverse('procurement:supplier-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestCoffeeRecordApi:

    def test_store_clerk_records_delivery(self, client_for, store_clerk, supplier):
        response = client_for(store_clerk.user).post(reverse('procurement:coffee-record-list'), {
            'supplier_id': str(supplier.id),
            'coffee_type': 'robusta',
            'kilograms': '320.00',
            'bags': 5,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'pending'
        assert CoffeeRecord.objects.get(id=response.data['id']).received_by == store_clerk.user

    def test_zero_kilograms_rejected(self, procurement_client, supplier):
        response = procurement_client.post(reverse('procurement:coffee-record-list'), {
            'supplier_id': str(supplier.id),
            'coffee_type': 'arabica',
            'kilograms': '0',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_filter_by_status(self, procurement_client, make_coffee_record):
        make_coffee_record(status='pending')
        make_coffee_record(status='inventory')

        response = procurement_client.get(reverse('procurement:coffee-record-list'), {'status': 'inventory'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

    def test_mark_sold_conflict(self, procurement_client, make_coffee_record):
        record = make_coffee_record(status='pending')
        url = reverse('procurement:coffee-record-mark-sold', kwargs={'pk': record.id})

        response = procurement_client.post(url)

        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
class TestAdvanceApi:

    def test_issue_and_clear(self, procurement_client, supplier):
        created = procurement_client.post(reverse('procurement:advance-list'), {
            'supplier_id': str(supplier.id),
            'amount': '200000.00',
        }, format='json')
        assert created.status_code == status.HTTP_201_CREATED

        url = reverse('procurement:advance-clear', kwargs={'pk': created.data['id']})
        assert procurement_client.post(url).status_code == status.HTTP_200_OK
        assert procurement_client.post(url).status_code == status.HTTP_409_CONFLICT
