from unittest.mock import patch

import pytest
from django.urls import reverse
from rest_framework import status

from apps.search.services import AIGatewayError


@pytest.mark.django_db
class TestSearchApi:

    def test_requires_authentication(self, api_client):
        response = api_client.post(reverse('search:search'), {'query': 'kasese'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_permissions_come_from_employee_record(self, plain_client, no_ai, kasese_payment):
        response = plain_client.post(reverse('search:search'), {
            'query': 'Kasese',
            'userPermissions': ['*'],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'payment' not in {result['type'] for result in response.data['results']}

    def test_short_query(self, plain_client):
        response = plain_client.post(reverse('search:search'), {'query': 'k'}, format='json')

        assert response.data == {'results': [], 'suggestions': []}

    @patch('apps.search.services.ai_gateway.chat_completion')
    def test_gateway_failure_is_bad_gateway(self, mock_chat, plain_client, ai_settings):
        mock_chat.side_effect = AIGatewayError('AI gateway error: 503')

        response = plain_client.post(reverse('search:search'), {'query': 'kasese'}, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['results'] == []
