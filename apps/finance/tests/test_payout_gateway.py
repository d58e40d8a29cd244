from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests

from apps.finance.services.payout_gateway import initiate_transfer

TRANSFER = {
    'msisdn': '256772123456',
    'amount': Decimal('30000.00'),
    'external_reference': 'WD-123',
    'narration': 'Payout - 30000.00',
}


def _response(status_code, body):
    response = MagicMock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.json.return_value = body
    return response


@pytest.fixture
def payout_settings(settings):
    settings.PAYOUT_API_URL = 'https://payouts.example.com/v1/'
    settings.PAYOUT_API_KEY = 'test-key'
    return settings


class TestInitiateTransfer:

    @patch('apps.finance.services.payout_gateway.requests.post')
    def test_accepted(self, mock_post, payout_settings):
        mock_post.return_value = _response(200, {'code': 202, 'transactionReference': 'ZP-1'})

        result = initiate_transfer(**TRANSFER)

        assert result['accepted'] is True
        assert result['transaction_reference'] == 'ZP-1'
        args, kwargs = mock_post.call_args
        assert args[0] == 'https://payouts.example.com/v1/transfers'
        assert kwargs['json']['use_contact'] == 'false'
        assert kwargs['headers']['Authorization'] == 'Bearer test-key'

    @patch('apps.finance.services.payout_gateway.requests.post')
    def test_ok_status_without_202_code_is_refused(self, mock_post, payout_settings):
        mock_post.return_value = _response(200, {'code': 400, 'message': 'Invalid msisdn'})

        result = initiate_transfer(**TRANSFER)

        assert result['accepted'] is False
        assert result['message'] == 'Invalid msisdn'

    @patch('apps.finance.services.payout_gateway.requests.post')
    def test_non_object_body_is_refused(self, mock_post, payout_settings):
        mock_post.return_value = _response(400, ['invalid msisdn'])

        result = initiate_transfer(**TRANSFER)

        assert result['accepted'] is False
        assert result['message'] == 'HTTP 400'
        assert result['response'] == {'raw': ['invalid msisdn']}

    @patch('apps.finance.services.payout_gateway.requests.post')
    def test_string_body_with_ok_status_is_refused(self, mock_post, payout_settings):
        mock_post.return_value = _response(200, 'queued')

        result = initiate_transfer(**TRANSFER)

        assert result['accepted'] is False
        assert result['response'] == {'raw': 'queued'}

    @patch('apps.finance.services.payout_gateway.requests.post')
    def test_network_error(self, mock_post, payout_settings):
        mock_post.side_effect = requests.exceptions.Timeout('timed out')

        result = initiate_transfer(**TRANSFER)

        assert result['accepted'] is False
        assert 'unreachable' in result['message']

    @patch('apps.finance.services.payout_gateway.requests.post')
    def test_not_configured(self, mock_post, settings):
        settings.PAYOUT_API_KEY = ''

        result = initiate_transfer(**TRANSFER)

        assert result['accepted'] is False
        mock_post.assert_not_called()
