from unittest.mock import MagicMock, patch

import pytest
import requests

from apps.search.services.ai_gateway import chat_completion, strip_code_fences
from apps.search.services.exceptions import AIGatewayError, AIRateLimitError

MESSAGES = [{'role': 'user', 'content': 'hi'}]


def _response(status_code, body=None):
    response = MagicMock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.json.return_value = body or {}
    return response


class TestStripCodeFences:

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_text_untouched(self):
        assert strip_code_fences(' {"a": 1} ') == '{"a": 1}'


class TestChatCompletion:

    @patch('apps.search.services.ai_gateway.requests.post')
    def test_returns_first_choice(self, mock_post, ai_settings):
        mock_post.return_value = _response(200, {'choices': [{'message': {'content': '{}'}}]})

        assert chat_completion(messages=MESSAGES) == '{}'
        args, kwargs = mock_post.call_args
        assert args[0] == 'https://ai.example.com/v1/chat/completions'
        assert kwargs['headers']['Authorization'] == 'Bearer test-key'
        assert kwargs['json']['model'] == ai_settings.AI_GATEWAY_MODEL

    @patch('apps.search.services.ai_gateway.requests.post')
    def test_rate_limit(self, mock_post, ai_settings):
        mock_post.return_value = _response(429)

        with pytest.raises(AIRateLimitError):
            chat_completion(messages=MESSAGES)

    @patch('apps.search.services.ai_gateway.requests.post')
    def test_server_error(self, mock_post, ai_settings):
        mock_post.return_value = _response(500)

        with pytest.raises(AIGatewayError):
            chat_completion(messages=MESSAGES)

    @patch('apps.search.services.ai_gateway.requests.post')
    def test_network_error(self, mock_post, ai_settings):
        mock_post.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(AIGatewayError):
            chat_completion(messages=MESSAGES)
