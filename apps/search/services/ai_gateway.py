"""
Client for the OpenAI-compatible chat-completions gateway.
"""

import logging
import re

import requests
from django.conf import settings

from .exceptions import AIGatewayError, AIRateLimitError

logger = logging.getLogger(__name__)

CODE_FENCE_RE = re.compile(r'```(?:json)?\s*')


def is_configured() -> bool:
    return bool(settings.AI_GATEWAY_URL and settings.AI_GATEWAY_API_KEY)


def strip_code_fences(content: str) -> str:
    """Remove markdown code fences models like to wrap JSON in."""
    return CODE_FENCE_RE.sub('', content or '').strip()


def chat_completion(*, messages: list, temperature: float = 0.3) -> str:
    """
    Send one chat-completion request and return the first choice's text.

    Raises:
        AIRateLimitError: On HTTP 429
        AIGatewayError: On network errors or any other non-2xx answer
    """
    headers = {
        'Authorization': f'Bearer {settings.AI_GATEWAY_API_KEY}',
        'Content-Type': 'application/json',
    }
    payload = {
        'model': settings.AI_GATEWAY_MODEL,
        'messages': messages,
        'temperature': temperature,
    }

    try:
        response = requests.post(
            settings.AI_GATEWAY_URL,
            json=payload,
            headers=headers,
            timeout=settings.AI_GATEWAY_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error("AI gateway request failed: %s", e)
        raise AIGatewayError(f"AI gateway unreachable: {e}")

    if response.status_code == 429:
        logger.warning("AI gateway rate limited")
        raise AIRateLimitError("AI gateway rate limit exceeded")
    if not response.ok:
        logger.error("AI gateway error: HTTP %s", response.status_code)
        raise AIGatewayError(f"AI gateway error: {response.status_code}")

    try:
        body = response.json()
        return body['choices'][0]['message']['content'] or ''
    except (ValueError, KeyError, IndexError, TypeError):
        logger.error("AI gateway returned an unexpected body")
        return ''
