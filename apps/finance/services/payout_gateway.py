"""
Mobile-money payout client.

Posts transfers to the Zengapay-compatible ``/transfers`` endpoint. The
gateway accepts a transfer when the HTTP call succeeds and the body carries
``code == 202``.
"""

import logging
from decimal import Decimal

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


def initiate_transfer(*, msisdn: str, amount: Decimal, external_reference: str, narration: str) -> dict:
    """
    Ask the gateway to send money to a phone number.

    Never raises for gateway failures.

    Returns:
        Dict with ``accepted``, ``transaction_reference``, ``message`` and
        the raw ``response`` body
    """
    if not settings.PAYOUT_API_KEY:
        logger.warning("PAYOUT_API_KEY not configured; transfer %s not sent", external_reference)
        return {
            'accepted': False,
            'transaction_reference': '',
            'message': 'Payout gateway not configured',
            'response': {},
        }

    payload = {
        'msisdn': msisdn,
        'amount': str(amount),
        'external_reference': external_reference,
        'narration': narration,
        'use_contact': 'false',
    }
    headers = {
        'Authorization': f'Bearer {settings.PAYOUT_API_KEY}',
        'Content-Type': 'application/json',
    }
    url = f"{settings.PAYOUT_API_URL.rstrip('/')}/transfers"

    logger.info("Initiating transfer %s of %s to %s", external_reference, amount, msisdn)
    try:
        response = requests.post(url, json=payload, headers=headers, timeout=settings.PAYOUT_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logger.error("Transfer %s failed: %s", external_reference, e)
        return {
            'accepted': False,
            'transaction_reference': '',
            'message': f'Payout gateway unreachable: {e}',
            'response': {},
        }

    try:
        body = response.json()
    except ValueError:
        body = {'raw': response.text[:500]}
    if not isinstance(body, dict):
        body = {'raw': body}

    if response.ok and body.get('code') == 202:
        return {
            'accepted': True,
            'transaction_reference': body.get('transactionReference', ''),
            'message': body.get('message', 'Transfer accepted'),
            'response': body,
        }

    message = body.get('message') or body.get('error') or f'HTTP {response.status_code}'
    logger.error("Transfer %s rejected: %s", external_reference, message)
    return {
        'accepted': False,
        'transaction_reference': '',
        'message': str(message),
        'response': body,
    }
