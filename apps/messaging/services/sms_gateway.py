"""
Outbound SMS through the Infobip HTTP API.

Every attempt is written to ``SmsLog``. Provider failures never raise;
callers get ``False`` and the log row carries the reason.
"""

import logging

import requests
from django.conf import settings

from apps.messaging.models import SmsLog, SmsStatus

logger = logging.getLogger(__name__)


def normalize_phone(phone: str, country_code: str = None) -> str:
    """
    Put a phone number into international format without the plus sign.

    ``+256772...`` -> ``256772...``, ``0772...`` -> ``256772...``,
    ``772...`` -> ``256772...``. A number without digits gives ``''``.
    """
    country_code = country_code or settings.SMS_DEFAULT_COUNTRY_CODE
    digits = ''.join(ch for ch in (phone or '') if ch.isdigit())
    if not digits:
        return ''
    if digits.startswith('0'):
        return country_code + digits[1:]
    if not digits.startswith(country_code):
        return country_code + digits
    return digits


def send_sms(*, phone: str, message: str, message_type: str = 'general', triggered_by=None) -> bool:
    """
    Send one SMS and log the outcome.

    Returns:
        True if the provider accepted the message
    """
    recipient = normalize_phone(phone)
    log = SmsLog(
        recipient_phone=recipient,
        message=message,
        message_type=message_type,
        triggered_by=triggered_by,
    )

    if not recipient:
        logger.warning("SMS (%s) not sent: invalid phone number %r", message_type, phone)
        log.status = SmsStatus.FAILED
        log.failure_reason = 'Invalid phone number'
        log.save()
        return False

    if not settings.SMS_API_KEY:
        logger.warning("SMS_API_KEY not configured; SMS to %s not sent", recipient)
        log.status = SmsStatus.FAILED
        log.failure_reason = 'SMS provider not configured'
        log.save()
        return False

    payload = {
        'messages': [{
            'destinations': [{'to': recipient}],
            'from': settings.SMS_SENDER_ID,
            'text': message,
        }]
    }
    headers = {
        'Authorization': f'App {settings.SMS_API_KEY}',
        'Content-Type': 'application/json',
        'Accept': 'application/json',
    }

    try:
        response = requests.post(
            settings.SMS_API_URL,
            json=payload,
            headers=headers,
            timeout=settings.SMS_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error("SMS to %s failed: %s", recipient, e)
        log.status = SmsStatus.FAILED
        log.failure_reason = str(e)
        log.save()
        return False

    try:
        body = response.json()
    except ValueError:
        body = {'raw': response.text[:500]}
    if not isinstance(body, dict):
        body = {'raw': body}

    if response.ok:
        log.status = SmsStatus.SENT
        log.provider_response = body
        log.save()
        logger.info("SMS (%s) sent to %s", message_type, recipient)
        return True

    log.status = SmsStatus.FAILED
    log.provider_response = body
    log.failure_reason = f"HTTP {response.status_code}"
    log.save()
    logger.error("SMS to %s rejected with HTTP %s", recipient, response.status_code)
    return False
