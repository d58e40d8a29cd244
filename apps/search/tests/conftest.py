from decimal import Decimal

import pytest

from apps.finance.models import PaymentRecord


@pytest.fixture
def kasese_supplier(make_supplier):
    return make_supplier(name='Kasese Highland Growers', origin='Kasese')


@pytest.fixture
def kasese_payment(kasese_supplier, make_coffee_record):
    record = make_coffee_record(
        supplier=kasese_supplier,
        status='inventory',
        price_per_kg=Decimal('7000.00'),
    )
    return PaymentRecord.objects.create(
        coffee_record=record,
        supplier=kasese_supplier,
        batch_number=record.batch_number,
        amount=Decimal('700000.00'),
    )


@pytest.fixture
def ai_settings(settings):
    settings.AI_GATEWAY_URL = 'https://ai.example.com/v1/chat/completions'
    settings.AI_GATEWAY_API_KEY = 'test-key'
    return settings


@pytest.fixture
def no_ai(settings):
    settings.AI_GATEWAY_API_KEY = ''
    return settings
