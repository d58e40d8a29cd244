import logging
from datetime import date as date_type
from decimal import Decimal
from typing import Optional

from django.utils import timezone

from apps.accounts.models import User
from apps.sales.models import SalesTransaction

from .exceptions import InvalidSaleError

logger = logging.getLogger(__name__)


def record_sale(
    *,
    customer: str,
    coffee_type: str,
    weight: Decimal,
    unit_price: Decimal,
    sale_date: Optional[date_type] = None,
    truck_details: str = '',
    driver_details: str = '',
    recorded_by: User = None,
) -> SalesTransaction:
    """
    Record an outgoing sale. The total is weight * unit_price.

    Raises:
        InvalidSaleError: If the customer is blank or weight/price are not positive
    """
    customer = (customer or '').strip()
    if not customer:
        raise InvalidSaleError("Customer is required")
    if weight is None or weight <= 0:
        raise InvalidSaleError("Weight must be greater than zero")
    if unit_price is None or unit_price <= 0:
        raise InvalidSaleError("Unit price must be greater than zero")

    sale = SalesTransaction.objects.create(
        date=sale_date or timezone.localdate(),
        customer=customer,
        coffee_type=coffee_type,
        weight=weight,
        unit_price=unit_price,
        total_amount=(weight * unit_price).quantize(Decimal('0.01')),
        truck_details=truck_details,
        driver_details=driver_details,
        recorded_by=recorded_by,
    )
    logger.info("Sale of %skg to %s recorded", weight, customer)
    return sale
