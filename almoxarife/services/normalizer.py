"""
Order defaults — applied once, before a purchase order is first saved.
"""

from decimal import Decimal

from almoxarife.exceptions import ValidationError

REQUIRED_ORDER_FIELDS = ('order_date', 'expected_date')


def validate_new_order(order) -> None:
    """Raise ValidationError listing every missing mandatory field."""
    missing = [name for name in REQUIRED_ORDER_FIELDS if getattr(order, name) is None]
    if missing:
        raise ValidationError(
            message=f"Campos obrigatórios ausentes: {', '.join(missing)}",
            fields=missing,
        )


def normalize_new_order(order) -> bool:
    """
    Fill value and delivery_date on an unsaved order.

    - value unset → 0.00
    - delivery_date unset → expected_date

    Orders that already have a primary key are left alone.

    Returns:
        True if the order was normalized, False if it was already persisted.
    """
    if order.pk is not None:
        return False
    if order.value is None:
        order.value = Decimal('0.00')
    if order.delivery_date is None:
        order.delivery_date = order.expected_date
    return True
