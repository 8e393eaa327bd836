"""
Ledger poster — append-only writes to LedgerEntry.

The poster does not look at stock levels. Callers run StockGuard first,
inside the same transaction, so both succeed or fail together.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from almoxarife.exceptions import ValidationError
from almoxarife.models.enums import MovementKind
from almoxarife.models.ledger import LedgerEntry
from almoxarife.services.guard import check_quantity

logger = logging.getLogger('almoxarife')

CENTS = Decimal('0.01')


def to_money(value) -> Decimal | None:
    """Coerce to a 2-place Decimal (half-up). None stays None."""
    if value is None:
        return None
    try:
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise ValidationError(message=f"Valor monetário inválido: {value!r}", value=str(value))


def check_money(value: Decimal | None, max_digits: int, field: str) -> Decimal | None:
    """Reject values that don't fit a DecimalField(max_digits, decimal_places=2)."""
    if value is not None and abs(value) >= Decimal(10) ** (max_digits - 2):
        raise ValidationError(
            message=f"Valor excede o limite do campo {field}",
            field=field,
            value=str(value),
        )
    return value


def compute_total(quantity: int, unit_value: Decimal | None) -> Decimal | None:
    """quantity * unit_value, or None when there is no unit value."""
    if unit_value is None:
        return None
    return (unit_value * quantity).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_kind(kind) -> MovementKind:
    try:
        return MovementKind(kind)
    except ValueError:
        raise ValidationError(
            message=f"Tipo de movimentação inválido: {kind!r}",
            kind=str(kind),
        )


class LedgerPoster:
    """Appends immutable ledger entries."""

    @classmethod
    def post(cls, product, kind, quantity: int, unit_value=None, note: str = '',
             lot=None, order=None, user=None) -> LedgerEntry:
        """
        Append a ledger entry.

        Args:
            product: Product instance
            kind: MovementKind (or its value)
            quantity: Positive integer
            unit_value: Optional monetary value (rounded to 2 places)
            note: Free text
            lot, order, user: Optional references

        Returns:
            The created LedgerEntry (total_value = quantity * unit_value)

        Raises:
            InvalidQuantity: If quantity is not a positive integer
            ValidationError: If kind or unit_value is invalid, or a value
                exceeds its column (10 digits unit, 12 digits total)
        """
        check_quantity(quantity)
        kind = to_kind(kind)
        unit_value = check_money(to_money(unit_value), 10, 'unit_value')
        total_value = check_money(compute_total(quantity, unit_value), 12, 'total_value')

        entry = LedgerEntry.objects.create(
            product=product,
            lot=lot,
            purchase_order=order,
            kind=kind,
            quantity=quantity,
            unit_value=unit_value,
            total_value=total_value,
            note=note or '',
            user=user,
        )
        logger.info(
            "inventory.ledger.posted",
            extra={
                "entry_id": entry.pk,
                "product_id": product.pk,
                "kind": kind.value,
                "qty": quantity,
                "total": str(entry.total_value),
            },
        )
        return entry
