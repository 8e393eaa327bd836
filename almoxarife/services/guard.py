"""
Stock quantity guard — the only code path that changes Lot.quantity.

Usage:
    result = StockGuard.apply_delta(lot, -5)
    result.previous, result.new
"""

import logging
from dataclasses import dataclass

from django.db import transaction
from django.utils import timezone

from almoxarife.exceptions import ConcurrentModification, InsufficientStock, InvalidQuantity, NotFound
from almoxarife.models.lot import Lot

logger = logging.getLogger('almoxarife')

# Largest value every supported database accepts in a PositiveIntegerField
MAX_QUANTITY = 2147483647


@dataclass(frozen=True)
class DeltaResult:
    """Quantities before and after a guarded delta."""

    lot_id: int
    previous: int
    new: int

    @property
    def delta(self) -> int:
        return self.new - self.previous


def check_quantity(quantity, allow_negative: bool = False) -> int:
    """
    Reject non-integer and zero quantities (and negative ones unless allowed).

    bool is refused even though it is an int subclass. Magnitudes above
    MAX_QUANTITY don't fit a PositiveIntegerField column.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(requested=quantity)
    if quantity == 0 or (quantity < 0 and not allow_negative):
        raise InvalidQuantity(requested=quantity)
    if abs(quantity) > MAX_QUANTITY:
        raise InvalidQuantity(requested=quantity, maximum=MAX_QUANTITY)
    return quantity


class StockGuard:
    """Validate-then-apply for signed lot deltas."""

    @classmethod
    def apply_delta(cls, lot: Lot, signed_quantity: int) -> DeltaResult:
        """
        Apply ``signed_quantity`` to the lot, all-or-nothing.

        new = lot.quantity + signed_quantity

        Raises:
            InvalidQuantity: If signed_quantity is zero or not an integer,
                or the result exceeds MAX_QUANTITY
            InsufficientStock: If new < 0 (nothing is written)
            ConcurrentModification: If the stored quantity changed between
                read and write
            NotFound: If the lot no longer exists

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on Lot
            - Writes with a compare-and-swap on the locked quantity
        """
        check_quantity(signed_quantity, allow_negative=True)

        with transaction.atomic():
            try:
                locked = Lot.objects.select_for_update().get(pk=lot.pk)
            except Lot.DoesNotExist:
                raise NotFound(entity='Lot', id=lot.pk)

            previous = locked.quantity
            new = previous + signed_quantity

            if new < 0:
                logger.warning(
                    "inventory.guard.rejected",
                    extra={
                        "lot_id": lot.pk,
                        "available": previous,
                        "delta": signed_quantity,
                    },
                )
                raise InsufficientStock(
                    lot_id=lot.pk,
                    product_id=locked.product_id,
                    available=previous,
                    requested=-signed_quantity,
                )
            if new > MAX_QUANTITY:
                raise InvalidQuantity(lot_id=lot.pk, available=previous, requested=signed_quantity,
                                      maximum=MAX_QUANTITY)

            updated = Lot.objects.filter(pk=lot.pk, quantity=previous).update(
                quantity=new,
                updated_at=timezone.now(),
            )
            if not updated:
                raise ConcurrentModification(lot_id=lot.pk, expected=previous)

            lot.quantity = new
            logger.info(
                "inventory.guard.applied",
                extra={
                    "lot_id": lot.pk,
                    "previous": previous,
                    "new": new,
                },
            )
            return DeltaResult(lot_id=lot.pk, previous=previous, new=new)
