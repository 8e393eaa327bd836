"""
Stock movements — state-changing operations outside purchase orders.

All methods use transaction.atomic(); the lot write goes through StockGuard
and the ledger entry through LedgerPoster inside the same transaction.
"""

import logging
from dataclasses import dataclass

from django.db import transaction

from almoxarife.exceptions import InvalidQuantity, NotFound, ValidationError
from almoxarife.models.enums import MovementKind
from almoxarife.models.ledger import LedgerEntry
from almoxarife.models.lot import Lot
from almoxarife.services.guard import StockGuard, check_quantity
from almoxarife.services.ledger import LedgerPoster, to_kind

logger = logging.getLogger('almoxarife')


@dataclass(frozen=True)
class MovementResult:
    """Outcome of a posted movement."""

    entry: LedgerEntry
    previous_quantity: int
    new_quantity: int


class StockMovements:
    """State-changing stock movement methods."""

    @classmethod
    def post_stock_movement(cls, product_id, lot_id, kind, quantity: int,
                            unit_value=None, note: str = '', user=None) -> MovementResult:
        """
        Stock entry or exit against one lot.

        product_id may be a Product, an int or a numeric string.

        Raises:
            InvalidQuantity: If quantity is not a positive integer
            ValidationError: If kind is unknown or the lot belongs to
                another product
            NotFound: If the lot doesn't exist
            InsufficientStock: If an exit exceeds the lot quantity

        Concurrency:
            - Runs under transaction.atomic()
            - StockGuard locks the lot before checking
        """
        check_quantity(quantity)
        kind = to_kind(kind)
        product_id = getattr(product_id, 'pk', product_id)
        try:
            product_id = int(product_id)
        except (TypeError, ValueError):
            raise ValidationError(
                message=f"Produto inválido: {product_id!r}",
                product_id=str(product_id),
            )

        with transaction.atomic():
            try:
                lot = Lot.objects.select_related('product').get(pk=lot_id)
            except Lot.DoesNotExist:
                raise NotFound(entity='Lot', id=lot_id)

            if lot.product_id != product_id:
                raise ValidationError(
                    message="Lote não pertence ao produto",
                    lot_id=lot_id,
                    product_id=product_id,
                )

            result = StockGuard.apply_delta(lot, kind.sign * quantity)
            entry = LedgerPoster.post(
                lot.product,
                kind,
                quantity,
                unit_value,
                note=note,
                lot=lot,
                user=user,
            )

        logger.info(
            "inventory.movement.posted",
            extra={
                "product_id": product_id,
                "lot_id": lot_id,
                "kind": kind.value,
                "qty": quantity,
            },
        )
        return MovementResult(
            entry=entry,
            previous_quantity=result.previous,
            new_quantity=result.new,
        )

    @classmethod
    def adjust_lot(cls, lot_id, new_quantity: int, reason: str,
                   user=None) -> MovementResult | None:
        """
        Inventory count adjustment.

        Calculates delta automatically: new_quantity - lot.quantity
        and posts it as an ENTRY or EXIT without unit value.

        Returns:
            MovementResult, or None when the count matches.

        Raises:
            ValidationError: If reason is empty
            InvalidQuantity: If new_quantity is negative or not an integer
        """
        if not reason:
            raise ValidationError(message="Motivo é obrigatório", fields=['reason'])
        if isinstance(new_quantity, bool) or not isinstance(new_quantity, int) or new_quantity < 0:
            raise InvalidQuantity(
                message="Quantidade não pode ser negativa",
                requested=new_quantity,
            )

        with transaction.atomic():
            try:
                lot = Lot.objects.select_for_update().select_related('product').get(pk=lot_id)
            except Lot.DoesNotExist:
                raise NotFound(entity='Lot', id=lot_id)

            delta = new_quantity - lot.quantity
            if delta == 0:
                return None

            kind = MovementKind.ENTRY if delta > 0 else MovementKind.EXIT
            result = StockGuard.apply_delta(lot, delta)
            entry = LedgerPoster.post(
                lot.product,
                kind,
                abs(delta),
                note=f"Ajuste: {reason}",
                lot=lot,
                user=user,
            )

        logger.info(
            "inventory.adjust",
            extra={
                "lot_id": lot_id,
                "delta": delta,
                "reason": reason,
            },
        )
        return MovementResult(
            entry=entry,
            previous_quantity=result.previous,
            new_quantity=result.new,
        )
