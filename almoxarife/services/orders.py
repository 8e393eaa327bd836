"""
Purchase order lifecycle — create, transition, edit and delete orders.

All state-changing methods run under transaction.atomic(). Status writes
are a compare-and-swap on (pk, version, status), so two concurrent
transitions of the same order cannot both succeed.
"""

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from almoxarife.conf import almoxarife_settings
from almoxarife.exceptions import ConcurrentModification, InventoryError, NotFound, ValidationError
from almoxarife.lifecycle import INITIAL_STATUS, is_terminal, validate_transition
from almoxarife.models.enums import MovementKind, OrderStatus
from almoxarife.models.lot import Lot
from almoxarife.models.order import OrderItem, PurchaseOrder
from almoxarife.models.product import Product
from almoxarife.services.guard import StockGuard, check_quantity
from almoxarife.services.ledger import LedgerPoster, check_money, to_kind, to_money
from almoxarife.services.normalizer import normalize_new_order, validate_new_order

logger = logging.getLogger('almoxarife')

EDITABLE_ORDER_FIELDS = frozenset({
    'value', 'order_date', 'expected_date', 'delivery_date', 'supplier', 'notes',
})
NOT_NULL_ORDER_FIELDS = frozenset({'value', 'order_date', 'expected_date', 'delivery_date'})


def _resolve(model, ref):
    """Accept an instance or a primary key."""
    if ref is None or isinstance(ref, model):
        return ref
    try:
        return model.objects.get(pk=ref)
    except model.DoesNotExist:
        raise NotFound(entity=model.__name__, id=ref)


class OrderLifecycle:
    """Purchase order operations."""

    @classmethod
    def get_order(cls, order_id) -> PurchaseOrder:
        try:
            return PurchaseOrder.objects.get(pk=order_id)
        except PurchaseOrder.DoesNotExist:
            raise NotFound(entity='PurchaseOrder', id=order_id)

    @classmethod
    def orders_by_status(cls, status):
        """Orders in the given status, newest first."""
        try:
            status = OrderStatus(status)
        except ValueError:
            raise ValidationError(message=f"Status inválido: {status!r}", status=str(status))
        return PurchaseOrder.objects.filter(status=status)

    @classmethod
    def create_order(cls, items=(), order_date=None, expected_date=None, value=None,
                     delivery_date=None, supplier: str = '', notes: str = '') -> PurchaseOrder:
        """
        Create a purchase order in PEND with its items.

        Args:
            items: Iterable of dicts with keys product (instance or id),
                quantity, unit_price, and optionally lot and kind
            order_date, expected_date: Mandatory
            value: Defaults to 0.00
            delivery_date: Defaults to expected_date

        Raises:
            ValidationError: Missing mandatory field or inconsistent item
            InvalidQuantity: Item quantity is not a positive integer
            NotFound: Item references an unknown product or lot
        """
        order = PurchaseOrder(
            status=INITIAL_STATUS,
            value=check_money(to_money(value), 10, 'value'),
            order_date=order_date,
            expected_date=expected_date,
            delivery_date=delivery_date,
            supplier=supplier or '',
            notes=notes or '',
        )
        validate_new_order(order)
        lines = [cls._build_item(item) for item in items]
        normalize_new_order(order)

        with transaction.atomic():
            order.save()
            for line in lines:
                line.order = order
            OrderItem.objects.bulk_create(lines)

        logger.info(
            "inventory.order.created",
            extra={
                "order_id": order.pk,
                "items": len(lines),
                "value": str(order.value),
            },
        )
        return order

    @classmethod
    def add_order_item(cls, order_id, product, quantity: int, unit_price=0,
                       lot=None, kind=MovementKind.ENTRY) -> OrderItem:
        """
        Add a line to a PEND order. Items are fixed once the order leaves PEND.

        Raises:
            InventoryError('ORDER_LOCKED'): If the order is not PEND
        """
        with transaction.atomic():
            order = PurchaseOrder.objects.select_for_update().filter(pk=order_id).first()
            if order is None:
                raise NotFound(entity='PurchaseOrder', id=order_id)
            if order.status != OrderStatus.PEND:
                raise InventoryError(
                    'ORDER_LOCKED',
                    message="Itens só podem ser alterados em ordens pendentes",
                    order_id=order.pk,
                    status=order.status,
                )

            line = cls._build_item({
                'product': product,
                'quantity': quantity,
                'unit_price': unit_price,
                'lot': lot,
                'kind': kind,
            })
            line.order = order
            line.save()
            return line

    @classmethod
    def change_order_status(cls, order_id, target, user=None,
                            expected_version: int | None = None) -> PurchaseOrder:
        """
        Move an order to ``target``.

        Entering CONC receives every item: StockGuard.apply_delta() on the
        item's lot (a new lot is created when the item has none) and one
        LedgerPoster.post() per item, and delivery_date becomes today. Entering
        ANDA or CANC touches no stock.

        If anything fails, the status, lots and ledger stay as they were.

        Raises:
            NotFound: If the order doesn't exist
            InvalidTransition: If target is not reachable from the status
            InsufficientStock: If an EXIT item would drive its lot below zero
            ConcurrentModification: If the order changed since it was read
                (or its version differs from expected_version)
        """
        with transaction.atomic():
            order = cls.get_order(order_id)

            if expected_version is not None and order.version != expected_version:
                raise ConcurrentModification(
                    order_id=order.pk,
                    expected_version=expected_version,
                    current_version=order.version,
                )

            previous = order.status
            target = validate_transition(order.pk, previous, target)

            changes = {}
            if target == OrderStatus.CONC:
                cls._receive_items(order, user)
                changes['delivery_date'] = timezone.localdate()

            updated = PurchaseOrder.objects.filter(
                pk=order.pk, version=order.version, status=previous,
            ).update(
                status=target,
                version=F('version') + 1,
                updated_at=timezone.now(),
                **changes,
            )
            if not updated:
                raise ConcurrentModification(order_id=order.pk, expected_version=order.version)

            order.refresh_from_db()

        logger.info(
            "inventory.order.transition",
            extra={
                "order_id": order.pk,
                "from": previous,
                "to": target.value,
                "version": order.version,
            },
        )
        return order

    @classmethod
    def update_order(cls, order_id, **fields) -> PurchaseOrder:
        """
        Edit dates, value, supplier or notes of a non-terminal order.

        Status is never changed here (use change_order_status) and the
        creation defaults are not applied again.

        Raises:
            ValidationError: Unknown field or None for a mandatory field
            InventoryError('ORDER_LOCKED'): If the order is CONC or CANC
        """
        unknown = set(fields) - EDITABLE_ORDER_FIELDS
        if unknown:
            raise ValidationError(
                message=f"Campos não editáveis: {', '.join(sorted(unknown))}",
                fields=sorted(unknown),
            )
        nulls = sorted(k for k, v in fields.items() if k in NOT_NULL_ORDER_FIELDS and v is None)
        if nulls:
            raise ValidationError(
                message=f"Campos obrigatórios ausentes: {', '.join(nulls)}",
                fields=nulls,
            )
        if 'value' in fields:
            fields['value'] = check_money(to_money(fields['value']), 10, 'value')

        with transaction.atomic():
            order = cls.get_order(order_id)
            if is_terminal(order.status):
                raise InventoryError('ORDER_LOCKED', order_id=order.pk, status=order.status)

            updated = PurchaseOrder.objects.filter(
                pk=order.pk, version=order.version,
            ).update(
                version=F('version') + 1,
                updated_at=timezone.now(),
                **fields,
            )
            if not updated:
                raise ConcurrentModification(order_id=order.pk, expected_version=order.version)
            order.refresh_from_db()

        logger.info(
            "inventory.order.updated",
            extra={"order_id": order.pk, "fields": sorted(fields)},
        )
        return order

    @classmethod
    def delete_order(cls, order_id) -> None:
        """
        Delete a PEND order and its items.

        Raises:
            InventoryError('ORDER_LOCKED'): If the order left PEND
        """
        with transaction.atomic():
            order = PurchaseOrder.objects.select_for_update().filter(pk=order_id).first()
            if order is None:
                raise NotFound(entity='PurchaseOrder', id=order_id)
            if order.status != OrderStatus.PEND:
                raise InventoryError(
                    'ORDER_LOCKED',
                    message="Só é possível remover ordens pendentes",
                    order_id=order.pk,
                    status=order.status,
                )
            order.delete()

        logger.info("inventory.order.deleted", extra={"order_id": order_id})

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _build_item(cls, data: dict) -> OrderItem:
        """Validate one item dict and return an unsaved OrderItem."""
        if 'product' not in data:
            raise ValidationError(message="Produto é obrigatório", fields=['product'])

        product = _resolve(Product, data['product'])
        quantity = check_quantity(data.get('quantity'))
        unit_price = check_money(to_money(data.get('unit_price') or 0), 10, 'unit_price')
        if unit_price < 0:
            raise ValidationError(message="Valor unitário não pode ser negativo", unit_price=str(unit_price))
        kind = to_kind(data.get('kind', MovementKind.ENTRY))
        lot = _resolve(Lot, data.get('lot'))

        if lot is not None and lot.product_id != product.pk:
            raise ValidationError(
                message="Lote não pertence ao produto",
                lot_id=lot.pk,
                product_id=product.pk,
            )
        if kind == MovementKind.EXIT and lot is None:
            raise ValidationError(message="Devolução exige um lote", product_id=product.pk)

        return OrderItem(
            product=product,
            lot=lot,
            kind=kind,
            quantity=quantity,
            unit_price=unit_price,
        )

    @classmethod
    def _receive_items(cls, order: PurchaseOrder, user=None) -> None:
        """Guarded stock delta + ledger entry for each item. Caller holds the transaction."""
        note = almoxarife_settings.ORDER_NOTE_TEMPLATE.format(order_id=order.pk)
        prefix = almoxarife_settings.RECEIPT_LOT_PREFIX

        for item in order.items.select_related('product', 'lot'):
            kind = MovementKind(item.kind)
            lot = item.lot
            if lot is None:
                if kind == MovementKind.EXIT:
                    raise ValidationError(message="Devolução exige um lote", item_id=item.pk)
                lot = Lot.objects.create(
                    product=item.product,
                    code=f"{prefix}{order.pk}-{item.pk}",
                    purchase_order=order,
                )
                item.lot = lot
                item.save(update_fields=['lot'])

            StockGuard.apply_delta(lot, kind.sign * item.quantity)
            LedgerPoster.post(
                item.product,
                kind,
                item.quantity,
                item.unit_price,
                note=note,
                lot=lot,
                order=order,
                user=user,
            )
