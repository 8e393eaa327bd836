"""
Reposition — low-stock and reorder-point evaluation.

Usage:
    from almoxarife import inventory

    for alert in inventory.evaluate_reposition():
        print(alert.product, alert.on_hand, alert.low_stock)

Read-only: nothing is written while evaluating.
"""

import logging
from dataclasses import dataclass

from django.db.models import F, Q

from almoxarife.models.product import Product

logger = logging.getLogger('almoxarife')


@dataclass(frozen=True)
class ProductAlert:
    """A product at or below one of its thresholds."""

    product: Product
    on_hand: int
    low_stock: bool
    needs_reposition: bool

    @property
    def shortfall(self) -> int:
        """Units missing to get back to stock_max."""
        return max(self.product.stock_max - self.on_hand, 0)


def classify(product: Product, on_hand: int) -> ProductAlert | None:
    """
    Compare on_hand against the product thresholds.

    low_stock: on_hand <= stock_min
    needs_reposition: on_hand <= reorder_point

    Returns None when neither applies.
    """
    low = on_hand <= product.stock_min
    reorder = on_hand <= product.reorder_point
    if not (low or reorder):
        return None
    return ProductAlert(product=product, on_hand=on_hand, low_stock=low, needs_reposition=reorder)


class RepositionScan:
    """
    Restartable, lazily evaluated sequence of ProductAlert.

    Each iteration runs the query again, so it always reflects the current
    lots. Ordered by ascending on_hand, then product id.
    """

    def __init__(self, low_only: bool = False, warehouse=None):
        self.low_only = low_only
        self.warehouse = warehouse

    def queryset(self):
        qs = Product.objects.with_on_hand()
        if self.warehouse is not None:
            qs = qs.filter(warehouse=self.warehouse)
        if self.low_only:
            qs = qs.filter(on_hand__lte=F('stock_min'))
        else:
            qs = qs.filter(Q(on_hand__lte=F('stock_min')) | Q(on_hand__lte=F('reorder_point')))
        return qs.order_by('on_hand', 'pk')

    def __iter__(self):
        for product in self.queryset().iterator():
            alert = classify(product, product.on_hand)
            if alert is None:
                continue
            if alert.low_stock:
                logger.warning(
                    "inventory.reposition.low_stock",
                    extra={
                        "product_id": product.pk,
                        "stock_min": product.stock_min,
                        "on_hand": product.on_hand,
                    },
                )
            yield alert


class Reposition:
    """Reposition queries."""

    @classmethod
    def evaluate_reposition(cls, low_only: bool = False, warehouse=None) -> RepositionScan:
        """Products at or below stock_min or reorder_point."""
        return RepositionScan(low_only=low_only, warehouse=warehouse)
