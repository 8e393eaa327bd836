"""
Inventory Service — The single public interface for all inventory operations.

Usage:
    from almoxarife import inventory, InventoryError

    order = inventory.create_order(items, order_date=hoje, expected_date=sexta)
    inventory.change_order_status(order.pk, 'ANDA')
    inventory.change_order_status(order.pk, 'CONC')   # receives the items
    inventory.post_stock_movement(produto.pk, lote.pk, 'exit', 5)
    list(inventory.evaluate_reposition())
"""

from almoxarife.services import (
    InventoryQueries,
    OrderLifecycle,
    ProductCatalog,
    Reposition,
    StockMovements,
)


class Inventory(OrderLifecycle, StockMovements, ProductCatalog, Reposition, InventoryQueries):
    """
    Single interface for all inventory operations.

    IMPORTANT: All state-changing methods use atomic transactions
    with appropriate locking. See each method's docstring.
    """
