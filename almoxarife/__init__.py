"""
Almoxarife — Purchase orders, lots and stock ledger.

Uso:
    from almoxarife import inventory, InventoryError

    ordem = inventory.create_order(itens, order_date=hoje, expected_date=sexta)
    inventory.change_order_status(ordem.pk, 'ANDA')
    inventory.change_order_status(ordem.pk, 'CONC')
    inventory.evaluate_reposition()
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from almoxarife.service import Inventory
        return Inventory
    elif name == 'InventoryError':
        from almoxarife.exceptions import InventoryError
        return InventoryError
    elif name == 'Product':
        from almoxarife.models.product import Product
        return Product
    elif name == 'Lot':
        from almoxarife.models.lot import Lot
        return Lot
    elif name == 'LedgerEntry':
        from almoxarife.models.ledger import LedgerEntry
        return LedgerEntry
    elif name == 'PurchaseOrder':
        from almoxarife.models.order import PurchaseOrder
        return PurchaseOrder
    elif name == 'OrderStatus':
        from almoxarife.models.enums import OrderStatus
        return OrderStatus
    elif name == 'MovementKind':
        from almoxarife.models.enums import MovementKind
        return MovementKind
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'InventoryError',
    'Product',
    'Lot',
    'LedgerEntry',
    'PurchaseOrder',
    'OrderStatus',
    'MovementKind',
]

__version__ = '0.1.0'
