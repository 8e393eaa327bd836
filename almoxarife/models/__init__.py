"""
Almoxarife Models.

Core models for inventory management:
- Warehouse / UnitOfMeasure: reference data
- Product: catalog entry with stock thresholds
- Lot: quantity-tracked batch of a product
- LedgerEntry: immutable ledger of stock movements
- PurchaseOrder / OrderItem: purchase lifecycle
"""

from almoxarife.models.enums import MovementKind, OrderStatus
from almoxarife.models.ledger import LedgerEntry
from almoxarife.models.lot import Lot
from almoxarife.models.order import OrderItem, PurchaseOrder
from almoxarife.models.product import Product
from almoxarife.models.warehouse import UnitOfMeasure, Warehouse

__all__ = [
    'OrderStatus',
    'MovementKind',
    'Warehouse',
    'UnitOfMeasure',
    'Product',
    'Lot',
    'LedgerEntry',
    'PurchaseOrder',
    'OrderItem',
]
