"""
Inventory services — modular organization of inventory operations.

Re-exports all public classes so the facade can compose them:
    from almoxarife.services import OrderLifecycle, StockMovements, Reposition
"""

from almoxarife.services.guard import DeltaResult, StockGuard
from almoxarife.services.ledger import LedgerPoster
from almoxarife.services.movements import MovementResult, StockMovements
from almoxarife.services.orders import OrderLifecycle
from almoxarife.services.products import ProductCatalog
from almoxarife.services.queries import InventoryQueries
from almoxarife.services.reposition import ProductAlert, Reposition

__all__ = [
    'StockGuard',
    'DeltaResult',
    'LedgerPoster',
    'StockMovements',
    'MovementResult',
    'OrderLifecycle',
    'ProductCatalog',
    'InventoryQueries',
    'Reposition',
    'ProductAlert',
]
