"""
Exceptions for Almoxarife.

All errors are InventoryError with a structured code for programmatic handling.
Each error kind also has its own subclass so callers can catch by type.
"""

from decimal import Decimal
from typing import Any


class InventoryError(Exception):
    """
    Structured exception for inventory operations.

    Usage:
        try:
            inventory.post_stock_movement(produto.pk, lote.pk, 'exit', 10)
        except InventoryError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Só tem {e.available} no lote")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    code = 'INVENTORY_ERROR'

    _default_messages = {
        'INVENTORY_ERROR': 'Erro de estoque',
        'VALIDATION_ERROR': 'Dados inválidos',
        'INVALID_TRANSITION': 'Transição de status inválida',
        'INSUFFICIENT_STOCK': 'Quantidade insuficiente no lote',
        'INVALID_QUANTITY': 'Quantidade inválida (deve ser um inteiro positivo)',
        'CONCURRENT_MODIFICATION': 'Modificação concorrente detectada',
        'NOT_FOUND': 'Registro não encontrado',
        'ORDER_LOCKED': 'Ordem de compra não pode mais ser alterada',
    }

    def __init__(self, code: str | None = None, message: str | None = None, **data):
        if code is not None:
            self.code = code
        self.message = message or self._default_messages.get(self.code, self.code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.data:
            return f"[{self.code}] {self.message}"
        context = ', '.join(f"{k}={v}" for k, v in self.data.items())
        return f"[{self.code}] {self.message} ({context})"

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class ValidationError(InventoryError):
    """Missing or inconsistent input."""

    code = 'VALIDATION_ERROR'


class InvalidTransition(InventoryError):
    """Order status change not allowed by the transition table."""

    code = 'INVALID_TRANSITION'

    @property
    def current(self) -> str | None:
        return self.data.get('current')

    @property
    def target(self) -> str | None:
        return self.data.get('requested')


class InsufficientStock(InventoryError):
    """Delta would drive a lot below zero."""

    code = 'INSUFFICIENT_STOCK'


class InvalidQuantity(InventoryError):
    """Quantity is zero, negative or not an integer."""

    code = 'INVALID_QUANTITY'


class ConcurrentModification(InventoryError):
    """Lost the race to update an order or a lot. Reload and retry."""

    code = 'CONCURRENT_MODIFICATION'


class NotFound(InventoryError):
    """Referenced entity does not exist."""

    code = 'NOT_FOUND'
