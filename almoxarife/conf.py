"""
Almoxarife configuration.

Usage in settings.py:
    ALMOXARIFE = {
        "EXPIRY_WARNING_DAYS": 30,
        "ENFORCE_THRESHOLDS": True,
        "RECEIPT_LOT_PREFIX": "OC",
        "ORDER_NOTE_TEMPLATE": "Ordem de compra #{order_id}",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class AlmoxarifeSettings:
    """Almoxarife configuration settings."""

    # Window (days) used by lots_expiring() when no explicit value is given
    EXPIRY_WARNING_DAYS: int = 30

    # Reject products where stock_min <= reorder_point <= stock_max fails
    ENFORCE_THRESHOLDS: bool = True

    # Prefix for lots created when a purchase order item has no lot
    RECEIPT_LOT_PREFIX: str = "OC"

    # Note written on ledger entries posted by order completion
    ORDER_NOTE_TEMPLATE: str = "Ordem de compra #{order_id}"


def get_almoxarife_settings() -> AlmoxarifeSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "ALMOXARIFE", {})
    return AlmoxarifeSettings(**{
        k: v for k, v in user_settings.items()
        if k in AlmoxarifeSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_almoxarife_settings(), name)


almoxarife_settings = _LazySettings()
