"""
Inventory queries — read-only operations.

All methods are classmethods on Inventory and use no locking.
"""

from datetime import date
from decimal import Decimal

from django.db.models import DecimalField, IntegerField, Sum
from django.db.models.functions import Coalesce

from almoxarife.conf import almoxarife_settings
from almoxarife.exceptions import ValidationError
from almoxarife.models.ledger import LedgerEntry
from almoxarife.models.lot import Lot


class InventoryQueries:
    """Read-only inventory query methods."""

    @classmethod
    def on_hand(cls, product) -> int:
        """Sum of lot quantities for a product (instance or id)."""
        return Lot.objects.for_product(product).aggregate(
            t=Coalesce(Sum('quantity'), 0, output_field=IntegerField())
        )['t']

    @classmethod
    def lots_for_product(cls, product, include_empty: bool = False):
        """Lots of a product, earliest expiry first."""
        qs = Lot.objects.for_product(product)
        if not include_empty:
            qs = qs.in_stock()
        return qs

    @classmethod
    def expired_lots(cls, include_empty: bool = False):
        """Lots past their expiry date."""
        qs = Lot.objects.expired()
        if not include_empty:
            qs = qs.in_stock()
        return qs

    @classmethod
    def lots_expiring(cls, days: int | None = None, include_empty: bool = False):
        """
        Lots expiring within ``days`` (default: EXPIRY_WARNING_DAYS).

        Already expired lots are not included; see expired_lots().
        """
        if days is None:
            days = almoxarife_settings.EXPIRY_WARNING_DAYS
        if days < 0:
            raise ValidationError(message="Dias deve ser positivo", days=days)
        qs = Lot.objects.expiring_within(days)
        if not include_empty:
            qs = qs.in_stock()
        return qs

    @classmethod
    def ledger_for_product(cls, product):
        """Ledger entries of a product, oldest first."""
        product_id = getattr(product, 'pk', product)
        return LedgerEntry.objects.filter(product_id=product_id)

    @classmethod
    def ledger_between(cls, start: date, end: date):
        """Ledger entries dated between start and end (inclusive)."""
        if start > end:
            raise ValidationError(
                message="Data inicial não pode ser posterior à data final",
                start=start,
                end=end,
            )
        return LedgerEntry.objects.filter(date__range=(start, end))

    @classmethod
    def ledger_total_between(cls, start: date, end: date) -> Decimal:
        """Sum of total_value in the period (entries without value count as 0)."""
        return cls.ledger_between(start, end).aggregate(
            t=Coalesce(
                Sum('total_value'),
                Decimal('0.00'),
                output_field=DecimalField(max_digits=14, decimal_places=2),
            )
        )['t']
