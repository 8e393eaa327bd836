"""
Lot model — quantity-tracked batch of a product.
"""

from datetime import date, timedelta

from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class LotQuerySet(models.QuerySet):
    """Custom QuerySet for Lot with convenience filters."""

    def for_product(self, product):
        """Filter lots for a product (instance or id)."""
        product_id = getattr(product, 'pk', product)
        return self.filter(product_id=product_id)

    def in_stock(self):
        """Lots with remaining quantity."""
        return self.filter(quantity__gt=0)

    def expiring_before(self, limit: date):
        """Lots expiring on or before the given date."""
        return self.filter(expiry_date__lte=limit, expiry_date__isnull=False)

    def expired(self):
        """Lots past their expiry date."""
        return self.filter(expiry_date__lt=date.today())

    def expiring_within(self, days: int):
        """Lots still valid today that expire within ``days`` days."""
        today = date.today()
        return self.filter(
            expiry_date__gte=today,
            expiry_date__lte=today + timedelta(days=days),
        )


class Lot(models.Model):
    """
    Quantity of a product received as one batch.

    Rules:
    - quantity is never negative (checked by StockGuard, enforced by the DB)
    - quantity only changes through StockGuard.apply_delta()
    - product is an id reference; Product has no reverse accessor to lots
    """

    product = models.ForeignKey(
        'almoxarife.Product',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Produto'),
    )
    code = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Código do Lote'),
    )
    quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Quantidade'),
    )

    manufacture_date = models.DateField(
        null=True,
        blank=True,
        verbose_name=_('Data de Fabricação'),
    )
    expiry_date = models.DateField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Data de Validade'),
    )
    received_at = models.DateTimeField(
        default=timezone.now,
        verbose_name=_('Recebido em'),
    )
    purchase_order = models.ForeignKey(
        'almoxarife.PurchaseOrder',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='lots',
        verbose_name=_('Ordem de Compra'),
    )

    updated_at = models.DateTimeField(auto_now=True)

    objects = LotQuerySet.as_manager()

    class Meta:
        verbose_name = _('Lote')
        verbose_name_plural = _('Lotes')
        ordering = ['expiry_date', 'received_at']
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name='lot_quantity_non_negative',
            ),
        ]
        indexes = [
            models.Index(fields=['product', 'expiry_date'], name='almox_lot_prod_expiry_idx'),
        ]

    @property
    def is_expired(self) -> bool:
        """Is this lot past its expiry date?"""
        if self.expiry_date is None:
            return False
        return date.today() > self.expiry_date

    def __str__(self) -> str:
        label = self.code or f"#{self.pk}"
        expiry = f" (val:{self.expiry_date})" if self.expiry_date else ""
        return f"Lote {label}{expiry}: {self.quantity}"
