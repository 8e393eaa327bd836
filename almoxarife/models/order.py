"""
PurchaseOrder and OrderItem models.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _

from almoxarife.models.enums import MovementKind, OrderStatus


class PurchaseOrder(models.Model):
    """
    Purchase order (ordem de compra).

    LIFECYCLE:

        PEND ──► ANDA ──► CONC
          │        │
          └────────┴────► CANC

    - status only changes through inventory.change_order_status()
    - value and delivery_date are filled by normalize_new_order() before
      the first save when the caller leaves them out
    - version is bumped on every status change (optimistic locking)
    """

    status = models.CharField(
        max_length=4,
        choices=OrderStatus.choices,
        default=OrderStatus.PEND,
        db_index=True,
        verbose_name=_('Status'),
    )
    value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        verbose_name=_('Valor'),
    )
    order_date = models.DateField(verbose_name=_('Data da Ordem'))
    expected_date = models.DateField(verbose_name=_('Data Prevista'))
    delivery_date = models.DateField(blank=True, verbose_name=_('Data de Entrega'))

    supplier = models.CharField(max_length=200, blank=True, default='', verbose_name=_('Fornecedor'))
    notes = models.TextField(blank=True, default='', verbose_name=_('Observações'))

    version = models.PositiveIntegerField(default=0, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Ordem de Compra')
        verbose_name_plural = _('Ordens de Compra')
        ordering = ['-order_date', '-pk']

    @property
    def is_terminal(self) -> bool:
        from almoxarife.lifecycle import is_terminal
        return is_terminal(self.status)

    @property
    def items_total(self) -> Decimal:
        """Sum of item quantity * unit_price (informational)."""
        return sum(
            (item.total for item in self.items.all()),
            Decimal('0.00'),
        )

    def __str__(self) -> str:
        return f"OC #{self.pk} [{self.status}]"


class OrderItem(models.Model):
    """
    Line of a purchase order. Deleted together with its order.

    kind=ENTRY lines are received into stock when the order completes;
    kind=EXIT lines are returns to the supplier and need an existing lot.
    """

    order = models.ForeignKey(
        PurchaseOrder,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('Ordem de Compra'),
    )
    product = models.ForeignKey(
        'almoxarife.Product',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Produto'),
    )
    lot = models.ForeignKey(
        'almoxarife.Lot',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Lote'),
        help_text=_('Vazio = um lote novo é criado no recebimento'),
    )
    kind = models.CharField(
        max_length=10,
        choices=MovementKind.choices,
        default=MovementKind.ENTRY,
        verbose_name=_('Tipo'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantidade'))
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name=_('Valor Unitário'),
    )

    class Meta:
        verbose_name = _('Item da Ordem de Compra')
        verbose_name_plural = _('Itens da Ordem de Compra')
        ordering = ['pk']

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product} @ {self.unit_price}"
