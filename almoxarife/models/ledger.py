"""
LedgerEntry model — Immutable accounting record of stock movements.
"""

from datetime import date

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from almoxarife.models.enums import MovementKind


class LedgerEntry(models.Model):
    """
    Immutable record of a stock-affecting movement (movimentação contábil).

    Rules:
    - NEVER update() or delete()
    - Corrections are new entries in the opposite direction
    - total_value = quantity * unit_value (None when unit_value is None)

    Entries are written by LedgerPoster after StockGuard applied the delta.
    """

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
    )
    purchase_order = models.ForeignKey(
        'almoxarife.PurchaseOrder',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='ledger_entries',
        verbose_name=_('Ordem de Compra'),
    )

    date = models.DateField(default=date.today, db_index=True, verbose_name=_('Data da Movimentação'))
    kind = models.CharField(
        max_length=10,
        choices=MovementKind.choices,
        verbose_name=_('Tipo'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantidade'))
    unit_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Valor Unitário'),
    )
    total_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Valor Total'),
    )
    note = models.CharField(max_length=500, blank=True, default='', verbose_name=_('Observação'))

    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        verbose_name=_('Usuário'),
    )

    class Meta:
        verbose_name = _('Movimentação Contábil')
        verbose_name_plural = _('Movimentações Contábeis')
        ordering = ['timestamp', 'pk']
        indexes = [
            models.Index(fields=['product', 'date'], name='almox_ledger_prod_date_idx'),
        ]

    @property
    def signed_quantity(self) -> int:
        return self.quantity * MovementKind(self.kind).sign

    def save(self, *args, **kwargs):
        # Immutability check
        if self.pk:
            raise ValueError(
                "Movimentações são imutáveis. "
                "Para corrigir, registre uma nova movimentação inversa."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — ledger entries are immutable."""
        raise ValueError(
            "Movimentações são imutáveis. "
            "Para estornar, registre uma nova movimentação inversa."
        )

    def __str__(self) -> str:
        signal = '+' if self.kind == MovementKind.ENTRY else '-'
        return f"{signal}{self.quantity} {self.product} | {self.note}"
