"""
Product model — catalog entry with stock thresholds.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ProductQuerySet(models.QuerySet):
    """Custom QuerySet for Product with stock aggregation."""

    def with_on_hand(self):
        """
        Annotate ``on_hand``: sum of the product's lot quantities (0 if none).

        Lots are looked up by product id; Product keeps no lot collection.
        """
        from django.db.models import OuterRef, Subquery, Sum
        from django.db.models.functions import Coalesce

        from almoxarife.models.lot import Lot

        totals = (
            Lot.objects.filter(product=OuterRef('pk'))
            .order_by()
            .values('product')
            .annotate(t=Sum('quantity'))
            .values('t')
        )
        return self.annotate(
            on_hand=Coalesce(Subquery(totals, output_field=models.IntegerField()), 0)
        )


class Product(models.Model):
    """
    Stockable product.

    Thresholds:
    - stock_min: hard minimum, at or below it the product is "low stock"
    - reorder_point: at or below it a new purchase should be placed
    - stock_max: ceiling used when sizing purchases

    stock_min <= reorder_point <= stock_max is checked by
    inventory.register_product() / update_product(), not by save().
    """

    name = models.CharField(
        max_length=200,
        verbose_name=_('Nome'),
    )
    description = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Descrição'),
    )
    barcode = models.CharField(
        max_length=50,
        unique=True,
        null=True,
        blank=True,
        verbose_name=_('Código de Barras'),
    )
    unit = models.ForeignKey(
        'almoxarife.UnitOfMeasure',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Unidade de Medida'),
    )
    warehouse = models.ForeignKey(
        'almoxarife.Warehouse',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Almoxarifado'),
    )

    stock_max = models.PositiveIntegerField(default=0, verbose_name=_('Estoque Máximo'))
    stock_min = models.PositiveIntegerField(default=0, verbose_name=_('Estoque Mínimo'))
    reorder_point = models.PositiveIntegerField(default=0, verbose_name=_('Ponto de Pedido'))

    ideal_temperature = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Temperatura Ideal (°C)'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _('Produto')
        verbose_name_plural = _('Produtos')
        ordering = ['name']

    @property
    def thresholds_consistent(self) -> bool:
        return self.stock_min <= self.reorder_point <= self.stock_max

    def __str__(self) -> str:
        return self.name
