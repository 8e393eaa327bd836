"""
Warehouse and UnitOfMeasure models — reference data for products.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Warehouse(models.Model):
    """
    Where products are stored (almoxarifado).

    Warehouses are stable entities, created during system setup.

    Examples:
        Warehouse.objects.create(code='central', name='Almoxarifado Central')
        Warehouse.objects.create(code='farmacia', name='Farmácia Satélite')
    """

    code = models.SlugField(
        unique=True,
        max_length=50,
        verbose_name=_('Código'),
        help_text=_('Identificador único (ex: central, farmacia)'),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_('Nome'),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_('Ativo'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Almoxarifado')
        verbose_name_plural = _('Almoxarifados')
        ordering = ['code']

    def __str__(self) -> str:
        return self.name


class UnitOfMeasure(models.Model):
    """Unit a product is counted in (UN, CX, ML, ...)."""

    code = models.CharField(
        unique=True,
        max_length=10,
        verbose_name=_('Sigla'),
    )
    name = models.CharField(
        max_length=50,
        verbose_name=_('Descrição'),
    )

    class Meta:
        verbose_name = _('Unidade de Medida')
        verbose_name_plural = _('Unidades de Medida')
        ordering = ['code']

    def __str__(self) -> str:
        return self.code
