"""
Product registration — threshold and barcode validation.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from almoxarife.conf import almoxarife_settings
from almoxarife.exceptions import NotFound, ValidationError
from almoxarife.models.product import Product

logger = logging.getLogger('almoxarife')

PRODUCT_FIELDS = frozenset({
    'name', 'description', 'barcode', 'unit', 'warehouse',
    'stock_max', 'stock_min', 'reorder_point', 'ideal_temperature',
})


def validate_thresholds(stock_min: int, reorder_point: int, stock_max: int) -> None:
    """
    Require stock_min <= reorder_point <= stock_max.

    Raises:
        ValidationError: with the three values
    """
    if not stock_min <= reorder_point <= stock_max:
        raise ValidationError(
            message="Ponto de pedido deve estar entre estoque mínimo e máximo",
            stock_min=stock_min,
            reorder_point=reorder_point,
            stock_max=stock_max,
        )


class ProductCatalog:
    """Product write operations."""

    @classmethod
    def register_product(cls, **fields) -> Product:
        """
        Create a product after validating it.

        Raises:
            ValidationError: Unknown field, invalid thresholds,
                duplicate barcode or any model field error
        """
        product = Product(**cls._check_fields(fields))
        cls._validate(product)
        product.save()
        logger.info(
            "inventory.product.registered",
            extra={"product_id": product.pk, "barcode": product.barcode},
        )
        return product

    @classmethod
    def update_product(cls, product_id, **fields) -> Product:
        """Change product fields; same validation as register_product()."""
        fields = cls._check_fields(fields)
        with transaction.atomic():
            try:
                product = Product.objects.select_for_update().get(pk=product_id)
            except Product.DoesNotExist:
                raise NotFound(entity='Product', id=product_id)
            for name, value in fields.items():
                setattr(product, name, value)
            cls._validate(product)
            product.save()
        return product

    @classmethod
    def _check_fields(cls, fields: dict) -> dict:
        unknown = set(fields) - PRODUCT_FIELDS
        if unknown:
            raise ValidationError(
                message=f"Campos desconhecidos: {', '.join(sorted(unknown))}",
                fields=sorted(unknown),
            )
        if fields.get('barcode') == '':
            fields['barcode'] = None
        return fields

    @classmethod
    def _validate(cls, product: Product) -> None:
        try:
            product.full_clean()
        except DjangoValidationError as exc:
            raise ValidationError(
                message="Produto inválido",
                errors={k: [str(m) for m in v] for k, v in exc.message_dict.items()},
            )
        if almoxarife_settings.ENFORCE_THRESHOLDS:
            validate_thresholds(product.stock_min, product.reorder_point, product.stock_max)
