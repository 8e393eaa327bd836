"""
Enums for Almoxarife models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class OrderStatus(models.TextChoices):
    """
    Purchase order lifecycle status.

    PEND: Created, nothing received yet (initial)
    ANDA: In progress with the supplier
    CONC: Completed, items received into stock (terminal)
    CANC: Cancelled, no stock movement (terminal)
    """
    PEND = 'PEND', _('Pendente')
    ANDA = 'ANDA', _('Em Andamento')
    CONC = 'CONC', _('Concluída')
    CANC = 'CANC', _('Cancelada')


class MovementKind(models.TextChoices):
    """Direction of a stock movement."""
    ENTRY = 'entry', _('Entrada')   # Increases lot quantity
    EXIT = 'exit', _('Saída')       # Decreases lot quantity

    @property
    def sign(self) -> int:
        return 1 if self == MovementKind.ENTRY else -1
