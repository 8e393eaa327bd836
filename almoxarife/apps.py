"""Django app configuration for Almoxarife."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AlmoxarifeConfig(AppConfig):
    """Configuration for Almoxarife app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "almoxarife"
    verbose_name = _("Almoxarifado")
