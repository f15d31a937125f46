"""Django app configuration for Labelman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class LabelmanConfig(AppConfig):
    """Configuration for Labelman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "labelman"
    verbose_name = _("Inventario de Etiquetas")
