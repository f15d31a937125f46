"""
LabelStock model — a catalog entry and its current stock.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _

from labelman.conf import labelman_settings
from labelman.models.enums import Category


def generate_label_id() -> str:
    """New label id: '<prefix>-<8 hex chars>'."""
    return f"{labelman_settings.LABEL_ID_PREFIX}-{uuid.uuid4().hex[:8]}"


class LabelStockManager(models.Manager):
    """Manager with helper methods for LabelStock queries."""

    def in_category(self, category):
        """Filter labels of one category."""
        return self.filter(category=category)

    def with_stock(self):
        """Labels holding any regular or sample stock."""
        return self.filter(models.Q(quantity__gt=0) | models.Q(sample_quantity__gt=0))

    def name_taken(self, name: str) -> bool:
        """Is there a label with this name (case-insensitive)?"""
        return self.filter(name__iexact=name).exists()


class LabelStock(models.Model):
    """
    A printed-label SKU and its stock.

    Quantities:
    - quantity: regular units
    - sample_quantity: sample units

    Both never go negative. They change only through the batch
    adjustment engine (see labelman.engine) or the initial quantities
    of LabelCatalog.add(). Name and category change only through
    the catalog.
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_label_id,
        verbose_name=_('ID de Etiqueta'),
    )
    name = models.CharField(
        max_length=200,
        verbose_name=_('Nombre'),
    )
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        verbose_name=_('Categoría'),
    )

    quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Cantidad (Unidades)'),
    )
    sample_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Cantidad (Muestras)'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = LabelStockManager()

    class Meta:
        verbose_name = _('Etiqueta')
        verbose_name_plural = _('Etiquetas')
        ordering = ['name']
        indexes = [
            models.Index(fields=['category', 'name'], name='labelman_label_cat_name_idx'),
        ]

    @property
    def has_stock(self) -> bool:
        return self.quantity > 0 or self.sample_quantity > 0

    @property
    def is_low_stock(self) -> bool:
        """Regular quantity at or below LOW_STOCK_THRESHOLD."""
        return self.quantity <= labelman_settings.LOW_STOCK_THRESHOLD

    def __str__(self) -> str:
        samples = f" (+{self.sample_quantity} muestras)" if self.sample_quantity else ""
        return f"{self.name} [{self.id}]: {self.quantity}{samples}"
