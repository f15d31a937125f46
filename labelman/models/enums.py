"""
Enums for Labelman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Category(models.TextChoices):
    """Closed set of product lines a label belongs to."""
    MEDICA = 'médica', _('Médica')
    NUTRICOSMETICA = 'nutricosmética', _('Nutricosmética')
    FACIAL = 'facial', _('Facial')
    CORPORAL = 'corporal', _('Corporal')
    CAPILAR = 'capilar', _('Capilar')
    PODOLOGICO = 'podológico', _('Podológico')
    INTIMA = 'íntima', _('Íntima')

    @classmethod
    def parse(cls, value) -> 'Category | None':
        """Match a raw value (case/space-insensitive). None if unknown."""
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        if normalized in cls.values:
            return cls(normalized)
        return None


class TransactionKind(models.TextChoices):
    """Direction of a committed stock movement."""
    ADDITION = 'addition', _('Ingreso')      # Stock entered
    WITHDRAWAL = 'withdrawal', _('Salida')   # Stock left (or mixed-sign line)


class EventStatus(models.TextChoices):
    """
    Event lifecycle status.

    PLANNING → COMPLETED is the only transition; COMPLETED is terminal.
    """
    PLANNING = 'planning', _('En planificación')
    COMPLETED = 'completed', _('Realizado')
