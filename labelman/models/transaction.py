"""
Transaction model — Immutable ledger of committed stock movements.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from labelman.models.enums import TransactionKind


class TransactionQuerySet(models.QuerySet):
    """Ledger queries (newest first by default)."""

    def for_label(self, label_id: str):
        return self.filter(label_id=label_id)

    def additions(self):
        return self.filter(kind=TransactionKind.ADDITION)

    def withdrawals(self):
        return self.filter(kind=TransactionKind.WITHDRAWAL)


class Transaction(models.Model):
    """
    Immutable record of one committed stock movement.

    Rules:
    - NEVER update() or delete(), except the label_name sync of a rename
    - Corrections are new Transactions in the opposite direction
    - label_id is a plain reference: deleting a label keeps its history

    Ledger order is commit order, newest first (descending pk).
    """

    label_id = models.CharField(
        max_length=40,
        db_index=True,
        verbose_name=_('ID de Etiqueta'),
    )
    label_name = models.CharField(
        max_length=200,
        verbose_name=_('Etiqueta'),
        help_text=_('Copia del nombre al momento del movimiento (se sincroniza al renombrar).'),
    )
    kind = models.CharField(
        max_length=20,
        choices=TransactionKind.choices,
        verbose_name=_('Tipo'),
    )
    quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Unidades'),
    )
    sample_quantity = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_('Muestras'),
        help_text=_('Vacío cuando el movimiento no incluye muestras.'),
    )
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Fecha/Hora'))

    objects = TransactionQuerySet.as_manager()

    class Meta:
        verbose_name = _('Movimiento')
        verbose_name_plural = _('Movimientos')
        ordering = ['-id']
        indexes = [
            models.Index(fields=['label_id', 'timestamp'], name='labelman_txn_label_ts_idx'),
        ]

    @property
    def txn_id(self) -> str:
        """Transaction identifier in standard format."""
        return f"txn:{self.pk}"

    def save(self, *args, **kwargs):
        """Insert only — transactions are immutable."""
        if self.pk:
            raise ValueError(
                "Los movimientos son inmutables. "
                "Para corregir, registra un nuevo movimiento en sentido contrario."
            )
        if self.sample_quantity == 0:
            self.sample_quantity = None
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — transactions are immutable."""
        raise ValueError("Los movimientos son inmutables y no se pueden eliminar.")

    def describe(self) -> str:
        """History line, e.g. '+5 unidades y 2 muestras (ingreso)'."""
        sign = '+' if self.kind == TransactionKind.ADDITION else '-'
        parts = []
        if self.quantity > 0:
            parts.append(f"{self.quantity} unidades")
        if self.sample_quantity:
            parts.append(f"{self.sample_quantity} muestras")
        kind_label = str(TransactionKind(self.kind).label).lower()
        return f"{sign}{' y '.join(parts)} ({kind_label})"

    def __str__(self) -> str:
        return f"{self.label_name} {self.describe()}"
