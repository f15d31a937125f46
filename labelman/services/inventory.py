"""
Inventory store — the authoritative label → stock mapping.

Reads use no locking. Every mutation runs inside writer(), which holds
the process-wide writer lock and a database transaction.
"""

import logging
import threading
from collections.abc import Mapping
from contextlib import contextmanager

from django.db import transaction
from django.utils import timezone

from labelman.engine import StockLevel
from labelman.models.label import LabelStock

logger = logging.getLogger('labelman')

# One writer at a time per inventory. Re-entrant: event completion
# holds it while the batch commit acquires it again.
_writer_lock = threading.RLock()


class InventoryStore:
    """Read access and committed mutations of LabelStock records."""

    @classmethod
    @contextmanager
    def writer(cls):
        """
        Serialize a mutation.

        Holds the writer lock and opens transaction.atomic(); an
        exception raised inside rolls everything back.
        """
        with _writer_lock:
            with transaction.atomic():
                yield

    # ══════════════════════════════════════════════════════════════
    # READS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def all(cls):
        """Every label, ordered by name."""
        return LabelStock.objects.all()

    @classmethod
    def get(cls, label_id: str) -> LabelStock | None:
        """Look up a label by id."""
        return LabelStock.objects.filter(pk=label_id).first()

    @classmethod
    def snapshot(cls, for_update: bool = False) -> dict[str, StockLevel]:
        """
        Current stock of every label as plain values.

        Read in a single query. With for_update=True the rows are locked
        (select_for_update) until the surrounding transaction ends.
        """
        qs = LabelStock.objects.order_by('pk')
        if for_update:
            qs = qs.select_for_update()
        return {
            label.pk: StockLevel(
                label_id=label.pk,
                name=label.name,
                category=label.category,
                quantity=label.quantity,
                sample_quantity=label.sample_quantity,
            )
            for label in qs
        }

    # ══════════════════════════════════════════════════════════════
    # WRITES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def commit(cls, levels: Mapping[str, StockLevel]) -> int:
        """
        Write the quantities of a snapshot back.

        Only labels whose quantities differ are updated. Must run inside
        writer(). Returns the number of labels updated.
        """
        labels = LabelStock.objects.in_bulk(list(levels))
        changed = []
        now = timezone.now()

        for label_id, level in levels.items():
            label = labels.get(label_id)
            if label is None:
                continue
            if (label.quantity, label.sample_quantity) == (level.quantity, level.sample_quantity):
                continue
            label.quantity = level.quantity
            label.sample_quantity = level.sample_quantity
            label.updated_at = now
            changed.append(label)

        if changed:
            LabelStock.objects.bulk_update(changed, ['quantity', 'sample_quantity', 'updated_at'])
        return len(changed)

    @classmethod
    def insert(cls, name: str, category: str, quantity: int = 0,
               sample_quantity: int = 0, label_id: str | None = None) -> LabelStock:
        """Create a label record (catalog only)."""
        fields = {
            'name': name,
            'category': category,
            'quantity': quantity,
            'sample_quantity': sample_quantity,
        }
        if label_id:
            fields['id'] = label_id
        return LabelStock.objects.create(**fields)

    @classmethod
    def update_details(cls, label: LabelStock, name: str, category: str) -> LabelStock:
        """Rename/recategorize (catalog only). Quantities are untouched."""
        label.name = name
        label.category = category
        label.save(update_fields=['name', 'category', 'updated_at'])
        return label

    @classmethod
    def remove(cls, label: LabelStock) -> None:
        """Delete a label record (catalog only)."""
        label.delete()
