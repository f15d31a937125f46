"""
Label catalog — define, rename and delete labels.

The catalog never changes quantities of existing labels; only add()
sets initial quantities, recording them as an addition.
"""

import logging
from collections.abc import Iterable, Mapping

from labelman.engine import PendingTransaction
from labelman.exceptions import InventoryError
from labelman.imports import NewLabel, parse_quantity
from labelman.models.enums import Category, TransactionKind
from labelman.models.event import Event
from labelman.results import Outcome
from labelman.services.inventory import InventoryStore
from labelman.services.ledger import HistoryLedger

logger = logging.getLogger('labelman')


class LabelCatalog:
    """Catalog administration methods."""

    @classmethod
    def search(cls, term: str = '', category: str | None = None):
        """Labels whose name contains term (case-insensitive), sorted by name."""
        qs = InventoryStore.all()
        if category:
            qs = qs.filter(category=category)
        term = (term or '').strip()
        if term:
            qs = qs.filter(name__icontains=term)
        return qs.order_by('name')

    @classmethod
    def add(cls, name: str, category, quantity=0, sample_quantity=0,
            label_id: str | None = None) -> Outcome:
        """
        Create a label with optional initial stock.

        Initial stock is recorded as one ADDITION transaction, written
        directly (there is no prior stock to validate against).

        Returns:
            Outcome with data['label'] on success
        """
        try:
            name = cls._clean_name(name)
            category = cls._clean_category(category)
            quantity = parse_quantity(quantity, column='quantity')
            sample_quantity = parse_quantity(sample_quantity, column='sample_quantity')
            if quantity < 0 or sample_quantity < 0:
                raise InventoryError('VALIDATION_ERROR', 'Por favor, ingresa una cantidad inicial válida.')

            with InventoryStore.writer():
                if label_id and InventoryStore.get(label_id) is not None:
                    raise InventoryError(
                        'VALIDATION_ERROR',
                        f"Ya existe una etiqueta con ID '{label_id}'.",
                        label_id=label_id,
                    )
                label = InventoryStore.insert(
                    name, category, quantity, sample_quantity, label_id=label_id,
                )
                if quantity > 0 or sample_quantity > 0:
                    HistoryLedger.append([PendingTransaction(
                        label_id=label.pk,
                        label_name=label.name,
                        kind=TransactionKind.ADDITION,
                        quantity=quantity,
                        sample_quantity=sample_quantity or None,
                    )])
        except InventoryError as exc:
            return Outcome.failed(exc)

        logger.info(
            "labels.label.created",
            extra={"label_id": label.pk, "qty": quantity, "sample_qty": sample_quantity},
        )
        return Outcome.ok("Etiqueta creada con éxito.", label=label)

    @classmethod
    def batch_add(cls, entries: Iterable) -> Outcome:
        """
        Create many labels with zero stock.

        Names equal (case-insensitively) to an existing label or to an
        earlier entry are skipped silently. An invalid entry fails the
        whole call.

        Returns:
            Outcome with data['added'] (count) and data['labels']
        """
        try:
            new_labels = [cls._as_new_label(entry) for entry in entries]
            with InventoryStore.writer():
                taken = {name.lower() for name in InventoryStore.all().values_list('name', flat=True)}
                created = []
                for new_label in new_labels:
                    key = new_label.name.lower()
                    if key in taken:
                        logger.info(
                            "labels.label.skipped_duplicate",
                            extra={"label_name": new_label.name},
                        )
                        continue
                    taken.add(key)
                    created.append(InventoryStore.insert(new_label.name, new_label.category))
        except InventoryError as exc:
            return Outcome.failed(exc)

        return Outcome.ok(
            f"Se agregaron {len(created)} nuevas etiquetas.",
            added=len(created),
            labels=created,
        )

    @classmethod
    def edit(cls, label_id: str, name: str, category) -> Outcome:
        """
        Rename/recategorize a label.

        The new name is copied onto every transaction of the label.
        """
        try:
            name = cls._clean_name(name)
            category = cls._clean_category(category)
            with InventoryStore.writer():
                label = cls._get_label(label_id)
                old_name = label.name
                InventoryStore.update_details(label, name, category)
                synced = HistoryLedger.rename_label(label.pk, name)
        except InventoryError as exc:
            return Outcome.failed(exc)

        if old_name != name:
            logger.info(
                "labels.label.renamed",
                extra={"label_id": label.pk, "old_name": old_name, "new_name": name, "synced": synced},
            )
        return Outcome.ok("Etiqueta actualizada con éxito.", label=label)

    @classmethod
    def delete(cls, label_id: str) -> Outcome:
        """
        Delete a label.

        Fails with LABEL_NOT_FOUND, LABEL_HAS_STOCK or
        LABEL_IN_USE_BY_PLANNING_EVENT. History is kept.
        """
        try:
            with InventoryStore.writer():
                label = cls._get_label(label_id, for_update=True)
                if label.has_stock:
                    raise InventoryError(
                        'LABEL_HAS_STOCK',
                        label_id=label.pk,
                        quantity=label.quantity,
                        sample_quantity=label.sample_quantity,
                    )
                events = list(Event.objects.planning().requiring(label.pk).values_list('pk', flat=True))
                if events:
                    raise InventoryError(
                        'LABEL_IN_USE_BY_PLANNING_EVENT',
                        label_id=label.pk,
                        events=events,
                    )
                InventoryStore.remove(label)
        except InventoryError as exc:
            return Outcome.failed(exc)

        logger.info("labels.label.deleted", extra={"label_id": label_id})
        return Outcome.ok("Etiqueta eliminada con éxito.")

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _get_label(cls, label_id: str, for_update: bool = False):
        qs = InventoryStore.all()
        if for_update:
            qs = qs.select_for_update()
        label = qs.filter(pk=label_id).first()
        if label is None:
            raise InventoryError('LABEL_NOT_FOUND', label_id=label_id)
        return label

    @classmethod
    def _clean_name(cls, name) -> str:
        name = '' if name is None else str(name).strip()
        if not name:
            raise InventoryError('VALIDATION_ERROR', 'El nombre de la etiqueta no puede estar vacío.')
        return name

    @classmethod
    def _clean_category(cls, category) -> Category:
        parsed = Category.parse(category)
        if parsed is None:
            raise InventoryError(
                'VALIDATION_ERROR',
                f"La categoría '{category}' no es válida.",
                category=category,
            )
        return parsed

    @classmethod
    def _as_new_label(cls, entry) -> NewLabel:
        """Accept NewLabel or a mapping with name/category."""
        if isinstance(entry, Mapping):
            name, category = entry.get('name'), entry.get('category')
        else:
            name, category = entry.name, entry.category
        return NewLabel(name=cls._clean_name(name), category=cls._clean_category(category))
