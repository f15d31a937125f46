"""
Labels Service — The single public interface for all label inventory operations.

Usage:
    from labelman import labels

    labels.add('Etiqueta Térmica 10x8cm', 'médica', quantity=100)
    labels.register('etq-002', 'withdrawal', quantity=5)
    outcome = labels.complete_event(event.pk)
    if not outcome:
        print(outcome.message)

Every mutating method returns an Outcome; failures are never raised.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from labelman.engine import AdjustmentLine
from labelman.exceptions import InventoryError
from labelman.exports import ReportSheet, report_filename, requirement_report
from labelman.imports import parse_label_rows
from labelman.protocols.spreadsheet import RowReader, SheetWriter
from labelman.results import Outcome
from labelman.services import alerts
from labelman.services.catalog import LabelCatalog
from labelman.services.inventory import InventoryStore
from labelman.services.ledger import HistoryLedger
from labelman.services.movements import StockMovements
from labelman.services.planning import EventPlanner


class Labels:
    """
    Single interface for label inventory.

    Delegates to the services package; see each service for details.
    """

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def inventory(cls):
        """Every label, ordered by name."""
        return InventoryStore.all()

    @classmethod
    def get(cls, label_id: str):
        return InventoryStore.get(label_id)

    @classmethod
    def search(cls, term: str = '', category: str | None = None):
        return LabelCatalog.search(term, category)

    @classmethod
    def history(cls, label_id: str | None = None):
        """Committed transactions, newest first."""
        return HistoryLedger.entries(label_id)

    @classmethod
    def low_stock(cls, threshold: int | None = None):
        return alerts.low_stock(threshold)

    @classmethod
    def stock_overview(cls, threshold: int | None = None):
        return alerts.stock_overview(threshold)

    # ══════════════════════════════════════════════════════════════
    # MOVEMENTS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def apply_batch(cls, lines: Sequence[AdjustmentLine]) -> Outcome:
        return StockMovements.apply_batch(lines)

    @classmethod
    def register(cls, label_id: str, kind, quantity=0, sample_quantity=0) -> Outcome:
        return StockMovements.register(label_id, kind, quantity, sample_quantity)

    @classmethod
    def import_transactions(cls, rows: Sequence[Mapping[str, Any]]) -> Outcome:
        return StockMovements.import_rows(rows)

    @classmethod
    def import_transactions_from(cls, reader: RowReader, source: Any) -> Outcome:
        """Read a spreadsheet with an external reader and apply it."""
        return StockMovements.import_rows(list(reader.read_rows(source)))

    # ══════════════════════════════════════════════════════════════
    # CATALOG
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def add(cls, name: str, category, quantity=0, sample_quantity=0,
            label_id: str | None = None) -> Outcome:
        return LabelCatalog.add(name, category, quantity, sample_quantity, label_id=label_id)

    @classmethod
    def batch_add(cls, entries: Iterable) -> Outcome:
        return LabelCatalog.batch_add(entries)

    @classmethod
    def import_labels(cls, rows: Sequence[Mapping[str, Any]]) -> Outcome:
        """Spreadsheet label rows → batch_add()."""
        try:
            new_labels = parse_label_rows(rows)
        except InventoryError as exc:
            return Outcome.failed(exc)
        return LabelCatalog.batch_add(new_labels)

    @classmethod
    def import_labels_from(cls, reader: RowReader, source: Any) -> Outcome:
        return cls.import_labels(list(reader.read_rows(source)))

    @classmethod
    def edit(cls, label_id: str, name: str, category) -> Outcome:
        return LabelCatalog.edit(label_id, name, category)

    @classmethod
    def delete(cls, label_id: str) -> Outcome:
        return LabelCatalog.delete(label_id)

    # ══════════════════════════════════════════════════════════════
    # EVENTS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def events(cls, status: str | None = None):
        return EventPlanner.list(status)

    @classmethod
    def get_event(cls, event_id):
        return EventPlanner.get(event_id)

    @classmethod
    def create_event(cls, title: str, requirements: Iterable = ()) -> Outcome:
        return EventPlanner.create(title, requirements)

    @classmethod
    def edit_event(cls, event_id, title: str, requirements: Iterable = ()) -> Outcome:
        return EventPlanner.edit(event_id, title, requirements)

    @classmethod
    def complete_event(cls, event_id) -> Outcome:
        return EventPlanner.complete(event_id)

    # The report queries below take an Event or its pk; an unknown pk
    # raises InventoryError('EVENT_NOT_FOUND').

    @classmethod
    def deficits(cls, event):
        return EventPlanner.deficits(event)

    @classmethod
    def requirement_report(cls, event) -> list[ReportSheet]:
        return requirement_report(event)

    @classmethod
    def export_requirements(cls, event, writer: SheetWriter) -> Any:
        """Write the requirement report with an external writer."""
        event = EventPlanner.resolve(event)
        return writer.write(requirement_report(event), report_filename(event))
