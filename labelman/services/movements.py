"""
Stock movements — every quantity change goes through the batch engine.

Three call sites share one path:
- apply_batch(): a list of signed deltas
- import_rows(): spreadsheet transaction rows
- register(): one addition/withdrawal from a form (a one-row batch)
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from django.db import transaction

from labelman.engine import AdjustmentLine, AdjustmentResult, apply_adjustments
from labelman.exceptions import InventoryError
from labelman.imports import parse_quantity, parse_transaction_rows
from labelman.models.enums import TransactionKind
from labelman.results import Outcome
from labelman.services.inventory import InventoryStore
from labelman.services.ledger import HistoryLedger

logger = logging.getLogger('labelman')


class StockMovements:
    """State-changing stock movement methods."""

    @classmethod
    def apply_batch(cls, lines: Sequence[AdjustmentLine]) -> Outcome:
        """
        Apply a batch of signed deltas, all or nothing.

        Returns:
            Outcome with data['transactions'] (committed, ledger order)
            on success; the engine error on failure.
        """
        try:
            result, committed = cls.apply_or_raise(lines)
        except InventoryError as exc:
            logger.info(
                "labels.batch.rejected",
                extra={"code": exc.code, "row": exc.row, "lines": len(lines)},
            )
            return Outcome.failed(exc)
        return Outcome.ok(result.message, transactions=committed)

    @classmethod
    def import_rows(cls, rows: Sequence[Mapping[str, Any]]) -> Outcome:
        """
        Apply spreadsheet transaction rows as one batch.

        Row format: see labelman.imports.TRANSACTION_COLUMNS.
        """
        try:
            lines = parse_transaction_rows(rows)
        except InventoryError as exc:
            return Outcome.failed(exc)
        return cls.apply_batch(lines)

    @classmethod
    def register(cls, label_id: str, kind, quantity=0, sample_quantity=0) -> Outcome:
        """
        Single addition or withdrawal.

        Quantities are magnitudes (>= 0, at least one > 0); the kind
        gives the sign.
        """
        try:
            lines = [cls._line_for(label_id, kind, quantity, sample_quantity)]
        except InventoryError as exc:
            return Outcome.failed(exc)

        outcome = cls.apply_batch(lines)
        if not outcome.success:
            return outcome

        parts = []
        line = lines[0]
        if line.regular_delta:
            parts.append(f"{abs(line.regular_delta)} unidades")
        if line.sample_delta:
            parts.append(f"{abs(line.sample_delta)} muestras")
        verb = 'registrado' if kind == TransactionKind.ADDITION else 'retirado'
        return Outcome.ok(f"Se han {verb} {' y '.join(parts)}.", **outcome.data)

    @classmethod
    def apply_or_raise(cls, lines: Sequence[AdjustmentLine]) -> tuple[AdjustmentResult, list]:
        """
        Engine + commit under the writer lock, raising on failure.

        For callers that run the batch inside their own writer() block
        (event completion): the engine error propagates, so the
        enclosing transaction rolls back too.

        Returns:
            (engine result, committed transactions in ledger order)

        Raises:
            InventoryError: the first failing line
        """
        with InventoryStore.writer():
            snapshot = InventoryStore.snapshot(for_update=True)
            result = apply_adjustments(snapshot, lines)
            if not result.success:
                raise result.error

            InventoryStore.commit(result.inventory)
            committed = HistoryLedger.append(result.transactions)
            # Outermost commit only; a rolled-back caller logs nothing
            transaction.on_commit(lambda: logger.info(
                "labels.batch.applied",
                extra={"lines": len(lines), "transactions": len(committed)},
            ))

        committed.reverse()
        return result, committed

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _line_for(cls, label_id, kind, quantity, sample_quantity) -> AdjustmentLine:
        if kind not in TransactionKind.values:
            raise InventoryError(
                'VALIDATION_ERROR',
                f"Tipo de movimiento inválido: '{kind}'.",
                kind=kind,
            )
        quantity = parse_quantity(quantity, column='quantity')
        sample_quantity = parse_quantity(sample_quantity, column='sample_quantity')

        if quantity < 0 or sample_quantity < 0:
            raise InventoryError('VALIDATION_ERROR', 'Las cantidades no pueden ser negativas.')
        if quantity == 0 and sample_quantity == 0:
            raise InventoryError(
                'VALIDATION_ERROR',
                'Por favor, ingresa una cantidad válida y mayor a cero.',
            )

        sign = 1 if kind == TransactionKind.ADDITION else -1
        return AdjustmentLine(
            label_id=label_id,
            regular_delta=sign * quantity,
            sample_delta=sign * sample_quantity,
        )
