"""
Batch adjustment engine — validates and applies signed quantity deltas.

Pure: works on a snapshot of plain values and returns a result. It never
touches the database; the caller commits a successful result (see
StockMovements) or discards a failed one.

Usage:
    result = apply_adjustments(InventoryStore.snapshot(), [
        AdjustmentLine('etq-001', regular_delta=-5),
        AdjustmentLine('etq-002', regular_delta=10, sample_delta=2),
    ])
    if result.success:
        InventoryStore.commit(result.inventory)
        HistoryLedger.append(result.transactions)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace

from labelman.exceptions import InventoryError
from labelman.models.enums import TransactionKind

# Row numbers are 1-indexed and skip the spreadsheet header row.
FIRST_ROW = 2

# Largest value a PositiveIntegerField holds on every supported backend.
MAX_QUANTITY = 2_147_483_647


@dataclass(frozen=True)
class StockLevel:
    """Stock of one label at snapshot time."""

    label_id: str
    name: str
    category: str
    quantity: int = 0
    sample_quantity: int = 0


@dataclass(frozen=True)
class AdjustmentLine:
    """One signed delta: positive adds stock, negative withdraws it."""

    label_id: str
    regular_delta: int = 0
    sample_delta: int = 0


@dataclass(frozen=True)
class PendingTransaction:
    """Ledger entry synthesized for a line, not yet committed."""

    label_id: str
    label_name: str
    kind: TransactionKind
    quantity: int
    sample_quantity: int | None = None


@dataclass(frozen=True)
class AdjustmentResult:
    """Outcome of apply_adjustments()."""

    success: bool
    message: str
    inventory: dict[str, StockLevel] | None = None
    transactions: tuple[PendingTransaction, ...] = field(default_factory=tuple)
    error: InventoryError | None = None

    @property
    def ledger_entries(self) -> list[PendingTransaction]:
        """Transactions in ledger order (last processed line first)."""
        return list(reversed(self.transactions))


def classify(regular_delta: int, sample_delta: int) -> TransactionKind:
    """
    Movement kind of a line.

    ADDITION only when both deltas are >= 0. A mixed-sign line
    (e.g. +5 units, -2 samples) is a WITHDRAWAL.
    """
    if regular_delta >= 0 and sample_delta >= 0:
        return TransactionKind.ADDITION
    return TransactionKind.WITHDRAWAL


def apply_adjustments(inventory: Mapping[str, StockLevel],
                      lines: Sequence[AdjustmentLine]) -> AdjustmentResult:
    """
    Apply lines in order against a copy of the inventory.

    Stops at the first failing line; a failed result carries the error
    (with its row number) and no inventory. The input mapping is never
    modified.
    """
    working = dict(inventory)
    pending: list[PendingTransaction] = []

    for index, line in enumerate(lines):
        row = index + FIRST_ROW
        level = working.get(line.label_id)

        if level is None:
            return _failure(InventoryError(
                'UNKNOWN_LABEL',
                f"Error en fila {row}: La etiqueta con ID '{line.label_id}' no existe.",
                row=row,
                label_id=line.label_id,
            ))

        new_quantity = level.quantity + line.regular_delta
        new_sample_quantity = level.sample_quantity + line.sample_delta

        if new_quantity < 0:
            return _failure(InventoryError(
                'INSUFFICIENT_REGULAR_STOCK',
                f"Error en fila {row}: Stock insuficiente de unidades para la etiqueta "
                f"'{level.name}'. Se intentó retirar {-line.regular_delta} "
                f"pero solo hay {level.quantity}.",
                row=row,
                label_id=level.label_id,
                label_name=level.name,
                requested=-line.regular_delta,
                available=level.quantity,
            ))
        if new_sample_quantity < 0:
            return _failure(InventoryError(
                'INSUFFICIENT_SAMPLE_STOCK',
                f"Error en fila {row}: Stock insuficiente de muestras para la etiqueta "
                f"'{level.name}'. Se intentó retirar {-line.sample_delta} "
                f"pero solo hay {level.sample_quantity}.",
                row=row,
                label_id=level.label_id,
                label_name=level.name,
                requested=-line.sample_delta,
                available=level.sample_quantity,
            ))

        if new_quantity > MAX_QUANTITY or new_sample_quantity > MAX_QUANTITY:
            return _failure(InventoryError(
                'VALIDATION_ERROR',
                f"Error en fila {row}: El stock resultante para la etiqueta "
                f"'{level.name}' supera el máximo permitido ({MAX_QUANTITY}).",
                row=row,
                label_id=level.label_id,
                label_name=level.name,
            ))

        working[level.label_id] = replace(
            level,
            quantity=new_quantity,
            sample_quantity=new_sample_quantity,
        )

        regular_magnitude = abs(line.regular_delta)
        sample_magnitude = abs(line.sample_delta)
        if regular_magnitude > 0 or sample_magnitude > 0:
            pending.append(PendingTransaction(
                label_id=level.label_id,
                label_name=level.name,
                kind=classify(line.regular_delta, line.sample_delta),
                quantity=regular_magnitude,
                sample_quantity=sample_magnitude or None,
            ))

    return AdjustmentResult(
        success=True,
        message=f"Se procesaron {len(lines)} transacciones con éxito.",
        inventory=working,
        transactions=tuple(pending),
    )


def _failure(error: InventoryError) -> AdjustmentResult:
    return AdjustmentResult(success=False, message=error.message, error=error)
