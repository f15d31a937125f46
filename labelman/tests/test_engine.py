"""
Tests for the batch adjustment engine (no database).
"""

import pytest

from labelman.engine import (
    MAX_QUANTITY,
    AdjustmentLine,
    StockLevel,
    apply_adjustments,
    classify,
)
from labelman.models.enums import TransactionKind


@pytest.fixture
def levels():
    return {
        'etq-001': StockLevel('etq-001', 'Adhesiva', 'corporal', quantity=10, sample_quantity=0),
        'etq-002': StockLevel('etq-002', 'Térmica', 'médica', quantity=3, sample_quantity=4),
    }


class TestClassify:
    """Tests for classify()."""

    def test_positive_and_zero_is_addition(self):
        assert classify(5, 0) == TransactionKind.ADDITION

    def test_mixed_sign_is_withdrawal(self):
        """+5 units, -2 samples counts as a withdrawal."""
        assert classify(5, -2) == TransactionKind.WITHDRAWAL

    def test_negative_is_withdrawal(self):
        assert classify(-1, 0) == TransactionKind.WITHDRAWAL
        assert classify(0, -1) == TransactionKind.WITHDRAWAL


class TestApplyAdjustments:
    """Tests for apply_adjustments()."""

    def test_withdrawal_updates_copy(self, levels):
        result = apply_adjustments(levels, [AdjustmentLine('etq-001', regular_delta=-5)])

        assert result.success
        assert result.inventory['etq-001'].quantity == 5
        assert result.inventory['etq-001'].sample_quantity == 0
        assert result.message == 'Se procesaron 1 transacciones con éxito.'

        [txn] = result.transactions
        assert txn.kind == TransactionKind.WITHDRAWAL
        assert txn.quantity == 5
        assert txn.sample_quantity is None

    def test_input_is_not_modified(self, levels):
        before = dict(levels)
        apply_adjustments(levels, [AdjustmentLine('etq-001', regular_delta=-5)])

        assert levels == before

    def test_insufficient_regular_stock(self, levels):
        result = apply_adjustments(levels, [AdjustmentLine('etq-002', regular_delta=-5)])

        assert not result.success
        assert result.inventory is None
        assert result.error.code == 'INSUFFICIENT_REGULAR_STOCK'
        assert result.error.requested == 5
        assert result.error.available == 3
        assert 'Se intentó retirar 5 pero solo hay 3' in result.message

    def test_insufficient_sample_stock(self, levels):
        result = apply_adjustments(levels, [AdjustmentLine('etq-002', sample_delta=-5)])

        assert result.error.code == 'INSUFFICIENT_SAMPLE_STOCK'
        assert result.error.available == 4
        assert 'muestras' in result.message

    def test_unknown_label(self, levels):
        result = apply_adjustments(levels, [AdjustmentLine('etq-999', regular_delta=1)])

        assert result.error.code == 'UNKNOWN_LABEL'
        assert result.error.data['label_id'] == 'etq-999'
        assert result.message == "Error en fila 2: La etiqueta con ID 'etq-999' no existe."

    @pytest.mark.parametrize('index', [0, 1, 3])
    def test_row_number_is_index_plus_two(self, levels, index):
        lines = [AdjustmentLine('etq-001', regular_delta=1)] * index
        lines.append(AdjustmentLine('etq-999', regular_delta=1))

        result = apply_adjustments(levels, lines)

        assert result.error.row == index + 2

    def test_lines_apply_cumulatively(self, levels):
        """A later line sees the effect of an earlier one."""
        result = apply_adjustments(levels, [
            AdjustmentLine('etq-002', regular_delta=5),
            AdjustmentLine('etq-002', regular_delta=-8),
        ])

        assert result.success
        assert result.inventory['etq-002'].quantity == 0

    def test_earlier_line_does_not_rescue_failure(self, levels):
        result = apply_adjustments(levels, [
            AdjustmentLine('etq-002', regular_delta=-3),
            AdjustmentLine('etq-002', regular_delta=-1),
        ])

        assert result.error.row == 3
        assert result.error.available == 0

    def test_zero_line_records_nothing(self, levels):
        result = apply_adjustments(levels, [AdjustmentLine('etq-001')])

        assert result.success
        assert result.transactions == ()
        assert result.message == 'Se procesaron 1 transacciones con éxito.'

    def test_mixed_line_keeps_magnitudes(self, levels):
        result = apply_adjustments(levels, [
            AdjustmentLine('etq-002', regular_delta=5, sample_delta=-2),
        ])

        [txn] = result.transactions
        assert txn.kind == TransactionKind.WITHDRAWAL
        assert txn.quantity == 5
        assert txn.sample_quantity == 2

    def test_ledger_entries_are_reversed(self, levels):
        result = apply_adjustments(levels, [
            AdjustmentLine('etq-001', regular_delta=1),
            AdjustmentLine('etq-002', regular_delta=1),
        ])

        assert [t.label_id for t in result.transactions] == ['etq-001', 'etq-002']
        assert [t.label_id for t in result.ledger_entries] == ['etq-002', 'etq-001']

    def test_empty_batch_succeeds(self, levels):
        result = apply_adjustments(levels, [])

        assert result.success
        assert result.inventory == levels

    def test_result_above_field_maximum(self, levels):
        result = apply_adjustments(levels, [
            AdjustmentLine('etq-001', regular_delta=1),
            AdjustmentLine('etq-002', sample_delta=MAX_QUANTITY),
        ])

        assert result.error.code == 'VALIDATION_ERROR'
        assert result.error.row == 3
        assert result.inventory is None

    def test_result_at_field_maximum(self, levels):
        result = apply_adjustments(levels, [
            AdjustmentLine('etq-001', regular_delta=MAX_QUANTITY - 10),
        ])

        assert result.success
        assert result.inventory['etq-001'].quantity == MAX_QUANTITY
