"""
Tests for stock movements: batches, single registrations and imports.
"""

import logging

import pytest

from labelman import labels
from labelman.engine import MAX_QUANTITY, AdjustmentLine
from labelman.exceptions import InventoryError
from labelman.models import Category, LabelStock, Transaction, TransactionKind
from labelman.protocols import RowReader
from labelman.services.movements import StockMovements


pytestmark = pytest.mark.django_db


def stock_of(*label_ids):
    return {
        label.pk: (label.quantity, label.sample_quantity)
        for label in LabelStock.objects.filter(pk__in=label_ids)
    }


class ListReader:
    """In-memory RowReader."""

    def __init__(self, rows):
        self.rows = rows
        self.sources = []

    def read_rows(self, source):
        self.sources.append(source)
        return iter(self.rows)


class TestApplyBatch:
    """Tests for labels.apply_batch()."""

    def test_withdrawal_end_to_end(self, db):
        LabelStock.objects.create(id='L1', name='L1', category=Category.FACIAL, quantity=10)

        outcome = labels.apply_batch([AdjustmentLine('L1', regular_delta=-5)])

        assert outcome.success
        label = LabelStock.objects.get(pk='L1')
        assert (label.quantity, label.sample_quantity) == (5, 0)
        [txn] = Transaction.objects.all()
        assert txn.kind == TransactionKind.WITHDRAWAL
        assert txn.quantity == 5
        assert txn.sample_quantity is None

    def test_insufficient_stock_end_to_end(self, db):
        LabelStock.objects.create(id='L1', name='L1', category=Category.FACIAL, quantity=3)

        outcome = labels.apply_batch([AdjustmentLine('L1', regular_delta=-5)])

        assert not outcome.success
        assert outcome.code == 'INSUFFICIENT_REGULAR_STOCK'
        assert 'Se intentó retirar 5 pero solo hay 3' in outcome.message
        assert LabelStock.objects.get(pk='L1').quantity == 3
        assert not Transaction.objects.exists()

    @pytest.mark.parametrize('failing_index', [0, 1, 2])
    def test_failure_at_any_line_changes_nothing(self, inventory, failing_index):
        Transaction.objects.create(label_id='etq-001', label_name='x', kind=TransactionKind.ADDITION, quantity=1)
        lines = [
            AdjustmentLine('etq-001', regular_delta=-100),
            AdjustmentLine('etq-003', regular_delta=50, sample_delta=5),
            AdjustmentLine('etq-004', sample_delta=-1),
        ]
        lines[failing_index] = AdjustmentLine('etq-002', regular_delta=-9)
        before = stock_of('etq-001', 'etq-002', 'etq-003', 'etq-004')
        ledger_before = list(Transaction.objects.values_list('pk', flat=True))

        outcome = labels.apply_batch(lines)

        assert not outcome.success
        assert outcome.error.row == failing_index + 2
        assert stock_of('etq-001', 'etq-002', 'etq-003', 'etq-004') == before
        assert list(Transaction.objects.values_list('pk', flat=True)) == ledger_before

    def test_ledger_order_newest_first(self, inventory):
        old = Transaction.objects.create(
            label_id='etq-004', label_name='Etiqueta de Seguridad Void',
            kind=TransactionKind.ADDITION, quantity=500,
        )

        outcome = labels.apply_batch([
            AdjustmentLine('etq-001', regular_delta=-1),
            AdjustmentLine('etq-002', regular_delta=2),
            AdjustmentLine('etq-003', sample_delta=-3),
        ])

        history = list(labels.history())
        assert [t.label_id for t in history] == ['etq-003', 'etq-002', 'etq-001', 'etq-004']
        assert history[-1] == old
        assert [t.label_id for t in outcome.data['transactions']] == ['etq-003', 'etq-002', 'etq-001']

    def test_summary_counts_lines(self, inventory):
        outcome = labels.apply_batch([
            AdjustmentLine('etq-001', regular_delta=-1),
            AdjustmentLine('etq-001'),
        ])

        assert outcome.message == 'Se procesaron 2 transacciones con éxito.'
        assert len(outcome.data['transactions']) == 1

    def test_quantities_never_negative(self, inventory):
        labels.apply_batch([
            AdjustmentLine('etq-002', regular_delta=-8, sample_delta=-100),
        ])

        assert all(
            label.quantity >= 0 and label.sample_quantity >= 0
            for label in LabelStock.objects.all()
        )
        assert stock_of('etq-002') == {'etq-002': (0, 0)}


class TestRegister:
    """Tests for labels.register()."""

    def test_register_addition(self, thermal):
        outcome = labels.register('etq-002', TransactionKind.ADDITION, quantity=5, sample_quantity=2)

        assert outcome.success
        assert outcome.message == 'Se han registrado 5 unidades y 2 muestras.'
        assert stock_of('etq-002') == {'etq-002': (13, 102)}
        txn = labels.history().first()
        assert txn.kind == TransactionKind.ADDITION
        assert txn.describe() == '+5 unidades y 2 muestras (ingreso)'

    def test_register_withdrawal_of_samples_only(self, thermal):
        outcome = labels.register('etq-002', 'withdrawal', sample_quantity=30)

        assert outcome.message == 'Se han retirado 30 muestras.'
        assert stock_of('etq-002') == {'etq-002': (8, 70)}

    def test_register_withdrawal_beyond_stock(self, thermal):
        outcome = labels.register('etq-002', 'withdrawal', quantity=9)

        assert outcome.code == 'INSUFFICIENT_REGULAR_STOCK'
        assert stock_of('etq-002') == {'etq-002': (8, 100)}

    def test_register_requires_a_quantity(self, thermal):
        outcome = labels.register('etq-002', 'addition')

        assert outcome.code == 'VALIDATION_ERROR'
        assert outcome.message == 'Por favor, ingresa una cantidad válida y mayor a cero.'

    def test_register_rejects_negative(self, thermal):
        outcome = labels.register('etq-002', 'addition', quantity=-1)

        assert outcome.code == 'VALIDATION_ERROR'

    def test_register_rejects_unknown_kind(self, thermal):
        outcome = labels.register('etq-002', 'transfer', quantity=1)

        assert outcome.code == 'VALIDATION_ERROR'
        assert not Transaction.objects.exists()


class TestImportTransactions:
    """Tests for labels.import_transactions()."""

    def test_import_rows(self, inventory):
        outcome = labels.import_transactions([
            {'ID de Etiqueta': 'etq-001', 'Cantidad (Unidades)': -100, 'Cantidad (Muestras)': None},
            {'ID de Etiqueta': 'etq-003', 'Cantidad (Unidades)': '50', 'Cantidad (Muestras)': 5.0},
        ])

        assert outcome.success
        assert stock_of('etq-001', 'etq-003') == {
            'etq-001': (1400, 50),
            'etq-003': (2350, 125),
        }

    def test_import_error_reports_row(self, inventory):
        outcome = labels.import_transactions([
            {'ID de Etiqueta': 'etq-001', 'Cantidad (Unidades)': 1, 'Cantidad (Muestras)': 0},
            {'ID de Etiqueta': 'etq-404', 'Cantidad (Unidades)': 1, 'Cantidad (Muestras)': 0},
        ])

        assert outcome.code == 'UNKNOWN_LABEL'
        assert outcome.message.startswith('Error en fila 3:')
        assert stock_of('etq-001') == {'etq-001': (1500, 50)}

    def test_import_missing_column(self, inventory):
        outcome = labels.import_transactions([{'ID de Etiqueta': 'etq-001', 'Cantidad (Unidades)': 1}])

        assert outcome.code == 'VALIDATION_ERROR'
        assert 'Cantidad (Muestras)' in outcome.message

    def test_import_from_reader(self, inventory):
        reader = ListReader([
            {'ID de Etiqueta': 'etq-004', 'Cantidad (Unidades)': -500, 'Cantidad (Muestras)': -20},
        ])
        assert isinstance(reader, RowReader)

        outcome = labels.import_transactions_from(reader, 'movimientos.xlsx')

        assert outcome.success
        assert reader.sources == ['movimientos.xlsx']
        assert stock_of('etq-004') == {'etq-004': (0, 0)}


class TestQuantityLimits:
    """Oversized quantities are reported, never raised."""

    def test_register_beyond_limit(self, thermal):
        outcome = labels.register('etq-002', 'addition', quantity=2**63)

        assert outcome.code == 'VALIDATION_ERROR'
        assert stock_of('etq-002') == {'etq-002': (8, 100)}
        assert not Transaction.objects.exists()

    def test_batch_result_beyond_limit(self, thermal):
        outcome = labels.apply_batch([AdjustmentLine('etq-002', regular_delta=2**63)])

        assert outcome.code == 'VALIDATION_ERROR'
        assert outcome.error.row == 2
        assert stock_of('etq-002') == {'etq-002': (8, 100)}
        assert not Transaction.objects.exists()

    def test_batch_up_to_limit(self, thermal):
        outcome = labels.apply_batch([AdjustmentLine('etq-002', regular_delta=MAX_QUANTITY - 8)])

        assert outcome.success
        assert stock_of('etq-002') == {'etq-002': (MAX_QUANTITY, 100)}


class TestBatchLogging:
    """labels.batch.applied is emitted once the outermost transaction commits."""

    def test_logged_on_commit(self, thermal, caplog, django_capture_on_commit_callbacks):
        with caplog.at_level(logging.INFO, logger='labelman'):
            with django_capture_on_commit_callbacks() as callbacks:
                labels.apply_batch([AdjustmentLine('etq-002', regular_delta=-1)])

            assert 'labels.batch.applied' not in [r.getMessage() for r in caplog.records]
            for callback in callbacks:
                callback()

        [record] = [r for r in caplog.records if r.getMessage() == 'labels.batch.applied']
        assert record.transactions == 1

    def test_rejected_batch_registers_nothing(self, thermal, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            labels.apply_batch([AdjustmentLine('etq-002', regular_delta=-9)])

        assert callbacks == []


class TestApplyOrRaise:
    """Tests for StockMovements.apply_or_raise(), the raising variant used by event completion."""

    def test_returns_newest_first(self, inventory):
        result, committed = StockMovements.apply_or_raise([
            AdjustmentLine('etq-001', regular_delta=-1),
            AdjustmentLine('etq-003', sample_delta=2),
        ])

        assert result.success
        assert [t.label_id for t in committed] == ['etq-003', 'etq-001']
        assert stock_of('etq-001') == {'etq-001': (1499, 50)}

    def test_raises_and_changes_nothing(self, thermal):
        with pytest.raises(InventoryError) as exc:
            StockMovements.apply_or_raise([AdjustmentLine('etq-002', regular_delta=-9)])

        assert exc.value.code == 'INSUFFICIENT_REGULAR_STOCK'
        assert exc.value.row == 2
        assert stock_of('etq-002') == {'etq-002': (8, 100)}
        assert not Transaction.objects.exists()
