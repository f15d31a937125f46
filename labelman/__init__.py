"""
Labelman — inventario de etiquetas.

Stock de etiquetas (unidades y muestras), historial de movimientos y
eventos que consumen stock planificado.

Uso:
    from labelman import labels, InventoryError

    labels.add('Etiqueta Adhesiva 5x5cm', 'corporal', quantity=1500)
    labels.register('etq-001', 'withdrawal', quantity=200)
    labels.history()  # más reciente primero
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'labels':
        from labelman.service import Labels
        return Labels
    elif name == 'InventoryError':
        from labelman.exceptions import InventoryError
        return InventoryError
    elif name == 'Outcome':
        from labelman.results import Outcome
        return Outcome
    elif name == 'AdjustmentLine':
        from labelman.engine import AdjustmentLine
        return AdjustmentLine
    elif name == 'LabelStock':
        from labelman.models.label import LabelStock
        return LabelStock
    elif name == 'Transaction':
        from labelman.models.transaction import Transaction
        return Transaction
    elif name == 'Event':
        from labelman.models.event import Event
        return Event
    elif name == 'EventRequirement':
        from labelman.models.event import EventRequirement
        return EventRequirement
    elif name == 'Category':
        from labelman.models.enums import Category
        return Category
    elif name == 'TransactionKind':
        from labelman.models.enums import TransactionKind
        return TransactionKind
    elif name == 'EventStatus':
        from labelman.models.enums import EventStatus
        return EventStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'labels',
    'InventoryError',
    'Outcome',
    'AdjustmentLine',
    'LabelStock',
    'Transaction',
    'Event',
    'EventRequirement',
    'Category',
    'TransactionKind',
    'EventStatus',
]

__version__ = '0.1.0'
