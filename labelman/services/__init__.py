"""
Label services — modular organization of inventory operations.

    from labelman.services import InventoryStore, HistoryLedger, StockMovements, EventPlanner, LabelCatalog
"""

from labelman.services.catalog import LabelCatalog
from labelman.services.inventory import InventoryStore
from labelman.services.ledger import HistoryLedger
from labelman.services.movements import StockMovements
from labelman.services.planning import EventPlanner

__all__ = [
    'InventoryStore',
    'HistoryLedger',
    'StockMovements',
    'EventPlanner',
    'LabelCatalog',
]
