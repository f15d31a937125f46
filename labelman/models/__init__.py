"""
Labelman Models.

Core models for label inventory:
- LabelStock: Catalog entry with regular and sample quantities
- Transaction: Immutable ledger of committed movements
- Event: Planned usage of stock
- EventRequirement: Quantity of one label an event needs
"""

from labelman.models.enums import Category, EventStatus, TransactionKind
from labelman.models.event import Event, EventRequirement
from labelman.models.label import LabelStock
from labelman.models.transaction import Transaction

__all__ = [
    'Category',
    'TransactionKind',
    'EventStatus',
    'LabelStock',
    'Transaction',
    'Event',
    'EventRequirement',
]
