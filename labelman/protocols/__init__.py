"""
Labelman Protocols.

Defines interfaces for external system integration.
"""

from labelman.protocols.spreadsheet import RowReader, SheetWriter

__all__ = [
    "RowReader",
    "SheetWriter",
]
