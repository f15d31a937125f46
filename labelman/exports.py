"""
Spreadsheet export — sheets for an external writer.

Produces plain ReportSheet values; writing the actual file is the job
of a SheetWriter (see protocols.spreadsheet).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from labelman.imports import LABEL_COLUMNS, TRANSACTION_COLUMNS
from labelman.models.event import Event
from labelman.services.planning import EventPlanner

NO_CATEGORY = 'Sin Categoría'
SAMPLE_MARKER = 'MUESTRA'
# Excel limit
MAX_SHEET_NAME = 31


@dataclass(frozen=True)
class ReportSheet:
    """One worksheet: name, header row, data rows, column widths."""

    name: str
    headers: tuple[str, ...]
    rows: list[list[str | int]] = field(default_factory=list)
    widths: tuple[int, ...] = ()


def requirement_report(event: Event | int) -> list[ReportSheet]:
    """
    Event requirements grouped by category, one sheet per category.

    Accepts an Event or its pk (unknown pk: InventoryError EVENT_NOT_FOUND).

    Row: ["", required units, LABEL NAME] and, only when samples are
    required, "MUESTRA" and the sample quantity.
    """
    groups: dict[str, list] = {}
    for status in EventPlanner.deficits(event):
        groups.setdefault(status.category or NO_CATEGORY, []).append(status)

    sheets = []
    for category, statuses in groups.items():
        category_name = category.upper()
        rows = []
        for status in statuses:
            row: list[str | int] = ['', status.required_quantity, status.label_name.upper()]
            if status.required_sample_quantity > 0:
                row.extend([SAMPLE_MARKER, status.required_sample_quantity])
            rows.append(row)
        sheets.append(ReportSheet(
            name=category_name[:MAX_SHEET_NAME],
            headers=('STOCK', 'CANT', category_name, 'M', 'UND'),
            rows=rows,
            widths=(8, 8, 50, 10, 8),
        ))
    return sheets


def report_filename(event: Event | int) -> str:
    """File name for the requirement report."""
    title = re.sub(r"\s+", "_", EventPlanner.resolve(event).title)
    return f"{title}_requerimientos.xlsx"


def transaction_template() -> ReportSheet:
    """Empty sheet with the transaction import headers."""
    return ReportSheet(name='Transacciones', headers=TRANSACTION_COLUMNS, widths=(20, 25, 25))


def label_template() -> ReportSheet:
    """Empty sheet with the label import headers."""
    return ReportSheet(name='Nuevas Etiquetas', headers=LABEL_COLUMNS, widths=(20, 50))
