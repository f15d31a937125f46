"""
Spreadsheet import — turn row records into engine lines or new labels.

Rows come from an external reader (see protocols.spreadsheet.RowReader)
as mappings of header → cell value, one per data row. Row numbers in
errors count the header as row 1, so the first data row is row 2.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from labelman.engine import FIRST_ROW, MAX_QUANTITY, AdjustmentLine
from labelman.exceptions import InventoryError
from labelman.models.enums import Category

LABEL_ID_COLUMN = 'ID de Etiqueta'
QUANTITY_COLUMN = 'Cantidad (Unidades)'
SAMPLE_QUANTITY_COLUMN = 'Cantidad (Muestras)'
TRANSACTION_COLUMNS = (LABEL_ID_COLUMN, QUANTITY_COLUMN, SAMPLE_QUANTITY_COLUMN)

CATEGORY_COLUMN = 'Categoría'
NAME_COLUMN = 'Nombre de la Etiqueta'
LABEL_COLUMNS = (CATEGORY_COLUMN, NAME_COLUMN)


@dataclass(frozen=True)
class NewLabel:
    """A label definition read from a spreadsheet row."""

    name: str
    category: Category


def parse_transaction_rows(rows: Sequence[Mapping[str, Any]]) -> list[AdjustmentLine]:
    """
    Rows with label id and signed deltas → AdjustmentLines.

    Raises:
        InventoryError('VALIDATION_ERROR'): empty input, missing column,
            empty label id or a quantity that is not an integer
    """
    _require_columns(rows, TRANSACTION_COLUMNS)

    lines = []
    for index, row in enumerate(rows):
        number = index + FIRST_ROW
        label_id = _text(row.get(LABEL_ID_COLUMN))
        if not label_id:
            raise InventoryError(
                'VALIDATION_ERROR',
                f"Error en la fila {number}: El '{LABEL_ID_COLUMN}' no puede estar vacío.",
                row=number,
            )
        lines.append(AdjustmentLine(
            label_id=label_id,
            regular_delta=parse_quantity(row.get(QUANTITY_COLUMN), number, QUANTITY_COLUMN),
            sample_delta=parse_quantity(row.get(SAMPLE_QUANTITY_COLUMN), number, SAMPLE_QUANTITY_COLUMN),
        ))
    return lines


def parse_label_rows(rows: Sequence[Mapping[str, Any]]) -> list[NewLabel]:
    """
    Rows with category and name → NewLabels.

    Raises:
        InventoryError('VALIDATION_ERROR'): empty input, missing column,
            empty name/category or an unknown category
    """
    _require_columns(rows, LABEL_COLUMNS)

    labels = []
    for index, row in enumerate(rows):
        number = index + FIRST_ROW
        name = _text(row.get(NAME_COLUMN))
        raw_category = _text(row.get(CATEGORY_COLUMN)).lower()
        if not name or not raw_category:
            raise InventoryError(
                'VALIDATION_ERROR',
                f"Error en la fila {number}: 'Nombre' y 'Categoría' no pueden estar vacíos.",
                row=number,
            )
        category = Category.parse(raw_category)
        if category is None:
            raise InventoryError(
                'VALIDATION_ERROR',
                f"Error en la fila {number}: La categoría '{raw_category}' no es válida.",
                row=number,
                category=raw_category,
            )
        labels.append(NewLabel(name=name, category=category))
    return labels


def parse_quantity(value: Any, row: int | None = None, column: str = '') -> int:
    """
    Cell value → signed int. Blank/missing is 0.

    Accepts ints, integral floats and numeric strings ("5", "-3", "2.0").
    The magnitude may not exceed MAX_QUANTITY.
    """
    number = _as_int(value, row, column)
    if abs(number) > MAX_QUANTITY:
        raise InventoryError(
            'VALIDATION_ERROR',
            f"{_where(row)}La cantidad '{value}' de '{column}' supera el máximo "
            f"permitido ({MAX_QUANTITY}).",
            row=row,
            column=column,
        )
    return number


def _as_int(value: Any, row: int | None, column: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise _bad_quantity(value, row, column)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise _bad_quantity(value, row, column)

    text = str(value).strip()
    if not text:
        return 0
    try:
        number = float(text)
    except ValueError:
        raise _bad_quantity(value, row, column) from None
    if not number.is_integer():
        raise _bad_quantity(value, row, column)
    return int(number)


def _where(row: int | None) -> str:
    return f"Error en la fila {row}: " if row is not None else ""


def _bad_quantity(value, row, column) -> InventoryError:
    return InventoryError(
        'VALIDATION_ERROR',
        f"{_where(row)}La cantidad '{value}' de '{column}' no es un número entero.",
        row=row,
        column=column,
    )


def _require_columns(rows: Sequence[Mapping[str, Any]], columns: Sequence[str]) -> None:
    if not rows:
        raise InventoryError('VALIDATION_ERROR', 'El archivo Excel está vacío o no tiene datos.')
    headers = set(rows[0].keys())
    for column in columns:
        if column not in headers:
            raise InventoryError(
                'VALIDATION_ERROR',
                f'Falta la columna requerida en el Excel: "{column}".',
                column=column,
            )


def _text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()
