"""
Spreadsheet Protocol — Interface for the external tabular-data codec.

Labelman defines these protocols; an xlsx/csv library adapter in the
host project implements them. Labelman itself only consumes row
mappings and produces ReportSheet values.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from labelman.exports import ReportSheet


@runtime_checkable
class RowReader(Protocol):
    """
    Protocol for reading a spreadsheet into row records.

    The first row is the header; every following non-empty row becomes
    a mapping of header → cell value.
    """

    def read_rows(self, source: Any) -> Iterator[Mapping[str, Any]]:
        """
        Read the first worksheet of a file.

        Args:
            source: Path or file-like object

        Returns:
            Iterator of row mappings, in sheet order
        """
        ...


@runtime_checkable
class SheetWriter(Protocol):
    """Protocol for writing report sheets to a workbook."""

    def write(self, sheets: Sequence[ReportSheet], filename: str) -> Any:
        """
        Write sheets, in order, to a new workbook.

        Args:
            sheets: Sheets produced by labelman.exports
            filename: Suggested file name (e.g. report_filename(event))

        Returns:
            Whatever the codec produces (path, bytes, response...)
        """
        ...
