"""
Exceptions for Labelman.

All errors are InventoryError with a structured code for programmatic handling.
Services raise it internally; the public facade reports it as an Outcome.
"""

from typing import Any


class InventoryError(Exception):
    """
    Structured exception for label inventory operations.

    Usage:
        try:
            StockMovements.apply_or_raise(lines)
        except InventoryError as e:
            if e.code == 'INSUFFICIENT_REGULAR_STOCK':
                print(f"Solo hay {e.available} disponibles")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data (row, label_id, requested, available...)
    """

    _default_messages = {
        'UNKNOWN_LABEL': 'La etiqueta no existe.',
        'INSUFFICIENT_REGULAR_STOCK': 'Stock insuficiente de unidades.',
        'INSUFFICIENT_SAMPLE_STOCK': 'Stock insuficiente de muestras.',
        'EVENT_NOT_FOUND': 'Evento no encontrado.',
        'EVENT_ALREADY_COMPLETED': 'Este evento ya ha sido completado.',
        'LABEL_NOT_FOUND': 'La etiqueta no existe.',
        'LABEL_HAS_STOCK': (
            'No se puede eliminar una etiqueta con stock. '
            'Por favor, retira todas las unidades y muestras primero.'
        ),
        'LABEL_IN_USE_BY_PLANNING_EVENT': (
            'No se puede eliminar una etiqueta que está siendo utilizada '
            'en un evento en planificación.'
        ),
        'VALIDATION_ERROR': 'Datos inválidos.',
    }

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"InventoryError({self.code!r}, {self.message!r})"

    @property
    def row(self) -> int | None:
        """Shortcut for data['row'] (spreadsheet-style row number)."""
        return self.data.get('row')

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': dict(self.data),
        }
