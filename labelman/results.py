"""
Outcome — the result every public mutating operation returns.

Failures never cross the facade as exceptions: callers check
``outcome.success`` and show ``outcome.message``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from labelman.exceptions import InventoryError


@dataclass(frozen=True)
class Outcome:
    """Success/failure of an operation with a human-readable message."""

    success: bool
    message: str
    error: InventoryError | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, **data: Any) -> Outcome:
        return cls(success=True, message=message, data=data)

    @classmethod
    def failed(cls, error: InventoryError, message: str | None = None) -> Outcome:
        return cls(
            success=False,
            message=message or error.message,
            error=error,
            data=dict(error.data),
        )

    @property
    def code(self) -> str | None:
        """Error code of a failed outcome (None on success)."""
        return self.error.code if self.error is not None else None

    def __bool__(self) -> bool:
        return self.success
