"""
Labelman configuration.

Two knobs: the regular-unit level at which a label is reported as low
stock (inclusive), and the prefix of ids generated for new labels.
Sample quantities never count toward low stock.

Usage in settings.py:
    LABELMAN = {
        "LOW_STOCK_THRESHOLD": 10,
        "LABEL_ID_PREFIX": "etq",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class LabelmanSettings:
    """Labelman configuration settings."""

    # Regular quantity at or below which a label counts as low stock
    LOW_STOCK_THRESHOLD: int = 10

    # Prefix for generated label ids ("etq" -> "etq-1a2b3c4d")
    LABEL_ID_PREFIX: str = "etq"


def get_labelman_settings() -> LabelmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "LABELMAN", {})
    return LabelmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in LabelmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_labelman_settings(), name)


labelman_settings = _LazySettings()
