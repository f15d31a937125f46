"""
Stock alerts — low-stock detection.

Usage:
    from labelman.services.alerts import low_stock

    # After stock changes or in a periodic task
    for label in low_stock():
        notify(label)
"""

import logging

from labelman.conf import labelman_settings
from labelman.models.label import LabelStock
from labelman.services.inventory import InventoryStore

logger = logging.getLogger('labelman')


def low_stock(threshold: int | None = None) -> list[LabelStock]:
    """
    Labels whose regular quantity is at or below the threshold.

    Args:
        threshold: Override for LABELMAN['LOW_STOCK_THRESHOLD'].

    Returns:
        Labels sorted by name.
    """
    if threshold is None:
        threshold = labelman_settings.LOW_STOCK_THRESHOLD

    labels = list(InventoryStore.all().filter(quantity__lte=threshold).order_by('name'))
    for label in labels:
        logger.warning(
            "labels.low_stock",
            extra={
                "label_id": label.pk,
                "qty": label.quantity,
                "threshold": threshold,
            },
        )
    return labels


def stock_overview(threshold: int | None = None) -> list[LabelStock]:
    """All labels: low stock first, then the rest, each group by name."""
    if threshold is None:
        threshold = labelman_settings.LOW_STOCK_THRESHOLD

    labels = InventoryStore.all().order_by('name')
    low = [label for label in labels if label.quantity <= threshold]
    normal = [label for label in labels if label.quantity > threshold]
    return low + normal
