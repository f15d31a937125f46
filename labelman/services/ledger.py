"""
History ledger — append-only log of committed transactions, newest first.
"""

from collections.abc import Iterable

from django.utils import timezone

from labelman.engine import PendingTransaction
from labelman.models.transaction import Transaction


class HistoryLedger:
    """Ledger reads and the two permitted writes (append, name sync)."""

    @classmethod
    def entries(cls, label_id: str | None = None):
        """Committed transactions, newest first."""
        qs = Transaction.objects.all()
        if label_id is not None:
            qs = qs.for_label(label_id)
        return qs

    @classmethod
    def append(cls, pending: Iterable[PendingTransaction]) -> list[Transaction]:
        """
        Insert pending transactions in processing order.

        Later inserts sort first, so the last processed line ends up at
        the top of the ledger.
        """
        now = timezone.now()
        rows = [
            Transaction(
                label_id=entry.label_id,
                label_name=entry.label_name,
                kind=entry.kind,
                quantity=entry.quantity,
                sample_quantity=entry.sample_quantity or None,
                timestamp=now,
            )
            for entry in pending
        ]
        if not rows:
            return []
        return Transaction.objects.bulk_create(rows)

    @classmethod
    def rename_label(cls, label_id: str, name: str) -> int:
        """Sync the denormalized label name. Returns rows changed."""
        return Transaction.objects.filter(label_id=label_id).update(label_name=name)
