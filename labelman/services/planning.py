"""
Event planning — create, edit and complete events; deficit analysis.

Completion is the only path from PLANNING to COMPLETED. It withdraws
every requirement through the batch engine in the same database
transaction that flips the status, so either both happen or neither.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from django.db import transaction
from django.utils import timezone

from labelman.engine import AdjustmentLine
from labelman.exceptions import InventoryError
from labelman.imports import parse_quantity
from labelman.models.enums import EventStatus
from labelman.models.event import Event, EventRequirement
from labelman.results import Outcome
from labelman.services.inventory import InventoryStore
from labelman.services.movements import StockMovements

logger = logging.getLogger('labelman')

UNKNOWN_LABEL_NAME = 'Etiqueta Desconocida'


@dataclass(frozen=True)
class RequirementInput:
    """Requirement as entered in the planner."""

    label_id: str
    required_quantity: int = 0
    required_sample_quantity: int = 0


@dataclass(frozen=True)
class RequirementStatus:
    """A requirement against today's stock."""

    label_id: str
    label_name: str
    category: str | None
    required_quantity: int
    required_sample_quantity: int
    current_quantity: int
    current_sample_quantity: int
    unit_deficit: int
    sample_deficit: int

    @property
    def is_satisfiable(self) -> bool:
        """Can today's stock cover this requirement?"""
        return self.unit_deficit == 0 and self.sample_deficit == 0


class EventPlanner:
    """Event lifecycle methods."""

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def get(cls, event_id) -> Event | None:
        return Event.objects.filter(pk=event_id).first()

    @classmethod
    def list(cls, status: str | None = None):
        """Events, newest first."""
        qs = Event.objects.prefetch_related('requirements')
        if status is not None:
            qs = qs.filter(status=status)
        return qs

    @classmethod
    def resolve(cls, event: Event | Any) -> Event:
        """
        An Event, or the Event with this pk.

        Raises:
            InventoryError('EVENT_NOT_FOUND'): no event with that pk
        """
        if isinstance(event, Event):
            return event
        try:
            return Event.objects.get(pk=event)
        except (Event.DoesNotExist, ValueError, TypeError):
            raise InventoryError('EVENT_NOT_FOUND', event_id=event) from None

    @classmethod
    def deficits(cls, event: Event | Any) -> list[RequirementStatus]:
        """
        Each requirement with current stock and deficit, sorted by label name.

        deficit = max(0, required - current), separately for units and
        samples. Unknown labels count as zero stock. Accepts an Event or
        its pk; an unknown pk raises InventoryError('EVENT_NOT_FOUND').
        """
        event = cls.resolve(event)

        requirements = list(event.requirements.all())
        labels = InventoryStore.all().in_bulk([req.label_id for req in requirements])

        statuses = []
        for req in requirements:
            label = labels.get(req.label_id)
            current = label.quantity if label else 0
            current_sample = label.sample_quantity if label else 0
            statuses.append(RequirementStatus(
                label_id=req.label_id,
                label_name=label.name if label else UNKNOWN_LABEL_NAME,
                category=label.category if label else None,
                required_quantity=req.required_quantity,
                required_sample_quantity=req.required_sample_quantity,
                current_quantity=current,
                current_sample_quantity=current_sample,
                unit_deficit=max(0, req.required_quantity - current),
                sample_deficit=max(0, req.required_sample_quantity - current_sample),
            ))
        statuses.sort(key=lambda status: status.label_name.lower())
        return statuses

    # ══════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def create(cls, title: str, requirements: Iterable = ()) -> Outcome:
        """
        Create a PLANNING event.

        Requirements with nothing required (0 units and 0 samples) are
        dropped.

        Returns:
            Outcome with data['event'] on success
        """
        try:
            title = cls._clean_title(title)
            cleaned = cls._clean_requirements(requirements)
            with InventoryStore.writer():
                event = Event.objects.create(title=title, status=EventStatus.PLANNING)
                cls._store_requirements(event, cleaned)
        except InventoryError as exc:
            return Outcome.failed(exc)

        logger.info(
            "labels.event.created",
            extra={"event_id": event.pk, "requirements": len(cleaned)},
        )
        return Outcome.ok("Evento creado con éxito.", event=event)

    @classmethod
    def edit(cls, event_id, title: str, requirements: Iterable = ()) -> Outcome:
        """
        Replace title and requirements of a PLANNING event.

        Fails with EVENT_NOT_FOUND or EVENT_ALREADY_COMPLETED; nothing
        changes on failure.
        """
        try:
            title = cls._clean_title(title)
            cleaned = cls._clean_requirements(requirements)
            with InventoryStore.writer():
                event = cls._locked_planning_event(event_id)
                event.title = title
                event.save(update_fields=['title'])
                event.requirements.all().delete()
                cls._store_requirements(event, cleaned)
        except InventoryError as exc:
            return Outcome.failed(exc)

        return Outcome.ok("Evento actualizado con éxito.", event=event)

    @classmethod
    def complete(cls, event_id) -> Outcome:
        """
        Complete an event: withdraw all requirements, then mark COMPLETED.

        One batch line per requirement (-required units, -required
        samples). If any line fails, the status stays PLANNING and the
        inventory and ledger are unchanged.
        """
        try:
            with InventoryStore.writer():
                event = cls._locked_planning_event(event_id)
                lines = [
                    AdjustmentLine(
                        label_id=req.label_id,
                        regular_delta=-req.required_quantity,
                        sample_delta=-req.required_sample_quantity,
                    )
                    for req in event.requirements.all()
                ]
                try:
                    _, committed = StockMovements.apply_or_raise(lines)
                except InventoryError as exc:
                    raise InventoryError(
                        exc.code,
                        f"No se pudo completar el evento. {exc.message}",
                        event_id=event.pk,
                        **exc.data,
                    ) from exc

                event.status = EventStatus.COMPLETED
                event.completed_at = timezone.now()
                event.save(update_fields=['status', 'completed_at'])
                transaction.on_commit(lambda: logger.info(
                    "labels.event.completed",
                    extra={"event_id": event.pk, "transactions": len(committed)},
                ))
        except InventoryError as exc:
            logger.info(
                "labels.event.rejected",
                extra={"event_id": event_id, "code": exc.code},
            )
            return Outcome.failed(exc)

        return Outcome.ok(
            "¡Evento completado! El stock ha sido actualizado.",
            event=event,
            transactions=committed,
        )

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _locked_planning_event(cls, event_id) -> Event:
        """Lock the event row; it must exist and be PLANNING."""
        try:
            event = Event.objects.select_for_update().get(pk=event_id)
        except (Event.DoesNotExist, ValueError, TypeError):
            raise InventoryError('EVENT_NOT_FOUND', event_id=event_id) from None

        if event.status != EventStatus.PLANNING:
            raise InventoryError(
                'EVENT_ALREADY_COMPLETED',
                event_id=event.pk,
                current=event.status,
            )
        return event

    @classmethod
    def _clean_title(cls, title) -> str:
        title = (title or '').strip()
        if not title:
            raise InventoryError('VALIDATION_ERROR', 'El título del evento es obligatorio.')
        return title

    @classmethod
    def _clean_requirements(cls, requirements: Iterable) -> list[RequirementInput]:
        """Validate, drop empty requirements, reject duplicate labels."""
        cleaned = []
        seen = set()
        for raw in requirements:
            req = cls._as_input(raw)
            if req.required_quantity < 0 or req.required_sample_quantity < 0:
                raise InventoryError(
                    'VALIDATION_ERROR',
                    'Las cantidades requeridas no pueden ser negativas.',
                    label_id=req.label_id,
                )
            if req.required_quantity == 0 and req.required_sample_quantity == 0:
                continue
            if req.label_id in seen:
                raise InventoryError(
                    'VALIDATION_ERROR',
                    f"La etiqueta '{req.label_id}' aparece más de una vez en el evento.",
                    label_id=req.label_id,
                )
            seen.add(req.label_id)
            cleaned.append(req)
        return cleaned

    @classmethod
    def _as_input(cls, raw) -> RequirementInput:
        """Accept RequirementInput, EventRequirement or a mapping."""
        if isinstance(raw, Mapping):
            label_id = raw.get('label_id')
            quantity = raw.get('required_quantity')
            sample_quantity = raw.get('required_sample_quantity')
        else:
            label_id = raw.label_id
            quantity = raw.required_quantity
            sample_quantity = raw.required_sample_quantity

        if not label_id:
            raise InventoryError('VALIDATION_ERROR', 'Cada requerimiento necesita una etiqueta.')
        return RequirementInput(
            label_id=str(label_id),
            required_quantity=parse_quantity(quantity, column='required_quantity'),
            required_sample_quantity=parse_quantity(sample_quantity, column='required_sample_quantity'),
        )

    @classmethod
    def _store_requirements(cls, event: Event, requirements: list[RequirementInput]) -> None:
        EventRequirement.objects.bulk_create([
            EventRequirement(
                event=event,
                label_id=req.label_id,
                required_quantity=req.required_quantity,
                required_sample_quantity=req.required_sample_quantity,
                position=position,
            )
            for position, req in enumerate(requirements)
        ])
