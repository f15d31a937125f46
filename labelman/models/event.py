"""
Event model — a named plan that reserves stock against future requirements.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from labelman.models.enums import EventStatus


class EventQuerySet(models.QuerySet):
    """Custom QuerySet for Event with lifecycle filters."""

    def planning(self):
        return self.filter(status=EventStatus.PLANNING)

    def completed(self):
        return self.filter(status=EventStatus.COMPLETED)

    def requiring(self, label_id: str):
        """Events with a requirement on the given label."""
        return self.filter(requirements__label_id=label_id).distinct()


class Event(models.Model):
    """
    Event plan and its label requirements.

    LIFECYCLE:

        ┌──────────┐    complete()    ┌───────────┐
        │ PLANNING │ ───────────────► │ COMPLETED │
        └──────────┘                  └───────────┘

    Requirements are editable only while PLANNING. complete() withdraws
    every requirement in one batch; if any line fails, nothing changes.
    """

    title = models.CharField(
        max_length=200,
        verbose_name=_('Título'),
    )
    status = models.CharField(
        max_length=20,
        choices=EventStatus.choices,
        default=EventStatus.PLANNING,
        db_index=True,
        verbose_name=_('Estado'),
    )

    created_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Realizado en'),
    )

    objects = EventQuerySet.as_manager()

    class Meta:
        verbose_name = _('Evento')
        verbose_name_plural = _('Eventos')
        ordering = ['-created_at', '-id']

    @property
    def is_planning(self) -> bool:
        return self.status == EventStatus.PLANNING

    @property
    def is_completed(self) -> bool:
        return self.status == EventStatus.COMPLETED

    @property
    def event_id(self) -> str:
        """Event identifier in standard format."""
        return f"evt:{self.pk}"

    def __str__(self) -> str:
        mark = '✅' if self.is_completed else '📋'
        return f"{mark} {self.title}"


class EventRequirement(models.Model):
    """
    Quantity of one label an event needs.

    label_id is a plain reference (not a FK): completed events keep
    their requirements even after the label is deleted.
    """

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='requirements',
        verbose_name=_('Evento'),
    )
    label_id = models.CharField(
        max_length=40,
        db_index=True,
        verbose_name=_('ID de Etiqueta'),
    )
    required_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Unidades requeridas'),
    )
    required_sample_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Muestras requeridas'),
    )
    position = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _('Requerimiento')
        verbose_name_plural = _('Requerimientos')
        ordering = ['event', 'position']
        constraints = [
            models.UniqueConstraint(
                fields=['event', 'label_id'],
                name='unique_requirement_per_event_label',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.label_id}: {self.required_quantity} (+{self.required_sample_quantity} muestras)"
