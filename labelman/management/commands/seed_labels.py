"""
Management command to load the demonstration catalog.

Usage:
    python manage.py seed_labels
    python manage.py seed_labels --dry-run
"""

from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from labelman.models import (
    Category,
    Event,
    EventRequirement,
    EventStatus,
    LabelStock,
    Transaction,
    TransactionKind,
)

LABELS = [
    ('etq-001', 'Etiqueta Adhesiva 5x5cm', Category.CORPORAL, 1500, 50),
    ('etq-002', 'Etiqueta Térmica 10x8cm', Category.MEDICA, 8, 100),
    ('etq-003', 'Etiqueta de Cartón Colgante', Category.FACIAL, 2300, 120),
    ('etq-004', 'Etiqueta de Seguridad Void', Category.INTIMA, 500, 20),
]

# (label id, kind, units, samples, days ago), oldest first
HISTORY = [
    ('etq-004', TransactionKind.ADDITION, 500, 20, 3),
    ('etq-001', TransactionKind.ADDITION, 1500, 50, 2),
    ('etq-002', TransactionKind.ADDITION, 1000, 100, 2),
    ('etq-003', TransactionKind.ADDITION, 2500, 120, 2),
    ('etq-002', TransactionKind.WITHDRAWAL, 992, None, 1),
    ('etq-003', TransactionKind.WITHDRAWAL, 200, None, 1),
]

EVENT_TITLE = 'Lanzamiento Colección Verano 2024'
EVENT_REQUIREMENTS = [
    ('etq-001', 200, 10),
    ('etq-002', 5, 20),
    ('etq-004', 450, 15),
]


class Command(BaseCommand):
    """Seed demonstration labels command."""

    help = 'Carga etiquetas, movimientos y un evento de demostración'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Muestra lo que se cargaría sin ejecutar'
        )

    def handle(self, *args, **options):
        if LabelStock.objects.exists():
            raise CommandError('El inventario ya tiene etiquetas; no se cargan datos de demostración.')

        if options['dry_run']:
            self.stdout.write(
                f'{len(LABELS)} etiqueta(s), {len(HISTORY)} movimiento(s) '
                f'y 1 evento serían cargados'
            )
            return

        now = timezone.now()
        names = {label_id: name for label_id, name, *_ in LABELS}

        with transaction.atomic():
            LabelStock.objects.bulk_create([
                LabelStock(id=label_id, name=name, category=category,
                           quantity=quantity, sample_quantity=sample_quantity)
                for label_id, name, category, quantity, sample_quantity in LABELS
            ])
            # One insert per row keeps ledger order equal to HISTORY order
            for label_id, kind, quantity, sample_quantity, days_ago in HISTORY:
                Transaction.objects.create(
                    label_id=label_id,
                    label_name=names[label_id],
                    kind=kind,
                    quantity=quantity,
                    sample_quantity=sample_quantity,
                    timestamp=now - timedelta(days=days_ago),
                )
            event = Event.objects.create(title=EVENT_TITLE, status=EventStatus.PLANNING)
            EventRequirement.objects.bulk_create([
                EventRequirement(event=event, label_id=label_id, required_quantity=quantity,
                                 required_sample_quantity=sample_quantity, position=position)
                for position, (label_id, quantity, sample_quantity) in enumerate(EVENT_REQUIREMENTS)
            ])

        self.stdout.write(
            self.style.SUCCESS(
                f'{len(LABELS)} etiqueta(s), {len(HISTORY)} movimiento(s) y 1 evento cargados'
            )
        )
