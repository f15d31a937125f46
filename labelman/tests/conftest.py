"""
Pytest fixtures for Labelman tests.
"""

import pytest

from labelman.models import Category, Event, EventRequirement, LabelStock


@pytest.fixture
def adhesive(db):
    """Label with plenty of stock."""
    return LabelStock.objects.create(
        id='etq-001',
        name='Etiqueta Adhesiva 5x5cm',
        category=Category.CORPORAL,
        quantity=1500,
        sample_quantity=50,
    )


@pytest.fixture
def thermal(db):
    """Label below the low-stock threshold."""
    return LabelStock.objects.create(
        id='etq-002',
        name='Etiqueta Térmica 10x8cm',
        category=Category.MEDICA,
        quantity=8,
        sample_quantity=100,
    )


@pytest.fixture
def hanging(db):
    """Cardboard hang tag."""
    return LabelStock.objects.create(
        id='etq-003',
        name='Etiqueta de Cartón Colgante',
        category=Category.FACIAL,
        quantity=2300,
        sample_quantity=120,
    )


@pytest.fixture
def security(db):
    """Void security label."""
    return LabelStock.objects.create(
        id='etq-004',
        name='Etiqueta de Seguridad Void',
        category=Category.INTIMA,
        quantity=500,
        sample_quantity=20,
    )


@pytest.fixture
def inventory(adhesive, thermal, hanging, security):
    """The four demonstration labels."""
    return [adhesive, thermal, hanging, security]


@pytest.fixture
def summer_launch(inventory):
    """PLANNING event that current stock can cover."""
    event = Event.objects.create(title='Lanzamiento Colección Verano 2024')
    EventRequirement.objects.bulk_create([
        EventRequirement(event=event, label_id='etq-001', required_quantity=200,
                         required_sample_quantity=10, position=0),
        EventRequirement(event=event, label_id='etq-002', required_quantity=5,
                         required_sample_quantity=20, position=1),
        EventRequirement(event=event, label_id='etq-004', required_quantity=450,
                         required_sample_quantity=15, position=2),
    ])
    return event
