"""
Initial migration for Labelman models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import labelman.models.label


class Migration(migrations.Migration):
    """Create Labelman models: LabelStock, Transaction, Event, EventRequirement."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='LabelStock',
            fields=[
                ('id', models.CharField(default=labelman.models.label.generate_label_id, max_length=40, primary_key=True, serialize=False, verbose_name='ID de Etiqueta')),
                ('name', models.CharField(max_length=200, verbose_name='Nombre')),
                ('category', models.CharField(choices=[('médica', 'Médica'), ('nutricosmética', 'Nutricosmética'), ('facial', 'Facial'), ('corporal', 'Corporal'), ('capilar', 'Capilar'), ('podológico', 'Podológico'), ('íntima', 'Íntima')], max_length=20, verbose_name='Categoría')),
                ('quantity', models.PositiveIntegerField(default=0, verbose_name='Cantidad (Unidades)')),
                ('sample_quantity', models.PositiveIntegerField(default=0, verbose_name='Cantidad (Muestras)')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Etiqueta',
                'verbose_name_plural': 'Etiquetas',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['category', 'name'], name='labelman_label_cat_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('label_id', models.CharField(db_index=True, max_length=40, verbose_name='ID de Etiqueta')),
                ('label_name', models.CharField(help_text='Copia del nombre al momento del movimiento (se sincroniza al renombrar).', max_length=200, verbose_name='Etiqueta')),
                ('kind', models.CharField(choices=[('addition', 'Ingreso'), ('withdrawal', 'Salida')], max_length=20, verbose_name='Tipo')),
                ('quantity', models.PositiveIntegerField(default=0, verbose_name='Unidades')),
                ('sample_quantity', models.PositiveIntegerField(blank=True, help_text='Vacío cuando el movimiento no incluye muestras.', null=True, verbose_name='Muestras')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Fecha/Hora')),
            ],
            options={
                'verbose_name': 'Movimiento',
                'verbose_name_plural': 'Movimientos',
                'ordering': ['-id'],
                'indexes': [models.Index(fields=['label_id', 'timestamp'], name='labelman_txn_label_ts_idx')],
            },
        ),
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200, verbose_name='Título')),
                ('status', models.CharField(choices=[('planning', 'En planificación'), ('completed', 'Realizado')], db_index=True, default='planning', max_length=20, verbose_name='Estado')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='Realizado en')),
            ],
            options={
                'verbose_name': 'Evento',
                'verbose_name_plural': 'Eventos',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='EventRequirement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('label_id', models.CharField(db_index=True, max_length=40, verbose_name='ID de Etiqueta')),
                ('required_quantity', models.PositiveIntegerField(default=0, verbose_name='Unidades requeridas')),
                ('required_sample_quantity', models.PositiveIntegerField(default=0, verbose_name='Muestras requeridas')),
                ('position', models.PositiveIntegerField(default=0)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='requirements', to='labelman.event', verbose_name='Evento')),
            ],
            options={
                'verbose_name': 'Requerimiento',
                'verbose_name_plural': 'Requerimientos',
                'ordering': ['event', 'position'],
                'constraints': [models.UniqueConstraint(fields=('event', 'label_id'), name='unique_requirement_per_event_label')],
            },
        ),
    ]
