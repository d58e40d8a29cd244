# Generated manually for the quality app

import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def percent():
    return [
        django.core.validators.MinValueValidator(Decimal('0')),
        django.core.validators.MaxValueValidator(Decimal('100')),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('procurement', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='QualityAssessment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('batch_number', models.CharField(max_length=20)),
                ('moisture', models.DecimalField(decimal_places=2, max_digits=5, validators=percent())),
                ('group1_defects', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=percent())),
                ('group2_defects', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=percent())),
                ('below12', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=percent())),
                ('pods', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=percent())),
                ('husks', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=percent())),
                ('stones', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=percent())),
                ('suggested_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('comments', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('pending', 'Pending review'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=10)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('rejection_reason', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('assessed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quality_assessments', to=settings.AUTH_USER_MODEL)),
                ('coffee_record', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='quality_assessment', to='procurement.coffeerecord')),
                ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reviewed_assessments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'quality_assessments',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status', 'created_at'], name='assessments_status_idx')],
            },
        ),
    ]
