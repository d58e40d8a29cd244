# Generated manually for the sales app

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SalesTransaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('customer', models.CharField(max_length=200)),
                ('coffee_type', models.CharField(choices=[('arabica', 'Arabica'), ('robusta', 'Robusta')], max_length=20)),
                ('weight', models.DecimalField(decimal_places=2, max_digits=12)),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=16)),
                ('truck_details', models.CharField(blank=True, max_length=200)),
                ('driver_details', models.CharField(blank=True, max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sales_recorded', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'sales_transactions',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['date'], name='sales_date_idx')],
            },
        ),
    ]
