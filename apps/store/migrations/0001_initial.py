# Generated manually for the store app

import uuid
from decimal import Decimal

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
            name='StoreReport',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('coffee_type', models.CharField(choices=[('arabica', 'Arabica'), ('robusta', 'Robusta')], max_length=20)),
                ('kilograms_bought', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('average_buying_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('kilograms_sold', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('bags_sold', models.PositiveIntegerField(default=0)),
                ('sold_to', models.CharField(blank=True, max_length=200)),
                ('bags_left', models.PositiveIntegerField(default=0)),
                ('kilograms_left', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('kilograms_unbought', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('advances_given', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('comments', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('input_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='store_reports', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'store_reports',
                'ordering': ['-date', 'coffee_type'],
            },
        ),
        migrations.AddConstraint(
            model_name='storereport',
            constraint=models.UniqueConstraint(fields=('date', 'coffee_type'), name='unique_store_report_per_day'),
        ),
    ]
