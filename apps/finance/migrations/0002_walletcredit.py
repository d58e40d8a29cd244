# Generated manually for the finance app

import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('finance', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='WalletCredit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('credit_type', models.CharField(choices=[('daily_salary', 'Daily salary'), ('manual', 'Manual credit')], default='manual', max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('reference', models.CharField(max_length=100, unique=True)),
                ('reason', models.CharField(blank=True, max_length=255)),
                ('credit_date', models.DateField(default=django.utils.timezone.localdate)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='wallet_credits', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'wallet_credits',
                'ordering': ['-credit_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'credit_date'], name='wallet_credits_user_date_idx'),
                ],
            },
        ),
    ]
