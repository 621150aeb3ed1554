# Generated manually for payments app

from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PaymentApplication',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('payment_no', models.CharField(db_index=True, max_length=50)),
                ('description', models.CharField(max_length=255)),
                ('gross_amount', models.DecimalField(decimal_places=2, max_digits=15, validators=[MinValueValidator(Decimal('0.00'))])),
                ('advance_payment_recovery', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15)),
                ('retention', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15)),
                ('vat_recovery', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15)),
                ('vat', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15)),
                ('net_payment', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15)),
                ('rate_scheme', models.CharField(blank=True, choices=[('initial', 'Initial (20% advance / 10% retention)'), ('revised', 'Revised (32.09% advance / 5% retention)')], max_length=20)),
                ('payment_status', models.CharField(choices=[('Draft', 'Draft'), ('Submitted', 'Submitted'), ('Submitted on ACONEX', 'Submitted on ACONEX'), ('Certified', 'Certified'), ('Paid', 'Paid')], default='Draft', max_length=30)),
                ('approval_status', models.CharField(choices=[('Pending', 'Pending'), ('Received', 'Received'), ('Approved', 'Approved'), ('Rejected', 'Rejected')], default='Pending', max_length=20)),
                ('submitted_date', models.DateField(blank=True, null=True)),
                ('invoice_date', models.DateField(blank=True, null=True)),
                ('ffc_live_action', models.TextField(blank=True)),
                ('rsg_live_action', models.TextField(blank=True)),
                ('remarks', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'payment_applications',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['payment_status'], name='payment_status_idx')],
            },
        ),
    ]
