# Generated manually for variations app

from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='VariationOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('subject', models.CharField(default='New Variation Order', max_length=500)),
                ('submission_type', models.CharField(choices=[('VO', 'VO'), ('GenCorr', 'Gen Corr'), ('RFI', 'RFI'), ('Email', 'Email')], default='VO', max_length=10)),
                ('submission_reference', models.CharField(blank=True, max_length=100)),
                ('response_reference', models.CharField(blank=True, max_length=100)),
                ('submission_date', models.DateField(default=django.utils.timezone.localdate)),
                ('assessment_value', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True, validators=[MinValueValidator(Decimal('0.00'))])),
                ('proposal_value', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True, validators=[MinValueValidator(Decimal('0.00'))])),
                ('approved_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True, validators=[MinValueValidator(Decimal('0.00'))])),
                ('status', models.CharField(choices=[('PendingWithFFC', 'Pending with FFC'), ('PendingWithRSG', 'Pending with RSG'), ('PendingWithRSGFFC', 'Pending with RSG/FFC'), ('ApprovedAwaitingDVO', 'Approved & Awaiting for the DVO to be issued'), ('DVORRIssued', 'DVO RR Issued')], default='PendingWithFFC', max_length=30)),
                ('vor_reference', models.CharField(blank=True, max_length=100)),
                ('dvo_reference', models.CharField(blank=True, max_length=100)),
                ('dvo_issued_date', models.DateField(blank=True, null=True)),
                ('remarks', models.TextField(blank=True, max_length=2000)),
                ('action_notes', models.TextField(blank=True, max_length=2000)),
                ('ffc_rsg_proposed_file', models.CharField(blank=True, max_length=500)),
                ('rsg_assessed_file', models.CharField(blank=True, max_length=500)),
                ('dvo_rr_approved_file', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'variation_orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='vo_status_idx'),
                    models.Index(fields=['submission_date'], name='vo_submission_date_idx'),
                ],
            },
        ),
    ]
