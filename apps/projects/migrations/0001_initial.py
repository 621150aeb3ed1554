# Generated manually for projects app

from decimal import Decimal
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ProjectDetails',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('project_code', models.CharField(max_length=50, unique=True)),
                ('project_name', models.CharField(blank=True, max_length=255)),
                ('contractor', models.CharField(blank=True, max_length=255)),
                ('contract_date', models.DateField(blank=True, null=True)),
                ('original_contract_value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15, validators=[MinValueValidator(Decimal('0.00'))])),
                ('revised_contract_value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15, validators=[MinValueValidator(Decimal('0.00'))])),
                ('advance_payment_total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15, validators=[MinValueValidator(Decimal('0.00'))])),
                ('advance_payment_percent', models.DecimalField(decimal_places=2, default=Decimal('32.00'), max_digits=5, validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('100.00'))])),
                ('retention_percent', models.DecimalField(decimal_places=2, default=Decimal('5.00'), max_digits=5, validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('100.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'project_details',
                'ordering': ['-updated_at'],
                'verbose_name_plural': 'project details',
            },
        ),
    ]
