from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal, ROUND_HALF_UP


class ProjectDetails(models.Model):
    """Contract figures for the project the register tracks."""

    project_code = models.CharField(max_length=50, unique=True)
    project_name = models.CharField(max_length=255, blank=True)
    contractor = models.CharField(max_length=255, blank=True)
    contract_date = models.DateField(null=True, blank=True)

    # Contract values
    original_contract_value = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    revised_contract_value = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Advance payment and retention terms
    advance_payment_total = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    advance_payment_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('32.00'),
        validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('100.00'))]
    )
    retention_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('5.00'),
        validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('100.00'))]
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_details'
        ordering = ['-updated_at']
        verbose_name_plural = 'project details'

    def __str__(self):
        return f"{self.project_code} - {self.project_name}" if self.project_name else self.project_code

    @property
    def retention_cap_value(self):
        """Maximum retention the employer may hold: revised value x retention %."""
        cap = self.revised_contract_value * self.retention_percent / Decimal('100')
        return cap.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
