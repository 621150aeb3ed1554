from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal


class PaymentStatus(models.TextChoices):
    DRAFT = 'Draft', 'Draft'
    SUBMITTED = 'Submitted', 'Submitted'
    SUBMITTED_ON_ACONEX = 'Submitted on ACONEX', 'Submitted on ACONEX'
    CERTIFIED = 'Certified', 'Certified'
    PAID = 'Paid', 'Paid'


class ApprovalStatus(models.TextChoices):
    PENDING = 'Pending', 'Pending'
    RECEIVED = 'Received', 'Received'
    APPROVED = 'Approved', 'Approved'
    REJECTED = 'Rejected', 'Rejected'


ADVANCE_PAYMENT_PREFIX = 'AP'


def is_advance_payment(payment_no):
    """
    True for advance payment drawdowns ("AP 1", "AP2").

    The check is a plain case-sensitive prefix match on the payment number,
    so "APPROVED 3" would also count. Payment numbers are expected to follow
    the "IPA <n>" / "AP <n>" convention.
    """
    return str(payment_no or '').startswith(ADVANCE_PAYMENT_PREFIX)


class RateSchemeChoice(models.TextChoices):
    INITIAL = 'initial', 'Initial (20% advance / 10% retention)'
    REVISED = 'revised', 'Revised (32.09% advance / 5% retention)'


class PaymentApplication(models.Model):
    """Interim payment application (IPA) or advance payment (AP) record."""

    payment_no = models.CharField(max_length=50, db_index=True)
    description = models.CharField(max_length=255)

    # Certified value; the only independent input to the derivation
    gross_amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Deductions (negative) and VAT, derived or hand-entered
    advance_payment_recovery = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    retention = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    vat_recovery = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    vat = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    net_payment = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))

    rate_scheme = models.CharField(
        max_length=20,
        choices=RateSchemeChoice.choices,
        blank=True
    )

    # Workflow
    payment_status = models.CharField(
        max_length=30,
        choices=PaymentStatus.choices,
        default=PaymentStatus.DRAFT
    )
    approval_status = models.CharField(
        max_length=20,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING
    )
    submitted_date = models.DateField(null=True, blank=True)
    invoice_date = models.DateField(null=True, blank=True)

    # Notes from the contractor (FFC) and employer (RSG) sides
    ffc_live_action = models.TextField(blank=True)
    rsg_live_action = models.TextField(blank=True)
    remarks = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_applications'
        ordering = ['id']
        indexes = [
            models.Index(fields=['payment_status'], name='payment_status_idx'),
        ]

    def __str__(self):
        return f"{self.payment_no} - {self.description}"

    @property
    def is_advance_payment(self):
        return is_advance_payment(self.payment_no)
