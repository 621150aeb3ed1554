from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal


class SubmissionType(models.TextChoices):
    VO = 'VO', 'VO'
    GEN_CORR = 'GenCorr', 'Gen Corr'
    RFI = 'RFI', 'RFI'
    EMAIL = 'Email', 'Email'


class VOStatus(models.TextChoices):
    PENDING_WITH_FFC = 'PendingWithFFC', 'Pending with FFC'
    PENDING_WITH_RSG = 'PendingWithRSG', 'Pending with RSG'
    PENDING_WITH_RSG_FFC = 'PendingWithRSGFFC', 'Pending with RSG/FFC'
    APPROVED_AWAITING_DVO = 'ApprovedAwaitingDVO', 'Approved & Awaiting for the DVO to be issued'
    DVO_RR_ISSUED = 'DVORRIssued', 'DVO RR Issued'


# Pending VOs are valued at the proposal, approved ones at the approved amount
PENDING_STATUSES = (
    VOStatus.PENDING_WITH_FFC,
    VOStatus.PENDING_WITH_RSG,
    VOStatus.PENDING_WITH_RSG_FFC,
)
APPROVED_STATUSES = (
    VOStatus.APPROVED_AWAITING_DVO,
    VOStatus.DVO_RR_ISSUED,
)

# Upload stage -> VariationOrder field holding the document
DOCUMENT_FIELDS = {
    'ffc_rsg_proposed': 'ffc_rsg_proposed_file',
    'rsg_assessed': 'rsg_assessed_file',
    'dvo_rr_approved': 'dvo_rr_approved_file',
}


def vo_document_path(instance, filename):
    """vo_documents/<vo id>/<filename>"""
    return f'vo_documents/{instance.pk}/{filename}'


class VariationOrder(models.Model):
    """Variation order submission and its approval trail."""

    subject = models.CharField(max_length=500, default='New Variation Order')
    submission_type = models.CharField(
        max_length=10,
        choices=SubmissionType.choices,
        default=SubmissionType.VO
    )
    submission_reference = models.CharField(max_length=100, blank=True)
    response_reference = models.CharField(max_length=100, blank=True)
    submission_date = models.DateField(default=timezone.localdate)

    # Values
    assessment_value = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    proposal_value = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    approved_amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    status = models.CharField(
        max_length=30,
        choices=VOStatus.choices,
        default=VOStatus.PENDING_WITH_FFC
    )

    # Approval references
    vor_reference = models.CharField(max_length=100, blank=True)
    dvo_reference = models.CharField(max_length=100, blank=True)
    dvo_issued_date = models.DateField(null=True, blank=True)

    remarks = models.TextField(max_length=2000, blank=True)
    action_notes = models.TextField(max_length=2000, blank=True)

    # Attachments per approval stage
    ffc_rsg_proposed_file = models.FileField(upload_to=vo_document_path, max_length=500, blank=True)
    rsg_assessed_file = models.FileField(upload_to=vo_document_path, max_length=500, blank=True)
    dvo_rr_approved_file = models.FileField(upload_to=vo_document_path, max_length=500, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'variation_orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='vo_status_idx'),
            models.Index(fields=['submission_date'], name='vo_submission_date_idx'),
        ]

    def __str__(self):
        ref = self.submission_reference or f"#{self.pk}"
        return f"{ref} - {self.subject}"

    @property
    def value_for_status(self):
        """Proposal value while pending, approved amount once approved."""
        if self.status in APPROVED_STATUSES:
            return self.approved_amount or Decimal('0.00')
        return self.proposal_value or Decimal('0.00')
