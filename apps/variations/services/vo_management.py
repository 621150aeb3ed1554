"""Variation order management service - CRUD and register queries."""

import logging
import os
from decimal import Decimal
from typing import Any, Optional

from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.variations.models import VariationOrder, VOStatus, SubmissionType, DOCUMENT_FIELDS
from .exceptions import VariationOrderNotFoundError, InvalidVariationOrderError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({
    'subject',
    'submission_type',
    'submission_reference',
    'response_reference',
    'submission_date',
    'assessment_value',
    'proposal_value',
    'approved_amount',
    'status',
    'vor_reference',
    'dvo_reference',
    'dvo_issued_date',
    'remarks',
    'action_notes',
})

SORT_FIELDS = ('submission_date', 'created_at', 'proposal_value', 'approved_amount')
VALUE_FIELDS = ('assessment_value', 'proposal_value', 'approved_amount')
TEXT_FIELDS = (
    'submission_reference',
    'response_reference',
    'vor_reference',
    'dvo_reference',
    'remarks',
    'action_notes',
)


def _clean_fields(fields: dict) -> dict:
    """Validate field names, enums and values. Null text becomes ''."""
    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise InvalidVariationOrderError(f"Unknown field(s): {', '.join(sorted(unknown))}")

    cleaned = dict(fields)
    if 'status' in cleaned and cleaned['status'] not in VOStatus.values:
        raise InvalidVariationOrderError(f"Invalid status '{cleaned['status']}'")
    if 'submission_type' in cleaned and cleaned['submission_type'] not in SubmissionType.values:
        raise InvalidVariationOrderError(f"Invalid submission type '{cleaned['submission_type']}'")

    for field in VALUE_FIELDS:
        value = cleaned.get(field)
        if value is not None and Decimal(value) < 0:
            raise InvalidVariationOrderError(f"{field.replace('_', ' ').capitalize()} cannot be negative")

    for field in TEXT_FIELDS:
        if field in cleaned and cleaned[field] is None:
            cleaned[field] = ''

    if 'subject' in cleaned and not (cleaned['subject'] or '').strip():
        cleaned['subject'] = VariationOrder._meta.get_field('subject').default

    return cleaned


@transaction.atomic
def create_variation_order(**fields: Any) -> VariationOrder:
    """
    Create a variation order.

    Omitted fields take the model defaults: subject "New Variation Order",
    type VO, status Pending with FFC, submitted today.

    Raises:
        InvalidVariationOrderError: If a field is unknown or invalid
    """
    vo = VariationOrder.objects.create(**_clean_fields(fields))
    logger.info("Created variation order id=%s (%s)", vo.id, vo.status)
    return vo


def get_variation_order_by_id(vo_id: int) -> VariationOrder:
    """
    Get variation order by ID.

    Raises:
        VariationOrderNotFoundError: If it doesn't exist
    """
    try:
        return VariationOrder.objects.get(id=vo_id)
    except VariationOrder.DoesNotExist:
        raise VariationOrderNotFoundError(f"Variation order {vo_id} not found")


@transaction.atomic
def update_variation_order(*, vo_id: int, **fields: Any) -> VariationOrder:
    """
    Partially update a variation order (last write wins).

    Raises:
        VariationOrderNotFoundError: If it doesn't exist
        InvalidVariationOrderError: If a field is unknown or invalid
    """
    cleaned = _clean_fields(fields)

    try:
        vo = VariationOrder.objects.select_for_update().get(id=vo_id)
    except VariationOrder.DoesNotExist:
        raise VariationOrderNotFoundError(f"Variation order {vo_id} not found")

    for field, value in cleaned.items():
        setattr(vo, field, value)
    vo.save()

    logger.info("Updated variation order id=%s: %s", vo.id, ', '.join(sorted(cleaned)) or 'no changes')
    return vo


@transaction.atomic
def delete_variation_order(*, vo_id: int) -> None:
    """
    Delete a variation order.

    Raises:
        VariationOrderNotFoundError: If it doesn't exist
    """
    deleted, _ = VariationOrder.objects.filter(id=vo_id).delete()
    if not deleted:
        raise VariationOrderNotFoundError(f"Variation order {vo_id} not found")
    logger.info("Deleted variation order id=%s", vo_id)


@transaction.atomic
def attach_variation_order_file(*, vo_id: int, file_type: str, uploaded_file) -> VariationOrder:
    """
    Store a document against one approval stage of a variation order.

    The file is saved as vo_documents/<vo id>/<file_type>_<timestamp><ext>
    and replaces any document already held for that stage.

    Args:
        vo_id: Variation order ID
        file_type: One of DOCUMENT_FIELDS (ffc_rsg_proposed, rsg_assessed,
            dvo_rr_approved)
        uploaded_file: Django UploadedFile

    Raises:
        InvalidVariationOrderError: If file_type is unknown or no file was given
        VariationOrderNotFoundError: If the VO doesn't exist
    """
    field_name = DOCUMENT_FIELDS.get(file_type)
    if field_name is None:
        raise InvalidVariationOrderError(f"Invalid file type '{file_type}'")
    if not uploaded_file:
        raise InvalidVariationOrderError("No file provided")

    try:
        vo = VariationOrder.objects.select_for_update().get(id=vo_id)
    except VariationOrder.DoesNotExist:
        raise VariationOrderNotFoundError(f"Variation order {vo_id} not found")

    document = getattr(vo, field_name)
    if document:
        document.delete(save=False)

    _, ext = os.path.splitext(uploaded_file.name)
    stamp = timezone.now().strftime('%Y%m%d%H%M%S%f')
    document.save(f'{file_type}_{stamp}{ext.lower()}', uploaded_file, save=False)
    vo.save(update_fields=[field_name, 'updated_at'])

    logger.info("Attached %s document to variation order id=%s: %s", file_type, vo.id, document.name)
    return vo


def list_variation_orders(
    *,
    search: Optional[str] = None,
    status: Optional[str] = None,
    submission_type: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> QuerySet:
    """
    Variation order register, filtered and sorted.

    Args:
        search: Case-insensitive match on subject and the submission,
            response, VOR and DVO references
        status: Exact status
        submission_type: Exact submission type
        sort_by: One of SORT_FIELDS (default: created_at)
        sort_order: 'asc' or 'desc' (default: desc)

    Raises:
        InvalidVariationOrderError: If sort_by or sort_order is not allowed
    """
    queryset = VariationOrder.objects.all()

    if search:
        queryset = queryset.filter(
            Q(subject__icontains=search) |
            Q(submission_reference__icontains=search) |
            Q(response_reference__icontains=search) |
            Q(vor_reference__icontains=search) |
            Q(dvo_reference__icontains=search)
        )
    if status:
        queryset = queryset.filter(status=status)
    if submission_type:
        queryset = queryset.filter(submission_type=submission_type)

    sort_by = sort_by or 'created_at'
    sort_order = sort_order or 'desc'
    if sort_by not in SORT_FIELDS:
        raise InvalidVariationOrderError(f"Cannot sort by '{sort_by}'")
    if sort_order not in ('asc', 'desc'):
        raise InvalidVariationOrderError("Sort order must be 'asc' or 'desc'")

    prefix = '-' if sort_order == 'desc' else ''
    return queryset.order_by(f'{prefix}{sort_by}', f'{prefix}id')
