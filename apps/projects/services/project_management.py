"""Project details service - the contract constants record."""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from django.conf import settings
from django.db import transaction

from apps.payments.services.rollups import ProjectConstants
from apps.projects.models import ProjectDetails
from .exceptions import InvalidProjectDataError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({
    'project_name',
    'contractor',
    'contract_date',
    'original_contract_value',
    'revised_contract_value',
    'advance_payment_total',
    'advance_payment_percent',
    'retention_percent',
})


def get_project_details() -> Optional[ProjectDetails]:
    """Most recently updated project record, or None if none saved yet."""
    return ProjectDetails.objects.order_by('-updated_at', '-id').first()


@transaction.atomic
def upsert_project_details(*, project_code: str, **fields: Any) -> tuple[ProjectDetails, bool]:
    """
    Create the project record or update the one with this code.

    Args:
        project_code: Unique project code
        **fields: Any of EDITABLE_FIELDS

    Returns:
        Tuple of (ProjectDetails, created)

    Raises:
        InvalidProjectDataError: If project_code is blank or a field is unknown
    """
    code = (project_code or '').strip()
    if not code:
        raise InvalidProjectDataError("Project code is required")

    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise InvalidProjectDataError(f"Unknown project field(s): {', '.join(sorted(unknown))}")

    details, created = ProjectDetails.objects.select_for_update().get_or_create(
        project_code=code,
        defaults=fields,
    )
    if not created:
        for field, value in fields.items():
            setattr(details, field, value)
        details.save()

    logger.info("%s project details %s", "Created" if created else "Updated", code)
    return details, created


def default_project_constants() -> ProjectConstants:
    """Contract figures from settings, used before any project record exists."""
    revised = Decimal(settings.PROJECT_REVISED_CONTRACT_VALUE)
    retention_percent = Decimal(settings.PROJECT_RETENTION_PERCENT)
    return ProjectConstants(
        original_contract_value=Decimal(settings.PROJECT_ORIGINAL_CONTRACT_VALUE),
        revised_contract_value=revised,
        advance_payment_paid_total=Decimal(settings.PROJECT_ADVANCE_PAYMENT_TOTAL),
        retention_cap_value=(revised * retention_percent / Decimal('100')).quantize(
            Decimal('0.01'), rounding=ROUND_HALF_UP
        ),
    )


def get_project_constants() -> ProjectConstants:
    """Constants for the rollups: the saved project record, else the settings defaults."""
    details = get_project_details()
    if details is None:
        return default_project_constants()
    return ProjectConstants(
        original_contract_value=details.original_contract_value,
        revised_contract_value=details.revised_contract_value,
        advance_payment_paid_total=details.advance_payment_total,
        retention_cap_value=details.retention_cap_value,
    )
