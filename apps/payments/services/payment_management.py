"""Payment management service - CRUD for payment applications."""

import logging
from datetime import date
from typing import Any, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.payments.models import PaymentApplication, PaymentStatus, ApprovalStatus
from .exceptions import (
    InvalidAmountError,
    InvalidPaymentDataError,
    InvalidStatusError,
    PaymentNotFoundError,
)
from .financials import (
    DEDUCTION_FIELDS,
    DerivedAmounts,
    RateScheme,
    derive,
    get_rate_scheme,
    populate_record,
    reconcile,
    round_money,
    to_amount,
    to_gross_amount,
)
from .numbering import PaymentSuggestion, suggest_next_payment

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({
    'payment_no',
    'description',
    'gross_amount',
    'advance_payment_recovery',
    'retention',
    'vat_recovery',
    'vat',
    'payment_status',
    'approval_status',
    'submitted_date',
    'invoice_date',
    'ffc_live_action',
    'rsg_live_action',
    'remarks',
})

ORDERING_FIELDS = frozenset({
    'id', '-id',
    'payment_no', '-payment_no',
    'gross_amount', '-gross_amount',
    'invoice_date', '-invoice_date',
    'submitted_date', '-submitted_date',
    'created_at', '-created_at',
})


def resolve_rate_scheme(name: Optional[str] = None) -> RateScheme:
    """Named scheme, or the configured default when no name is given."""
    return get_rate_scheme(name or getattr(settings, 'PAYMENT_DEFAULT_RATE_SCHEME', None))


def _validated_gross(value: Any) -> Any:
    try:
        return round_money(to_gross_amount(value))
    except InvalidAmountError as e:
        logger.warning("Rejected gross amount %r: %s", value, e)
        raise


@transaction.atomic
def create_payment(
    *,
    payment_no: str,
    description: str,
    gross_amount: Any,
    rate_scheme: Optional[str] = None,
    auto_calculate: bool = True,
    advance_payment_recovery: Any = None,
    retention: Any = None,
    vat_recovery: Any = None,
    vat: Any = None,
    payment_status: str = PaymentStatus.DRAFT,
    approval_status: str = ApprovalStatus.PENDING,
    submitted_date: Optional[date] = None,
    invoice_date: Optional[date] = None,
    ffc_live_action: str = '',
    rsg_live_action: str = '',
    remarks: str = '',
) -> PaymentApplication:
    """
    Create a payment application.

    This operation:
    1. Validates the gross amount (non-negative, numeric)
    2. Derives the deduction and VAT fields from the rate scheme (auto_calculate)
    3. Applies any deduction fields supplied by hand on top of the derived ones
    4. Reconciles net payment from the final values

    Args:
        payment_no: Payment number, e.g. "IPA 25" or "AP 1"
        description: Free text description
        gross_amount: Certified gross amount (>= 0)
        rate_scheme: 'initial' or 'revised' (default from settings)
        auto_calculate: Derive deductions from gross; when False missing ones are 0
        advance_payment_recovery: Manual override
        retention: Manual override
        vat_recovery: Manual override
        vat: Manual override
        payment_status: Workflow status
        approval_status: Approval status
        submitted_date: Submission date
        invoice_date: Invoice date
        ffc_live_action: Contractor-side notes
        rsg_live_action: Employer-side notes
        remarks: Remarks

    Returns:
        Created PaymentApplication instance

    Raises:
        InvalidPaymentDataError: If payment number or description is blank
        InvalidAmountError: If gross or a deduction is not a valid amount
        InvalidRateSchemeError: If rate_scheme is unknown
    """
    if not (payment_no or '').strip():
        raise InvalidPaymentDataError("Payment number is required")
    if not (description or '').strip():
        raise InvalidPaymentDataError("Description is required")

    gross = _validated_gross(gross_amount)
    supplied = {
        'advance_payment_recovery': advance_payment_recovery,
        'retention': retention,
        'vat_recovery': vat_recovery,
        'vat': vat,
    }

    if auto_calculate:
        scheme = resolve_rate_scheme(rate_scheme)
        amounts = populate_record({'gross_amount': gross, **supplied}, scheme)
        scheme_name = scheme.name
        logger.info("Derived payment %s with '%s' rate scheme", payment_no, scheme_name)
    else:
        amounts = {'gross_amount': gross}
        for field in DEDUCTION_FIELDS:
            amounts[field] = round_money(to_amount(supplied[field]))
        amounts['net_payment'] = reconcile(**amounts)
        scheme_name = ''

    payment = PaymentApplication.objects.create(
        payment_no=payment_no.strip(),
        description=description.strip(),
        rate_scheme=scheme_name,
        payment_status=payment_status,
        approval_status=approval_status,
        submitted_date=submitted_date,
        invoice_date=invoice_date,
        ffc_live_action=ffc_live_action,
        rsg_live_action=rsg_live_action,
        remarks=remarks,
        **amounts,
    )

    logger.info("Created payment application %s (id=%s, net=%s)", payment.payment_no, payment.id, payment.net_payment)
    return payment


def get_payment_by_id(payment_id: int) -> PaymentApplication:
    """
    Get payment application by ID.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
    """
    try:
        return PaymentApplication.objects.get(id=payment_id)
    except PaymentApplication.DoesNotExist:
        raise PaymentNotFoundError(f"Payment application {payment_id} not found")


@transaction.atomic
def update_payment(
    *,
    payment_id: int,
    recalculate: bool = False,
    rate_scheme: Optional[str] = None,
    **fields: Any,
) -> PaymentApplication:
    """
    Update a payment application (last write wins).

    Without ``recalculate`` only the supplied fields change and net payment is
    reconciled from whatever values are now on the record. A new gross amount
    does not re-derive the deductions in that case.

    With ``recalculate`` the four deduction fields are derived again from the
    (possibly new) gross amount, then any deduction fields supplied in
    ``fields`` are applied as overrides.

    Args:
        payment_id: ID of payment to update
        recalculate: Re-derive deductions from gross
        rate_scheme: Scheme for recalculation (default: the record's, then settings)
        **fields: Fields to update (see UPDATABLE_FIELDS)

    Returns:
        Updated PaymentApplication instance

    Raises:
        PaymentNotFoundError: If payment doesn't exist
        InvalidPaymentDataError: If an unknown or blank required field is given
        InvalidAmountError: If an amount is invalid
        InvalidRateSchemeError: If rate_scheme is unknown
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidPaymentDataError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

    try:
        payment = PaymentApplication.objects.select_for_update().get(id=payment_id)
    except PaymentApplication.DoesNotExist:
        raise PaymentNotFoundError(f"Payment application {payment_id} not found")

    for required in ('payment_no', 'description'):
        if required in fields and not (fields[required] or '').strip():
            raise InvalidPaymentDataError(f"{required.replace('_', ' ').capitalize()} is required")

    if 'gross_amount' in fields:
        fields['gross_amount'] = _validated_gross(fields['gross_amount'])

    overrides = {field: fields.pop(field) for field in DEDUCTION_FIELDS if field in fields}

    for field, value in fields.items():
        setattr(payment, field, value.strip() if field in ('payment_no', 'description') else value)

    if recalculate:
        scheme = resolve_rate_scheme(rate_scheme or payment.rate_scheme)
        amounts = populate_record({'gross_amount': payment.gross_amount, **overrides}, scheme)
        for field in DEDUCTION_FIELDS:
            setattr(payment, field, amounts[field])
        payment.rate_scheme = scheme.name
        logger.info("Re-derived payment %s with '%s' rate scheme", payment.payment_no, scheme.name)
    else:
        for field, value in overrides.items():
            setattr(payment, field, round_money(to_amount(value)))

    payment.net_payment = reconcile(
        payment.gross_amount,
        payment.advance_payment_recovery,
        payment.retention,
        payment.vat_recovery,
        payment.vat,
    )
    payment.save()

    logger.info("Updated payment application %s (id=%s, net=%s)", payment.payment_no, payment.id, payment.net_payment)
    return payment


@transaction.atomic
def update_payment_status(
    *,
    payment_id: int,
    payment_status: Optional[str] = None,
    approval_status: Optional[str] = None,
) -> PaymentApplication:
    """
    Quick status change from the register table.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
        InvalidStatusError: If neither status is given or a value is not a valid choice
    """
    if payment_status is None and approval_status is None:
        raise InvalidStatusError("Provide payment_status or approval_status")
    if payment_status is not None and payment_status not in PaymentStatus.values:
        raise InvalidStatusError(f"Invalid payment status '{payment_status}'")
    if approval_status is not None and approval_status not in ApprovalStatus.values:
        raise InvalidStatusError(f"Invalid approval status '{approval_status}'")

    try:
        payment = PaymentApplication.objects.select_for_update().get(id=payment_id)
    except PaymentApplication.DoesNotExist:
        raise PaymentNotFoundError(f"Payment application {payment_id} not found")

    update_fields = ['updated_at']
    if payment_status is not None:
        payment.payment_status = payment_status
        update_fields.append('payment_status')
    if approval_status is not None:
        payment.approval_status = approval_status
        update_fields.append('approval_status')
    payment.save(update_fields=update_fields)

    logger.info(
        "Payment %s status set to %s / %s",
        payment.payment_no, payment.payment_status, payment.approval_status
    )
    return payment


@transaction.atomic
def delete_payment(*, payment_id: int) -> None:
    """
    Delete a payment application.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
    """
    deleted, _ = PaymentApplication.objects.filter(id=payment_id).delete()
    if not deleted:
        raise PaymentNotFoundError(f"Payment application {payment_id} not found")
    logger.info("Deleted payment application id=%s", payment_id)


def list_payments(
    *,
    search: Optional[str] = None,
    payment_status: Optional[str] = None,
    approval_status: Optional[str] = None,
    ordering: str = 'id',
) -> QuerySet:
    """
    Payment applications, filtered and ordered.

    Args:
        search: Case-insensitive match on payment number, description or remarks
        payment_status: Exact payment status
        approval_status: Exact approval status
        ordering: One of ORDERING_FIELDS (default: creation order)
    """
    queryset = PaymentApplication.objects.all()

    if search:
        queryset = queryset.filter(
            Q(payment_no__icontains=search) |
            Q(description__icontains=search) |
            Q(remarks__icontains=search)
        )
    if payment_status:
        queryset = queryset.filter(payment_status=payment_status)
    if approval_status:
        queryset = queryset.filter(approval_status=approval_status)

    if ordering not in ORDERING_FIELDS:
        raise InvalidPaymentDataError(f"Cannot order by '{ordering}'")
    return queryset.order_by(ordering, 'id')


def get_latest_payment() -> Optional[PaymentApplication]:
    """The payment with the highest id, or None."""
    return PaymentApplication.objects.order_by('-id').first()


def get_next_payment_suggestion(today: Optional[date] = None) -> PaymentSuggestion:
    """Suggested number, dates and description for the next payment application."""
    return suggest_next_payment(get_latest_payment(), today or timezone.localdate())


def preview_derivation(*, gross_amount: Any, rate_scheme: Optional[str] = None) -> tuple[RateScheme, DerivedAmounts]:
    """
    Derive the payment fields without saving anything.

    Returns:
        Tuple of (scheme used, derived amounts)

    Raises:
        InvalidAmountError: If gross is negative or non-numeric
        InvalidRateSchemeError: If rate_scheme is unknown
    """
    scheme = resolve_rate_scheme(rate_scheme)
    return scheme, derive(_validated_gross(gross_amount), scheme)
