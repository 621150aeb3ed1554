"""
Tests for payment services.

Tests cover:
- Payment creation (derived, manual, overrides)
- Payment updates (hand edits, recalculation)
- Status changes and deletion
- Register filtering and next payment suggestion
"""

import pytest
from datetime import date
from decimal import Decimal

from apps.payments.models import PaymentApplication, PaymentStatus, ApprovalStatus
from apps.payments.services import (
    create_payment,
    update_payment,
    update_payment_status,
    delete_payment,
    get_payment_by_id,
    list_payments,
    get_next_payment_suggestion,
    preview_derivation,
    reconcile,
    InvalidAmountError,
    InvalidRateSchemeError,
    InvalidPaymentDataError,
    InvalidStatusError,
    PaymentNotFoundError,
)


# =============================================================================
# Creation Tests
# =============================================================================

@pytest.mark.django_db
class TestCreatePayment:
    """Tests for create_payment service."""

    def test_derives_fields_from_gross(self, payment):
        """Default creation derives every deduction."""
        payment.refresh_from_db()

        assert payment.gross_amount == Decimal('100000.00')
        assert payment.advance_payment_recovery == Decimal('-32090.00')
        assert payment.retention == Decimal('-5000.00')
        assert payment.vat_recovery == Decimal('-4813.50')
        assert payment.vat == Decimal('15000.00')
        assert payment.net_payment == Decimal('73096.50')
        assert payment.rate_scheme == 'revised'
        assert not payment.is_advance_payment
        assert payment.payment_status == PaymentStatus.DRAFT
        assert payment.approval_status == ApprovalStatus.PENDING

    def test_default_scheme_from_settings(self, settings):
        settings.PAYMENT_DEFAULT_RATE_SCHEME = 'initial'

        payment = create_payment(payment_no='IPA 1', description='First', gross_amount='100000')

        assert payment.rate_scheme == 'initial'
        assert payment.retention == Decimal('-10000.00')

    def test_override_kept(self):
        """Supplied deductions win over derived ones."""
        payment = create_payment(
            payment_no='IPA 2',
            description='Retention release',
            gross_amount=Decimal('100000'),
            retention=Decimal('0'),
        )

        assert payment.retention == Decimal('0.00')
        assert payment.advance_payment_recovery == Decimal('-32090.00')
        assert payment.net_payment == Decimal('78096.50')

    def test_manual_entry(self, advance_payment):
        """With auto_calculate off, missing deductions are zero."""
        assert advance_payment.rate_scheme == ''
        assert advance_payment.retention == Decimal('0.00')
        assert advance_payment.vat == Decimal('0.00')
        assert advance_payment.net_payment == Decimal('40000.00')
        assert advance_payment.is_advance_payment

    def test_gross_rounded_before_storing(self):
        """Net payment reconciles against the gross actually stored."""
        payment = create_payment(
            payment_no='IPA 1', description='Half cent', gross_amount='100.005', auto_calculate=False
        )

        payment.refresh_from_db()
        assert payment.gross_amount == Decimal('100.01')
        assert payment.net_payment == Decimal('100.01')
        assert payment.net_payment == reconcile(
            payment.gross_amount,
            payment.advance_payment_recovery,
            payment.retention,
            payment.vat_recovery,
            payment.vat,
        )

    def test_derived_from_rounded_gross(self):
        payment = create_payment(payment_no='IPA 1', description='Half cent', gross_amount='100.005')

        payment.refresh_from_db()
        assert payment.gross_amount == Decimal('100.01')
        assert payment.advance_payment_recovery == Decimal('-32.09')
        assert payment.net_payment == reconcile(
            payment.gross_amount,
            payment.advance_payment_recovery,
            payment.retention,
            payment.vat_recovery,
            payment.vat,
        )

    def test_strips_text(self):
        payment = create_payment(payment_no='  IPA 3 ', description=' March ', gross_amount=0)

        assert payment.payment_no == 'IPA 3'
        assert payment.description == 'March'
        assert payment.net_payment == Decimal('0.00')

    def test_negative_gross_rejected(self):
        with pytest.raises(InvalidAmountError):
            create_payment(payment_no='IPA 1', description='Bad', gross_amount=Decimal('-1'))

        assert PaymentApplication.objects.count() == 0

    def test_non_numeric_gross_rejected(self):
        with pytest.raises(InvalidAmountError):
            create_payment(payment_no='IPA 1', description='Bad', gross_amount='twelve')

    def test_unknown_scheme_rejected(self):
        with pytest.raises(InvalidRateSchemeError):
            create_payment(payment_no='IPA 1', description='Bad', gross_amount=1, rate_scheme='legacy')

    def test_blank_payment_no_rejected(self):
        with pytest.raises(InvalidPaymentDataError):
            create_payment(payment_no='  ', description='Bad', gross_amount=1)

    def test_blank_description_rejected(self):
        with pytest.raises(InvalidPaymentDataError):
            create_payment(payment_no='IPA 1', description='', gross_amount=1)


# =============================================================================
# Update Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdatePayment:
    """Tests for update_payment service."""

    def test_hand_edit_reconciles_net_only(self, payment):
        """Editing retention keeps the other deductions and re-sums net."""
        updated = update_payment(payment_id=payment.id, retention=Decimal('-2500'))

        assert updated.retention == Decimal('-2500.00')
        assert updated.advance_payment_recovery == Decimal('-32090.00')
        assert updated.vat_recovery == Decimal('-4813.50')
        assert updated.vat == Decimal('15000.00')
        assert updated.net_payment == Decimal('75596.50')

    def test_new_gross_without_recalculate(self, payment):
        updated = update_payment(payment_id=payment.id, gross_amount=Decimal('200000'))

        assert updated.advance_payment_recovery == Decimal('-32090.00')
        assert updated.retention == Decimal('-5000.00')
        assert updated.vat_recovery == Decimal('-4813.50')
        assert updated.vat == Decimal('15000.00')
        assert updated.gross_amount == Decimal('200000.00')
        assert updated.net_payment == Decimal('173096.50')

    def test_new_gross_rounded_before_storing(self, payment):
        update_payment(payment_id=payment.id, gross_amount='100000.005')

        payment.refresh_from_db()
        assert payment.gross_amount == Decimal('100000.01')
        assert payment.net_payment == Decimal('73096.51')

    def test_recalculate(self, payment):
        updated = update_payment(payment_id=payment.id, gross_amount=Decimal('200000'), recalculate=True)

        assert updated.advance_payment_recovery == Decimal('-64180.00')
        assert updated.retention == Decimal('-10000.00')
        assert updated.net_payment == Decimal('146193.00')

    def test_recalculate_with_other_scheme(self, payment):
        updated = update_payment(payment_id=payment.id, recalculate=True, rate_scheme='initial')

        assert updated.rate_scheme == 'initial'
        assert updated.net_payment == Decimal('82000.00')

    def test_recalculate_keeps_supplied_override(self, payment):
        updated = update_payment(payment_id=payment.id, recalculate=True, vat=Decimal('0'))

        assert updated.vat == Decimal('0.00')
        assert updated.net_payment == Decimal('58096.50')

    def test_text_fields(self, payment):
        updated = update_payment(payment_id=payment.id, remarks='Awaiting RSG', description=' Updated ')

        assert updated.remarks == 'Awaiting RSG'
        assert updated.description == 'Updated'
        assert updated.net_payment == Decimal('73096.50')

    def test_unknown_field_rejected(self, payment):
        with pytest.raises(InvalidPaymentDataError):
            update_payment(payment_id=payment.id, net_payment=Decimal('1'))

    def test_blank_description_rejected(self, payment):
        with pytest.raises(InvalidPaymentDataError):
            update_payment(payment_id=payment.id, description='  ')

    def test_negative_gross_rejected(self, payment):
        with pytest.raises(InvalidAmountError):
            update_payment(payment_id=payment.id, gross_amount=Decimal('-5'))

        payment.refresh_from_db()
        assert payment.gross_amount == Decimal('100000.00')

    def test_not_found(self):
        with pytest.raises(PaymentNotFoundError):
            update_payment(payment_id=999999, remarks='x')


# =============================================================================
# Status / Delete Tests
# =============================================================================

@pytest.mark.django_db
class TestStatusAndDelete:

    def test_update_status(self, payment):
        updated = update_payment_status(
            payment_id=payment.id,
            payment_status=PaymentStatus.CERTIFIED,
            approval_status=ApprovalStatus.APPROVED,
        )

        assert updated.payment_status == 'Certified'
        assert updated.approval_status == 'Approved'
        assert updated.net_payment == Decimal('73096.50')

    def test_update_one_status(self, payment):
        updated = update_payment_status(payment_id=payment.id, approval_status=ApprovalStatus.RECEIVED)

        assert updated.payment_status == PaymentStatus.DRAFT
        assert updated.approval_status == 'Received'

    def test_status_required(self, payment):
        with pytest.raises(InvalidStatusError):
            update_payment_status(payment_id=payment.id)

    def test_invalid_status(self, payment):
        with pytest.raises(InvalidStatusError):
            update_payment_status(payment_id=payment.id, payment_status='Lost')

    def test_status_not_found(self):
        with pytest.raises(PaymentNotFoundError):
            update_payment_status(payment_id=999999, payment_status=PaymentStatus.PAID)

    def test_delete(self, payment):
        delete_payment(payment_id=payment.id)

        with pytest.raises(PaymentNotFoundError):
            get_payment_by_id(payment.id)

    def test_delete_not_found(self):
        with pytest.raises(PaymentNotFoundError):
            delete_payment(payment_id=999999)


# =============================================================================
# Listing / Suggestion Tests
# =============================================================================

@pytest.mark.django_db
class TestListAndSuggest:

    def test_creation_order_by_default(self, advance_payment, payment):
        assert [p.payment_no for p in list_payments()] == ['AP 1', 'IPA 24']

    def test_search(self, advance_payment, payment):
        assert [p.payment_no for p in list_payments(search='january')] == ['IPA 24']

    def test_status_filter(self, advance_payment, payment):
        update_payment_status(payment_id=payment.id, payment_status=PaymentStatus.PAID)

        assert list(list_payments(payment_status=PaymentStatus.PAID)) == [payment]
        assert list(list_payments(payment_status=PaymentStatus.CERTIFIED)) == []

    def test_ordering(self, advance_payment, payment):
        assert [p.payment_no for p in list_payments(ordering='-gross_amount')] == ['IPA 24', 'AP 1']

    def test_bad_ordering(self):
        with pytest.raises(InvalidPaymentDataError):
            list(list_payments(ordering='net_payment'))

    def test_suggestion_from_latest(self, advance_payment, payment):
        suggestion = get_next_payment_suggestion(today=date(2025, 6, 1))

        assert suggestion.payment_no == 'IPA 25'
        assert suggestion.invoice_date == date(2025, 2, 28)
        assert suggestion.description == 'Payment Application for February 2025'

    def test_suggestion_empty_register(self):
        suggestion = get_next_payment_suggestion(today=date(2025, 6, 1))

        assert suggestion.payment_no == ''
        assert suggestion.invoice_date is None

    def test_preview_saves_nothing(self):
        scheme, amounts = preview_derivation(gross_amount='100000', rate_scheme='initial')

        assert scheme.name == 'initial'
        assert amounts.net_payment == Decimal('82000.00')
        assert PaymentApplication.objects.count() == 0
