"""Tests for next payment suggestion."""

from datetime import date
from types import SimpleNamespace

from apps.payments.services.numbering import (
    add_one_month,
    extract_ipa_number,
    next_payment_no,
    suggest_next_payment,
)


class TestNextPaymentNo:

    def test_increments_ipa(self):
        assert next_payment_no('IPA 24') == 'IPA 25'

    def test_case_and_spacing(self):
        assert next_payment_no('ipa7') == 'IPA 8'
        assert next_payment_no('IPA   9') == 'IPA 10'

    def test_advance_payment_has_no_sequence(self):
        assert next_payment_no('AP 2') == ''
        assert extract_ipa_number('AP 2') is None

    def test_blank(self):
        assert next_payment_no('') == ''
        assert next_payment_no(None) == ''


class TestAddOneMonth:

    def test_plain(self):
        assert add_one_month(date(2025, 3, 15)) == date(2025, 4, 15)

    def test_clamps_to_month_end(self):
        assert add_one_month(date(2025, 1, 31)) == date(2025, 2, 28)
        assert add_one_month(date(2024, 1, 31)) == date(2024, 2, 29)

    def test_year_rollover(self):
        assert add_one_month(date(2024, 12, 31)) == date(2025, 1, 31)


class TestSuggestNextPayment:

    def test_empty_register(self):
        suggestion = suggest_next_payment(None, date(2025, 6, 1))

        assert suggestion.payment_no == ''
        assert suggestion.invoice_date is None
        assert suggestion.submitted_date is None
        assert suggestion.description == ''

    def test_from_last_record(self):
        last = {'payment_no': 'IPA 24', 'invoice_date': date(2025, 1, 31)}

        suggestion = suggest_next_payment(last, date(2025, 6, 1))

        assert suggestion.payment_no == 'IPA 25'
        assert suggestion.invoice_date == date(2025, 2, 28)
        assert suggestion.submitted_date == date(2025, 2, 28)
        assert suggestion.description == 'Payment Application for February 2025'

    def test_falls_back_to_today(self):
        last = SimpleNamespace(payment_no='AP 1', invoice_date=None)

        suggestion = suggest_next_payment(last, date(2025, 6, 10))

        assert suggestion.payment_no == ''
        assert suggestion.invoice_date == date(2025, 7, 10)
        assert suggestion.description == 'Payment Application for July 2025'
