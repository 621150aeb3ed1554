"""Next payment application suggestion (number, dates, description)."""

import re
from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Optional

from dateutil.relativedelta import relativedelta

from .rollups import record_value


IPA_NUMBER_PATTERN = re.compile(r'IPA\s*(\d+)', re.IGNORECASE)
DESCRIPTION_TEMPLATE = 'Payment Application for {period}'


@dataclass(frozen=True)
class PaymentSuggestion:
    payment_no: str
    submitted_date: Optional[date]
    invoice_date: Optional[date]
    description: str

    def as_dict(self) -> dict:
        return asdict(self)


def extract_ipa_number(payment_no: Any) -> Optional[int]:
    """Sequence number from an "IPA <n>" payment number, or None."""
    match = IPA_NUMBER_PATTERN.search(str(payment_no or ''))
    if match is None:
        return None
    return int(match.group(1))


def next_payment_no(payment_no: Any) -> str:
    """
    "IPA 24" -> "IPA 25". Anything without an IPA number gives "".

    Advance payment numbers ("AP 2") do not continue the IPA sequence.
    """
    number = extract_ipa_number(payment_no)
    if number is None:
        return ''
    return f'IPA {number + 1}'


def add_one_month(value: date) -> date:
    """Same day next month, clamped to the month's last day (31 Jan -> 28/29 Feb)."""
    return value + relativedelta(months=1)


def suggest_next_payment(last_record: Any, today: date) -> PaymentSuggestion:
    """
    Suggest values for the next payment application.

    The suggestion is advisory and never blocks creation.

    Args:
        last_record: The payment with the highest id, or None for an empty register
        today: Used when the last record has no invoice date

    Returns:
        PaymentSuggestion; empty fields when there is nothing to suggest from
    """
    if last_record is None:
        return PaymentSuggestion(payment_no='', submitted_date=None, invoice_date=None, description='')

    base_date = record_value(last_record, 'invoice_date') or today
    suggested_date = add_one_month(base_date)

    return PaymentSuggestion(
        payment_no=next_payment_no(record_value(last_record, 'payment_no')),
        submitted_date=suggested_date,
        invoice_date=suggested_date,
        description=DESCRIPTION_TEMPLATE.format(period=suggested_date.strftime('%B %Y')),
    )
