"""
Payment financial derivation.

Turns the certified gross amount of a payment application into its dependent
fields (advance payment recovery, retention, VAT recovery, VAT and net
payment) under one of the contract's rate schemes.

Every value is a ``Decimal`` rounded to two places with ROUND_HALF_UP, so
halves round away from zero for negative deductions too. Rounding is applied
at each step, not once at the end:

    >>> derive(Decimal('100000'), get_rate_scheme('revised')).as_dict()
    {'advance_payment_recovery': Decimal('-32090.00'),
     'retention': Decimal('-5000.00'),
     'vat_recovery': Decimal('-4813.50'),
     'vat': Decimal('15000.00'),
     'net_payment': Decimal('73096.50')}

This module has no Django imports so it can be used from management
commands, exports and tests without a database.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Mapping, Optional

from .exceptions import InvalidAmountError, InvalidRateSchemeError


TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0.00')

VAT_RATE = Decimal('0.15')

DEDUCTION_FIELDS = ('advance_payment_recovery', 'retention', 'vat_recovery', 'vat')


@dataclass(frozen=True)
class RateScheme:
    """Named pair of recovery rates in effect for a contract period."""
    name: str
    advance_rate: Decimal
    retention_rate: Decimal
    vat_rate: Decimal = VAT_RATE


INITIAL_SCHEME = RateScheme('initial', Decimal('0.20'), Decimal('0.10'))
REVISED_SCHEME = RateScheme('revised', Decimal('0.3209'), Decimal('0.05'))

RATE_SCHEMES = {
    INITIAL_SCHEME.name: INITIAL_SCHEME,
    REVISED_SCHEME.name: REVISED_SCHEME,
}

DEFAULT_RATE_SCHEME = REVISED_SCHEME.name


@dataclass(frozen=True)
class DerivedAmounts:
    advance_payment_recovery: Decimal
    retention: Decimal
    vat_recovery: Decimal
    vat: Decimal
    net_payment: Decimal

    def as_dict(self) -> dict:
        return asdict(self)


def get_rate_scheme(name: Optional[str] = None) -> RateScheme:
    """
    Look up a rate scheme by name.

    Args:
        name: 'initial' or 'revised'. Falls back to the default scheme when empty.

    Raises:
        InvalidRateSchemeError: If the name is not a known scheme
    """
    key = (name or DEFAULT_RATE_SCHEME).strip().lower()
    try:
        return RATE_SCHEMES[key]
    except KeyError:
        raise InvalidRateSchemeError(
            f"Unknown rate scheme '{name}'. Expected one of: {', '.join(RATE_SCHEMES)}"
        )


def round_money(value: Decimal) -> Decimal:
    """Round to two places, half away from zero. Negative zero becomes 0.00."""
    rounded = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        return ZERO
    return rounded


def to_amount(value: Any) -> Decimal:
    """
    Normalise an incoming amount to a Decimal.

    ``None`` and empty strings count as zero. Floats go through ``str`` so
    binary noise does not leak into the result.

    Raises:
        InvalidAmountError: If the value is not numeric or not finite
    """
    if value is None or value == '':
        return ZERO
    if isinstance(value, bool):
        raise InvalidAmountError("Amount must be numeric")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidAmountError(f"Amount must be numeric, got '{value}'")
    if not amount.is_finite():
        raise InvalidAmountError("Amount must be a finite number")
    return amount


def to_gross_amount(value: Any) -> Decimal:
    """Normalise a gross amount and reject negatives."""
    gross = to_amount(value)
    if gross < 0:
        raise InvalidAmountError("Gross amount cannot be negative")
    return gross


def derive(gross_amount: Any, scheme: RateScheme) -> DerivedAmounts:
    """
    Derive every dependent payment field from the gross amount.

    VAT recovery is computed from the already rounded advance recovery, and
    net payment is the rounded sum of the five rounded components.

    Raises:
        InvalidAmountError: If gross is negative or non-numeric
    """
    gross = to_gross_amount(gross_amount)

    advance_payment_recovery = round_money(-(gross * scheme.advance_rate))
    retention = round_money(-(gross * scheme.retention_rate))
    vat_recovery = round_money(advance_payment_recovery * scheme.vat_rate)
    vat = round_money(gross * scheme.vat_rate)

    return DerivedAmounts(
        advance_payment_recovery=advance_payment_recovery,
        retention=retention,
        vat_recovery=vat_recovery,
        vat=vat,
        net_payment=round_money(
            gross + advance_payment_recovery + retention + vat_recovery + vat
        ),
    )


def reconcile(
    gross_amount: Any,
    advance_payment_recovery: Any = None,
    retention: Any = None,
    vat_recovery: Any = None,
    vat: Any = None,
) -> Decimal:
    """
    Net payment as the literal sum of the values currently on the record.

    Used after a hand edit. Nothing is re-derived from the rate scheme and
    missing components count as zero.
    """
    total = (
        to_amount(gross_amount)
        + to_amount(advance_payment_recovery)
        + to_amount(retention)
        + to_amount(vat_recovery)
        + to_amount(vat)
    )
    return round_money(total)


def populate_record(record: Mapping[str, Any], scheme: RateScheme) -> dict:
    """
    Fill in a payment record shape.

    Fields present (and not ``None``) in ``record`` are kept as manual
    overrides. Absent ones are derived from the gross amount. Net payment is
    always reconciled from the final values.

    Args:
        record: Mapping with ``gross_amount`` and any of the deduction fields
        scheme: Rate scheme used for the derived fields

    Returns:
        Dict with gross_amount, the four deduction fields and net_payment
    """
    gross = to_gross_amount(record.get('gross_amount'))
    derived = derive(gross, scheme).as_dict()

    result = {'gross_amount': gross}
    for field in DEDUCTION_FIELDS:
        supplied = record.get(field)
        result[field] = derived[field] if supplied is None else round_money(to_amount(supplied))

    result['net_payment'] = reconcile(**result)
    return result
