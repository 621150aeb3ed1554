"""
Project-level rollups over the payment register.

A single pass over the payment records produces the contract's work done,
advance and retention position. Records can be model instances or plain
mappings. Missing amounts count as zero.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Iterable, Mapping

from apps.payments.models import is_advance_payment
from .financials import ZERO, round_money, to_amount


HUNDRED = Decimal('100')


@dataclass(frozen=True)
class ProjectConstants:
    """Contract figures the rollups are measured against."""
    original_contract_value: Decimal
    revised_contract_value: Decimal
    advance_payment_paid_total: Decimal
    retention_cap_value: Decimal

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PaymentRollups:
    total_work_done: Decimal
    total_advance_recovered: Decimal
    total_retention_held: Decimal
    advance_balance: Decimal
    retention_balance: Decimal
    work_done_percentage: Decimal
    advance_recovery_percentage: Decimal
    retention_percentage: Decimal
    total_gross: Decimal
    total_net_payment: Decimal
    total_vat: Decimal
    balance_work_done: Decimal
    record_count: int

    def as_dict(self) -> dict:
        return asdict(self)


def record_value(record: Any, field: str, default: Any = None) -> Any:
    """Read a field from a model instance or a mapping."""
    if isinstance(record, Mapping):
        return record.get(field, default)
    return getattr(record, field, default)


def percentage(numerator: Decimal, denominator: Decimal) -> Decimal:
    """``numerator / denominator * 100`` rounded to two places, 0 for a zero denominator."""
    if not denominator:
        return ZERO
    return round_money(numerator / denominator * HUNDRED)


def compute_rollups(records: Iterable[Any], constants: ProjectConstants) -> PaymentRollups:
    """
    Fold the payment records into project rollups.

    Work done excludes advance payment drawdowns. Advance recovery is summed
    as absolute values per record. Retention is summed first and the absolute
    value taken once, so a released (positive) retention offsets earlier
    deductions.

    Args:
        records: Payment records (model instances or dicts)
        constants: Contract figures to measure against

    Returns:
        PaymentRollups with totals, balances and percentages
    """
    total_work_done = ZERO
    total_gross = ZERO
    total_advance_recovered = ZERO
    retention_sum = ZERO
    total_net_payment = ZERO
    total_vat = ZERO
    record_count = 0

    for record in records:
        record_count += 1
        gross = to_amount(record_value(record, 'gross_amount'))

        total_gross += gross
        if not is_advance_payment(record_value(record, 'payment_no')):
            total_work_done += gross

        total_advance_recovered += abs(to_amount(record_value(record, 'advance_payment_recovery')))
        retention_sum += to_amount(record_value(record, 'retention'))
        total_net_payment += to_amount(record_value(record, 'net_payment'))
        total_vat += to_amount(record_value(record, 'vat'))

    total_retention_held = abs(retention_sum)

    revised_contract_value = to_amount(constants.revised_contract_value)
    advance_paid = to_amount(constants.advance_payment_paid_total)
    retention_cap = to_amount(constants.retention_cap_value)

    return PaymentRollups(
        total_work_done=round_money(total_work_done),
        total_advance_recovered=round_money(total_advance_recovered),
        total_retention_held=round_money(total_retention_held),
        advance_balance=round_money(advance_paid - total_advance_recovered),
        retention_balance=round_money(retention_cap - total_retention_held),
        work_done_percentage=percentage(total_work_done, revised_contract_value),
        advance_recovery_percentage=percentage(total_advance_recovered, advance_paid),
        retention_percentage=percentage(total_retention_held, retention_cap),
        total_gross=round_money(total_gross),
        total_net_payment=round_money(total_net_payment),
        total_vat=round_money(total_vat),
        balance_work_done=round_money(revised_contract_value - total_work_done),
        record_count=record_count,
    )
