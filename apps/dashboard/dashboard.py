"""
Dashboard Module
================

Read-only queries that combine the payment register, the project constants
and the variation order register into dashboard payloads.

Classes:
    DashboardQueries: Static methods for the dashboard endpoints.

Key Features:
    - Contract rollups (work done, advance and retention position)
    - Cumulative work-done trend per interim payment
    - Payment status distribution and financial breakdown
    - Variation order status summary
    - Next payment suggestion

Example:
    Getting the payment dashboard::

        from apps.dashboard.dashboard import DashboardQueries

        summary = DashboardQueries.payment_summary()
        print(f"Work done: {summary['rollups']['work_done_percentage']}%")

Note:
    This module is read-only and doesn't modify any data. Amounts are
    Decimals; the serializers render them as fixed-point strings.
"""

from decimal import Decimal

from apps.payments.models import PaymentApplication, PaymentStatus
from apps.payments.services import (
    compute_rollups,
    get_next_payment_suggestion,
    is_advance_payment,
    to_amount,
    round_money,
)
from apps.projects.services import get_project_constants
from apps.variations.services import get_variation_order_statistics


IPA_LABEL_PREFIX = 'IPA '


class DashboardQueries:
    """
    Queries behind the dashboard endpoints.

    Methods:
        payment_summary: Constants, rollups, trend, status distribution, breakdown.
        payment_trend: Per-payment work-done series for charts.
        status_distribution: Number of payments per payment status.
        variation_summary: Variation order statistics.
        next_payment_suggestion: Suggested next payment application.

    Note:
        All methods return plain dictionaries or lists, not Django objects,
        making them suitable for serializers and spreadsheet export.
    """

    @staticmethod
    def payment_summary():
        """
        Build the payment dashboard.

        Fetches the register once (creation order) and folds it into the
        project rollups, the work-done trend and the status distribution.

        Returns:
            dict: Payment dashboard with keys:
                - constants (dict): Contract figures the rollups use
                - rollups (dict): Totals, balances and percentages
                - trend (list): One entry per interim payment, see payment_trend
                - status_distribution (list): {status, count} per payment status
                - financial_breakdown (dict): net, retention, advance and VAT totals
        """
        payments = list(PaymentApplication.objects.order_by('id'))
        constants = get_project_constants()
        rollups = compute_rollups(payments, constants)

        return {
            'constants': constants.as_dict(),
            'rollups': rollups.as_dict(),
            'trend': DashboardQueries.payment_trend(payments),
            'status_distribution': DashboardQueries.status_distribution(payments),
            'financial_breakdown': {
                'net_payment': rollups.total_net_payment,
                'retention': rollups.total_retention_held,
                'advance_recovery': rollups.total_advance_recovered,
                'vat': rollups.total_vat,
            },
        }

    @staticmethod
    def payment_trend(payments):
        """
        Work-done series for the trend chart.

        Advance payment drawdowns are skipped. Entries keep register (id)
        order and carry a running total of gross work done.

        Args:
            payments (iterable): PaymentApplication records in id order.

        Returns:
            list: Dicts with label, payment_no, gross_amount, net_payment,
            retention, advance_recovery and cumulative_gross. Retention and
            advance recovery are absolute values.
        """
        trend = []
        cumulative = Decimal('0.00')
        for payment in payments:
            if is_advance_payment(payment.payment_no):
                continue
            gross = to_amount(payment.gross_amount)
            cumulative += gross
            trend.append({
                'label': payment.payment_no.replace(IPA_LABEL_PREFIX, '', 1),
                'payment_no': payment.payment_no,
                'gross_amount': round_money(gross),
                'net_payment': round_money(to_amount(payment.net_payment)),
                'retention': round_money(abs(to_amount(payment.retention))),
                'advance_recovery': round_money(abs(to_amount(payment.advance_payment_recovery))),
                'cumulative_gross': round_money(cumulative),
            })
        return trend

    @staticmethod
    def status_distribution(payments):
        """
        Count payments per payment status.

        Every status is listed, in workflow order, including those with no
        payments.
        """
        counts = {choice: 0 for choice in PaymentStatus.values}
        for payment in payments:
            counts[payment.payment_status] = counts.get(payment.payment_status, 0) + 1
        return [{'status': key, 'count': value} for key, value in counts.items()]

    @staticmethod
    def variation_summary():
        """Variation order counts and values per status."""
        return get_variation_order_statistics()

    @staticmethod
    def next_payment_suggestion():
        """Suggested payment number, dates and description for the next IPA."""
        return get_next_payment_suggestion().as_dict()
