"""Statistics service - variation order counts and values per status."""

from decimal import Decimal

from django.db.models import Count, Sum

from apps.variations.models import VariationOrder, VOStatus, PENDING_STATUSES, APPROVED_STATUSES

# Short labels used on the dashboard cards
DASHBOARD_STATUS_LABELS = {
    VOStatus.PENDING_WITH_FFC: 'Pending with FFC',
    VOStatus.PENDING_WITH_RSG: 'Pending with RSG',
    VOStatus.PENDING_WITH_RSG_FFC: 'Pending with RSG/FFC',
    VOStatus.APPROVED_AWAITING_DVO: 'Approved & Awaiting DVO',
    VOStatus.DVO_RR_ISSUED: 'DVO RR Issued',
}


def get_variation_order_statistics() -> dict:
    """
    Count variation orders and value them per status.

    A pending VO is valued at its proposal value; an approved one at its
    approved amount. Missing values count as zero.

    Returns:
        Dictionary with:
        - total: int - Number of VOs
        - counts: dict - Count per status code
        - status_breakdown: list - {status, label, count, amount} in workflow order
        - total_submitted_value: Decimal - Sum of the per-status amounts
        - total_approved_value: Decimal - Sum over approved statuses

    Example:
        >>> stats = get_variation_order_statistics()
        >>> stats['counts']['PendingWithFFC']
        3
    """
    rows = {
        row['status']: row
        for row in VariationOrder.objects.order_by().values('status').annotate(
            count=Count('id'),
            proposal_total=Sum('proposal_value'),
            approved_total=Sum('approved_amount'),
        )
    }

    counts = {}
    status_breakdown = []
    total_submitted_value = Decimal('0.00')
    total_approved_value = Decimal('0.00')

    for vo_status in VOStatus:
        row = rows.get(vo_status.value, {})
        count = row.get('count', 0)
        if vo_status in APPROVED_STATUSES:
            amount = row.get('approved_total') or Decimal('0.00')
            total_approved_value += amount
        else:
            amount = row.get('proposal_total') or Decimal('0.00')
        total_submitted_value += amount

        counts[vo_status.value] = count
        status_breakdown.append({
            'status': vo_status.value,
            'label': DASHBOARD_STATUS_LABELS[vo_status],
            'count': count,
            'amount': amount,
        })

    return {
        'total': sum(counts.values()),
        'counts': counts,
        'status_breakdown': status_breakdown,
        'total_submitted_value': total_submitted_value,
        'total_approved_value': total_approved_value,
        'pending_count': sum(counts[s.value] for s in PENDING_STATUSES),
        'approved_count': sum(counts[s.value] for s in APPROVED_STATUSES),
    }
