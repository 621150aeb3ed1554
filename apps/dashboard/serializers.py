from rest_framework import serializers

from apps.projects.serializers import ProjectConstantsSerializer

MONEY = dict(max_digits=17, decimal_places=2)


# =============================================================================
# Response Serializers
# =============================================================================

class PaymentRollupsSerializer(serializers.Serializer):
    total_work_done = serializers.DecimalField(**MONEY)
    total_advance_recovered = serializers.DecimalField(**MONEY)
    total_retention_held = serializers.DecimalField(**MONEY)
    advance_balance = serializers.DecimalField(**MONEY)
    retention_balance = serializers.DecimalField(**MONEY)
    work_done_percentage = serializers.DecimalField(max_digits=9, decimal_places=2)
    advance_recovery_percentage = serializers.DecimalField(max_digits=9, decimal_places=2)
    retention_percentage = serializers.DecimalField(max_digits=9, decimal_places=2)
    total_gross = serializers.DecimalField(**MONEY)
    total_net_payment = serializers.DecimalField(**MONEY)
    total_vat = serializers.DecimalField(**MONEY)
    balance_work_done = serializers.DecimalField(**MONEY)
    record_count = serializers.IntegerField()


class TrendPointSerializer(serializers.Serializer):
    label = serializers.CharField()
    payment_no = serializers.CharField()
    gross_amount = serializers.DecimalField(**MONEY)
    net_payment = serializers.DecimalField(**MONEY)
    retention = serializers.DecimalField(**MONEY)
    advance_recovery = serializers.DecimalField(**MONEY)
    cumulative_gross = serializers.DecimalField(**MONEY)


class StatusCountSerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()


class FinancialBreakdownSerializer(serializers.Serializer):
    net_payment = serializers.DecimalField(**MONEY)
    retention = serializers.DecimalField(**MONEY)
    advance_recovery = serializers.DecimalField(**MONEY)
    vat = serializers.DecimalField(**MONEY)


class PaymentSummarySerializer(serializers.Serializer):
    constants = ProjectConstantsSerializer()
    rollups = PaymentRollupsSerializer()
    trend = TrendPointSerializer(many=True)
    status_distribution = StatusCountSerializer(many=True)
    financial_breakdown = FinancialBreakdownSerializer()
