from decimal import Decimal

from rest_framework import serializers

from .models import PaymentApplication, PaymentStatus, ApprovalStatus, RateSchemeChoice
from .services.payment_management import ORDERING_FIELDS


MONEY = dict(max_digits=15, decimal_places=2)


# =============================================================================
# Input Serializers
# =============================================================================

class PaymentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the payment register.

    Query Parameters:
        search (str): Match on payment number, description or remarks
        payment_status (str): Exact payment status
        approval_status (str): Exact approval status
        ordering (str): Sort field, prefix with '-' for descending (default: id)
    """

    search = serializers.CharField(max_length=100, required=False, allow_blank=True)
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    approval_status = serializers.ChoiceField(choices=ApprovalStatus.choices, required=False)
    ordering = serializers.ChoiceField(choices=sorted(ORDERING_FIELDS), required=False, default='id')


class PaymentWriteSerializer(serializers.Serializer):
    """
    Fields shared by payment create and update.

    Deduction fields left out (or null) are derived from the gross amount;
    supplied ones are kept as hand-entered values.
    """

    payment_no = serializers.CharField(max_length=50)
    description = serializers.CharField(max_length=255)
    gross_amount = serializers.DecimalField(min_value=Decimal('0.00'), **MONEY)

    advance_payment_recovery = serializers.DecimalField(required=False, allow_null=True, **MONEY)
    retention = serializers.DecimalField(required=False, allow_null=True, **MONEY)
    vat_recovery = serializers.DecimalField(required=False, allow_null=True, **MONEY)
    vat = serializers.DecimalField(required=False, allow_null=True, **MONEY)

    rate_scheme = serializers.ChoiceField(choices=RateSchemeChoice.choices, required=False)
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    approval_status = serializers.ChoiceField(choices=ApprovalStatus.choices, required=False)
    submitted_date = serializers.DateField(required=False, allow_null=True)
    invoice_date = serializers.DateField(required=False, allow_null=True)
    ffc_live_action = serializers.CharField(required=False, allow_blank=True)
    rsg_live_action = serializers.CharField(required=False, allow_blank=True)
    remarks = serializers.CharField(required=False, allow_blank=True)


class PaymentCreateSerializer(PaymentWriteSerializer):
    auto_calculate = serializers.BooleanField(required=False, default=True)


class PaymentUpdateSerializer(PaymentWriteSerializer):
    recalculate = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        """Drop explicit nulls so they don't overwrite stored deductions."""
        for field in ('advance_payment_recovery', 'retention', 'vat_recovery', 'vat'):
            if field in attrs and attrs[field] is None:
                attrs.pop(field)
        return attrs


class PaymentStatusUpdateSerializer(serializers.Serializer):
    """Quick status change from the register table."""

    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    approval_status = serializers.ChoiceField(choices=ApprovalStatus.choices, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide payment_status or approval_status')
        return attrs


class CalculateInputSerializer(serializers.Serializer):
    gross_amount = serializers.DecimalField(min_value=Decimal('0.00'), **MONEY)
    rate_scheme = serializers.ChoiceField(choices=RateSchemeChoice.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class PaymentApplicationSerializer(serializers.ModelSerializer):
    """Main serializer for payment applications."""

    is_advance_payment = serializers.BooleanField(read_only=True)

    class Meta:
        model = PaymentApplication
        fields = [
            'id',
            'payment_no',
            'description',
            'gross_amount',
            'advance_payment_recovery',
            'retention',
            'vat_recovery',
            'vat',
            'net_payment',
            'rate_scheme',
            'payment_status',
            'approval_status',
            'submitted_date',
            'invoice_date',
            'ffc_live_action',
            'rsg_live_action',
            'remarks',
            'is_advance_payment',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class DerivedAmountsSerializer(serializers.Serializer):
    rate_scheme = serializers.CharField()
    gross_amount = serializers.DecimalField(**MONEY)
    advance_payment_recovery = serializers.DecimalField(**MONEY)
    retention = serializers.DecimalField(**MONEY)
    vat_recovery = serializers.DecimalField(**MONEY)
    vat = serializers.DecimalField(**MONEY)
    net_payment = serializers.DecimalField(**MONEY)


class PaymentSuggestionSerializer(serializers.Serializer):
    payment_no = serializers.CharField(allow_blank=True)
    submitted_date = serializers.DateField(allow_null=True)
    invoice_date = serializers.DateField(allow_null=True)
    description = serializers.CharField(allow_blank=True)
