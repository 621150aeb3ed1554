from rest_framework import serializers
from .models import ProjectDetails


class ProjectDetailsSerializer(serializers.ModelSerializer):
    """Project record with the derived retention cap."""

    retention_cap_value = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)

    class Meta:
        model = ProjectDetails
        fields = [
            'id',
            'project_code',
            'project_name',
            'contractor',
            'contract_date',
            'original_contract_value',
            'revised_contract_value',
            'advance_payment_total',
            'advance_payment_percent',
            'retention_percent',
            'retention_cap_value',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ProjectDetailsInputSerializer(serializers.ModelSerializer):
    """
    Validate input for saving project details.

    ``project_code`` selects the record to update; uniqueness is not
    validated here because an existing code means update.
    """

    project_code = serializers.CharField(max_length=50)

    class Meta:
        model = ProjectDetails
        fields = [
            'project_code',
            'project_name',
            'contractor',
            'contract_date',
            'original_contract_value',
            'revised_contract_value',
            'advance_payment_total',
            'advance_payment_percent',
            'retention_percent',
        ]


class ProjectConstantsSerializer(serializers.Serializer):
    original_contract_value = serializers.DecimalField(max_digits=15, decimal_places=2)
    revised_contract_value = serializers.DecimalField(max_digits=15, decimal_places=2)
    advance_payment_paid_total = serializers.DecimalField(max_digits=15, decimal_places=2)
    retention_cap_value = serializers.DecimalField(max_digits=15, decimal_places=2)
