from rest_framework import serializers
from .models import VariationOrder, VOStatus, SubmissionType, DOCUMENT_FIELDS
from .services.vo_management import SORT_FIELDS


# =============================================================================
# Input Serializers
# =============================================================================

class VariationOrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the variation order register.

    Query Parameters:
        search (str): Match on subject and submission/response/VOR/DVO references
        status (str): Filter by status
        submission_type (str): Filter by submission type
        sort_by (str): submission_date, created_at, proposal_value or approved_amount
        sort_order (str): asc or desc (default: desc)
    """

    search = serializers.CharField(max_length=100, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=VOStatus.choices, required=False)
    submission_type = serializers.ChoiceField(choices=SubmissionType.choices, required=False)
    sort_by = serializers.ChoiceField(choices=SORT_FIELDS, required=False)
    sort_order = serializers.ChoiceField(choices=['asc', 'desc'], required=False)


class VariationOrderFileUploadSerializer(serializers.Serializer):
    """
    Multipart upload of an approval-stage document.

    Fields:
        file_type (str): ffc_rsg_proposed, rsg_assessed or dvo_rr_approved
        file: The document
    """

    file_type = serializers.ChoiceField(choices=sorted(DOCUMENT_FIELDS))
    file = serializers.FileField()


# =============================================================================
# Output Serializers
# =============================================================================

class VariationOrderSerializer(serializers.ModelSerializer):
    """Main serializer for variation orders; also validates create/update input."""

    status_label = serializers.CharField(source='get_status_display', read_only=True)
    submission_type_label = serializers.CharField(source='get_submission_type_display', read_only=True)

    class Meta:
        model = VariationOrder
        fields = [
            'id',
            'subject',
            'submission_type',
            'submission_type_label',
            'submission_reference',
            'response_reference',
            'submission_date',
            'assessment_value',
            'proposal_value',
            'approved_amount',
            'status',
            'status_label',
            'vor_reference',
            'dvo_reference',
            'dvo_issued_date',
            'remarks',
            'action_notes',
            'ffc_rsg_proposed_file',
            'rsg_assessed_file',
            'dvo_rr_approved_file',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'ffc_rsg_proposed_file',
            'rsg_assessed_file',
            'dvo_rr_approved_file',
            'created_at',
            'updated_at',
        ]
        extra_kwargs = {
            'submission_reference': {'allow_null': True},
            'response_reference': {'allow_null': True},
            'vor_reference': {'allow_null': True},
            'dvo_reference': {'allow_null': True},
            'remarks': {'allow_null': True},
            'action_notes': {'allow_null': True},
        }


class StatusBreakdownSerializer(serializers.Serializer):
    status = serializers.CharField()
    label = serializers.CharField()
    count = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=15, decimal_places=2)


class VariationOrderStatisticsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    counts = serializers.DictField(child=serializers.IntegerField())
    status_breakdown = StatusBreakdownSerializer(many=True)
    total_submitted_value = serializers.DecimalField(max_digits=17, decimal_places=2)
    total_approved_value = serializers.DecimalField(max_digits=17, decimal_places=2)
    pending_count = serializers.IntegerField()
    approved_count = serializers.IntegerField()
