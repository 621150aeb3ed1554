from django.contrib import admin
from .models import VariationOrder


@admin.register(VariationOrder)
class VariationOrderAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'subject',
        'submission_type',
        'submission_reference',
        'submission_date',
        'proposal_value',
        'approved_amount',
        'status',
    ]
    list_filter = ['status', 'submission_type', 'submission_date']
    search_fields = [
        'subject',
        'submission_reference',
        'response_reference',
        'vor_reference',
        'dvo_reference',
    ]
    date_hierarchy = 'submission_date'
    readonly_fields = ['created_at', 'updated_at']
