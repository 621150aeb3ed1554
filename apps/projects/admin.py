from django.contrib import admin
from .models import ProjectDetails


@admin.register(ProjectDetails)
class ProjectDetailsAdmin(admin.ModelAdmin):
    list_display = [
        'project_code',
        'project_name',
        'contractor',
        'revised_contract_value',
        'advance_payment_total',
        'retention_percent',
        'retention_cap_value',
        'updated_at',
    ]
    search_fields = ['project_code', 'project_name', 'contractor']
    readonly_fields = ['retention_cap_value', 'created_at', 'updated_at']
