from django.contrib import admin
from .models import PaymentApplication
from .services.financials import reconcile


@admin.register(PaymentApplication)
class PaymentApplicationAdmin(admin.ModelAdmin):
    list_display = [
        'payment_no',
        'description',
        'gross_amount',
        'net_payment',
        'rate_scheme',
        'payment_status',
        'approval_status',
        'invoice_date',
    ]
    list_filter = ['payment_status', 'approval_status', 'rate_scheme']
    search_fields = ['payment_no', 'description', 'remarks']
    ordering = ['id']
    # Net payment is kept in step with the deductions by the payment service
    readonly_fields = ['net_payment', 'rate_scheme', 'created_at', 'updated_at']

    fieldsets = (
        ('Payment', {
            'fields': ('payment_no', 'description', 'payment_status', 'approval_status',
                       'submitted_date', 'invoice_date')
        }),
        ('Amounts', {
            'fields': ('gross_amount', 'advance_payment_recovery', 'retention',
                       'vat_recovery', 'vat', 'net_payment', 'rate_scheme')
        }),
        ('Notes', {
            'fields': ('ffc_live_action', 'rsg_live_action', 'remarks'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def save_model(self, request, obj, form, change):
        obj.net_payment = reconcile(
            obj.gross_amount, obj.advance_payment_recovery, obj.retention, obj.vat_recovery, obj.vat
        )
        super().save_model(request, obj, form, change)
