from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'payments'

router = DefaultRouter()
router.register(r'', views.PaymentApplicationViewSet, basename='payment')

urlpatterns = [
    # Payment ViewSet routes
    # GET    /api/payments/              - List payments
    # POST   /api/payments/              - Create payment (derives deductions)
    # GET    /api/payments/{id}/         - Get payment details
    # PUT    /api/payments/{id}/         - Update payment
    # PATCH  /api/payments/{id}/         - Partial update
    # DELETE /api/payments/{id}/         - Delete payment

    # Custom payment actions
    # POST   /api/payments/{id}/status/  - Quick status change
    # POST   /api/payments/calculate/    - Preview derivation
    # GET    /api/payments/next/         - Next payment suggestion

    # Include router URLs
    path('', include(router.urls)),
]
