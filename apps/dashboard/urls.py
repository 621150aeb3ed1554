from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    # Payments
    path('payments/', views.payment_summary, name='payment-summary'),
    path('payments/next/', views.next_payment, name='next-payment'),

    # Variation orders
    path('variations/', views.variation_summary, name='variation-summary'),
]
