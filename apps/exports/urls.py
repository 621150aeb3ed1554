from django.urls import path
from . import views

app_name = 'exports'

urlpatterns = [
    path('payments/', views.export_payments, name='payments'),
    path('variations/', views.export_variations, name='variations'),
    path('dashboard/', views.export_dashboard, name='dashboard'),
]
