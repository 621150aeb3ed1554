from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'variations'

router = DefaultRouter()
router.register(r'', views.VariationOrderViewSet, basename='variation')

urlpatterns = [
    # Variation Order ViewSet routes
    # GET    /api/variations/              - List VOs (search, status, submission_type, sort_by, sort_order)
    # POST   /api/variations/              - Create VO
    # GET    /api/variations/{id}/         - Get VO details
    # PUT    /api/variations/{id}/         - Update VO
    # PATCH  /api/variations/{id}/         - Partial update
    # DELETE /api/variations/{id}/         - Delete VO

    # Custom actions
    # GET    /api/variations/stats/        - Status statistics
    # POST   /api/variations/{id}/files/   - Upload approval-stage document (multipart)

    # Include router URLs
    path('', include(router.urls)),
]
