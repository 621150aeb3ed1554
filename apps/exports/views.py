import logging

from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdminRole
from apps.dashboard.dashboard import DashboardQueries
from apps.payments.serializers import PaymentFilterSerializer
from apps.payments.services import compute_rollups, list_payments
from apps.projects.services import get_project_constants
from apps.variations.serializers import VariationOrderFilterSerializer
from apps.variations.services import list_variation_orders
from .excel_export import (
    build_dashboard_workbook,
    build_payments_workbook,
    build_variations_workbook,
    create_excel_response,
)

logger = logging.getLogger(__name__)

XLSX_RESPONSE = OpenApiResponse(response=OpenApiTypes.BINARY, description='Excel workbook (.xlsx)')


def _stamp():
    return timezone.localdate().strftime('%Y-%m-%d')


@extend_schema(
    parameters=[
        OpenApiParameter('search', OpenApiTypes.STR, description='Search payment no, description, remarks'),
        OpenApiParameter('payment_status', OpenApiTypes.STR, description='Filter by payment status'),
        OpenApiParameter('approval_status', OpenApiTypes.STR, description='Filter by approval status'),
        OpenApiParameter('ordering', OpenApiTypes.STR, description='Sort field'),
    ],
    responses={200: XLSX_RESPONSE},
    description="Export the payment register to Excel with a totals row. Admin only.",
    tags=['exports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def export_payments(request):
    """Payment register as .xlsx."""
    query_serializer = PaymentFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    payments = list(list_payments(**query_serializer.validated_data))
    rollups = compute_rollups(payments, get_project_constants())
    content = build_payments_workbook(payments, rollups)

    logger.info("Exported %d payment applications for %s", len(payments), request.user.email)
    return create_excel_response(content, f'payment_applications_{_stamp()}.xlsx')


@extend_schema(
    parameters=[
        OpenApiParameter('search', OpenApiTypes.STR, description='Search subject and references'),
        OpenApiParameter('status', OpenApiTypes.STR, description='Filter by status'),
        OpenApiParameter('submission_type', OpenApiTypes.STR, description='Filter by submission type'),
        OpenApiParameter('sort_by', OpenApiTypes.STR, description='Sort field'),
        OpenApiParameter('sort_order', OpenApiTypes.STR, description='asc or desc'),
    ],
    responses={200: XLSX_RESPONSE},
    description="Export the variation order register to Excel. Admin only.",
    tags=['exports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def export_variations(request):
    """Variation order register as .xlsx."""
    query_serializer = VariationOrderFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    variation_orders = list(list_variation_orders(**query_serializer.validated_data))
    content = build_variations_workbook(variation_orders)

    logger.info("Exported %d variation orders for %s", len(variation_orders), request.user.email)
    return create_excel_response(content, f'variation_orders_{_stamp()}.xlsx')


@extend_schema(
    responses={200: XLSX_RESPONSE},
    description="Export the dashboard (VO status summary and payment rollups) to Excel. Admin only.",
    tags=['exports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def export_dashboard(request):
    """Dashboard as a two-sheet .xlsx."""
    content = build_dashboard_workbook(
        DashboardQueries.payment_summary(),
        DashboardQueries.variation_summary(),
    )
    return create_excel_response(content, f'dashboard_{_stamp()}.xlsx')
