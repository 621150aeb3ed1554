from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .dashboard import DashboardQueries
from apps.payments.serializers import PaymentSuggestionSerializer
from apps.variations.serializers import VariationOrderStatisticsSerializer
from .serializers import PaymentSummarySerializer


@extend_schema(
    responses={200: PaymentSummarySerializer},
    description=(
        "Payment dashboard: contract constants, rollups (work done, advance and retention "
        "balances), work-done trend, status distribution and financial breakdown."
    ),
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def payment_summary(request):
    """Payment dashboard - thin HTTP handler."""
    data = DashboardQueries.payment_summary()
    return Response(PaymentSummarySerializer(data).data)


@extend_schema(
    responses={200: VariationOrderStatisticsSerializer},
    description="Variation order dashboard: counts and values per status.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def variation_summary(request):
    """Variation order dashboard - thin HTTP handler."""
    data = DashboardQueries.variation_summary()
    return Response(VariationOrderStatisticsSerializer(data).data)


@extend_schema(
    responses={200: PaymentSuggestionSerializer},
    description="Suggested number, dates and description for the next payment application.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def next_payment(request):
    """Next payment suggestion - thin HTTP handler."""
    return Response(PaymentSuggestionSerializer(DashboardQueries.next_payment_suggestion()).data)
