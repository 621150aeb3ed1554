from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdminRoleOrReadOnly
from .models import PaymentApplication
from .serializers import (
    PaymentApplicationSerializer,
    PaymentCreateSerializer,
    PaymentUpdateSerializer,
    PaymentStatusUpdateSerializer,
    CalculateInputSerializer,
    DerivedAmountsSerializer,
    PaymentSuggestionSerializer,
    # Input serializers
    PaymentFilterSerializer,
)
from .services import (
    create_payment,
    update_payment,
    update_payment_status,
    delete_payment,
    list_payments,
    get_next_payment_suggestion,
    preview_derivation,
    PaymentsServiceError,
    PaymentNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class PaymentPagination(PageNumberPagination):
    """Custom pagination for the payment register."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 500


class PaymentApplicationViewSet(viewsets.ModelViewSet):
    """
    ViewSet for PaymentApplication CRUD operations.

    list: Get payment applications (filterable, creation order by default)
    create: Create a payment; deductions derived from gross unless given
    retrieve: Get a specific payment
    update: Update a payment; net payment is reconciled from current values
    partial_update: Partially update a payment
    destroy: Delete a payment
    """

    queryset = PaymentApplication.objects.all()
    serializer_class = PaymentApplicationSerializer
    permission_classes = [IsAuthenticated, IsAdminRoleOrReadOnly]
    pagination_class = PaymentPagination

    def get_queryset(self):
        """Filter payments using input serializer validation."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = PaymentFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return list_payments(**filter_serializer.validated_data)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'create':
            return PaymentCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return PaymentUpdateSerializer
        return PaymentApplicationSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR, description='Search payment no, description, remarks'),
            OpenApiParameter('payment_status', OpenApiTypes.STR, description='Filter by payment status'),
            OpenApiParameter('approval_status', OpenApiTypes.STR, description='Filter by approval status'),
            OpenApiParameter('ordering', OpenApiTypes.STR, description='Sort field, e.g. -invoice_date'),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=PaymentCreateSerializer,
        responses={201: PaymentApplicationSerializer, 400: ErrorResponseSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Create payment using service layer."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment = create_payment(**serializer.validated_data)
        except PaymentsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            PaymentApplicationSerializer(payment).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=PaymentUpdateSerializer,
        responses={200: PaymentApplicationSerializer, 400: ErrorResponseSerializer},
    )
    def update(self, request, *args, **kwargs):
        """Update payment using service layer."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        recalculate = data.pop('recalculate', False)
        rate_scheme = data.pop('rate_scheme', None)

        try:
            payment = update_payment(
                payment_id=instance.id,
                recalculate=recalculate,
                rate_scheme=rate_scheme,
                **data
            )
        except PaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except PaymentsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentApplicationSerializer(payment).data)

    @extend_schema(request=PaymentUpdateSerializer, responses={200: PaymentApplicationSerializer})
    def partial_update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return self.update(request, *args, **kwargs)

    def perform_destroy(self, instance):
        """Delete payment using service layer."""
        delete_payment(payment_id=instance.id)

    @extend_schema(
        request=PaymentStatusUpdateSerializer,
        responses={200: PaymentApplicationSerializer, 400: ErrorResponseSerializer},
        description="Change payment and/or approval status without touching amounts.",
    )
    @action(detail=True, methods=['post'], url_path='status')
    def set_status(self, request, pk=None):
        """
        Quick status change.

        POST /api/payments/{id}/status/
        Body: {"payment_status": "Certified", "approval_status": "Approved"}
        """
        instance = self.get_object()
        serializer = PaymentStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment = update_payment_status(payment_id=instance.id, **serializer.validated_data)
        except PaymentsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentApplicationSerializer(payment).data)

    @extend_schema(
        request=CalculateInputSerializer,
        responses={200: DerivedAmountsSerializer, 400: ErrorResponseSerializer},
        description="Preview the derived deductions for a gross amount. Nothing is saved.",
    )
    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated])
    def calculate(self, request):
        """
        Live calculator for the payment form.

        POST /api/payments/calculate/
        Body: {"gross_amount": "100000.00", "rate_scheme": "revised"}
        """
        serializer = CalculateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            scheme, amounts = preview_derivation(**serializer.validated_data)
        except PaymentsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(DerivedAmountsSerializer({
            'rate_scheme': scheme.name,
            'gross_amount': serializer.validated_data['gross_amount'],
            **amounts.as_dict(),
        }).data)

    @extend_schema(
        responses={200: PaymentSuggestionSerializer},
        description="Suggested payment number, dates and description for the next application.",
    )
    @action(detail=False, methods=['get'], url_path='next')
    def next_payment(self, request):
        """
        Next payment suggestion.

        GET /api/payments/next/
        """
        suggestion = get_next_payment_suggestion()
        return Response(PaymentSuggestionSerializer(suggestion.as_dict()).data)
