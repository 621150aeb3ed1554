from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import MultiPartParser, FormParser
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdminRoleOrReadOnly
from .models import VariationOrder
from .serializers import (
    VariationOrderSerializer,
    VariationOrderFilterSerializer,
    VariationOrderStatisticsSerializer,
    VariationOrderFileUploadSerializer,
)
from .services import (
    create_variation_order,
    update_variation_order,
    delete_variation_order,
    attach_variation_order_file,
    list_variation_orders,
    get_variation_order_statistics,
    VariationsServiceError,
    VariationOrderNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class VariationOrderPagination(PageNumberPagination):
    """Custom pagination for the VO register."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 1000


class VariationOrderViewSet(viewsets.ModelViewSet):
    """
    ViewSet for VariationOrder CRUD operations.

    list: Get variation orders (search, filter, sort)
    create: Create a variation order
    retrieve: Get a specific variation order
    update: Update a variation order
    partial_update: Partially update a variation order
    destroy: Delete a variation order
    """

    queryset = VariationOrder.objects.all()
    serializer_class = VariationOrderSerializer
    permission_classes = [IsAuthenticated, IsAdminRoleOrReadOnly]
    pagination_class = VariationOrderPagination

    def get_queryset(self):
        """Filter the register using input serializer validation."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = VariationOrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return list_variation_orders(**filter_serializer.validated_data)

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR, description='Search subject and references'),
            OpenApiParameter('status', OpenApiTypes.STR, description='Filter by status'),
            OpenApiParameter('submission_type', OpenApiTypes.STR, description='Filter by submission type'),
            OpenApiParameter('sort_by', OpenApiTypes.STR, description='submission_date, created_at, proposal_value, approved_amount'),
            OpenApiParameter('sort_order', OpenApiTypes.STR, description='asc or desc'),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        """Create variation order using service layer."""
        from rest_framework.exceptions import ValidationError

        try:
            vo = create_variation_order(**serializer.validated_data)
        except VariationsServiceError as e:
            raise ValidationError({'error': str(e)})

        serializer.instance = vo

    def perform_update(self, serializer):
        """Update variation order using service layer."""
        from rest_framework.exceptions import NotFound, ValidationError

        try:
            vo = update_variation_order(vo_id=serializer.instance.id, **serializer.validated_data)
        except VariationOrderNotFoundError as e:
            raise NotFound(str(e))
        except VariationsServiceError as e:
            raise ValidationError({'error': str(e)})

        serializer.instance = vo

    def perform_destroy(self, instance):
        """Delete variation order using service layer."""
        delete_variation_order(vo_id=instance.id)

    @extend_schema(
        responses={200: VariationOrderStatisticsSerializer},
        description="Counts and values per status. Pending VOs use proposal value, approved ones approved amount.",
    )
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """
        Status statistics.

        GET /api/variations/stats/
        """
        data = get_variation_order_statistics()
        return Response(VariationOrderStatisticsSerializer(data).data)

    @extend_schema(
        request={'multipart/form-data': VariationOrderFileUploadSerializer},
        responses={200: VariationOrderSerializer, 400: ErrorResponseSerializer},
        description="Upload the document for one approval stage. Replaces any existing one.",
    )
    @action(detail=True, methods=['post'], url_path='files', parser_classes=[MultiPartParser, FormParser])
    def upload_file(self, request, pk=None):
        """
        Attach an approval-stage document.

        POST /api/variations/{id}/files/
        Form: file_type=rsg_assessed, file=<document>
        """
        instance = self.get_object()
        serializer = VariationOrderFileUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            vo = attach_variation_order_file(
                vo_id=instance.id,
                file_type=serializer.validated_data['file_type'],
                uploaded_file=serializer.validated_data['file'],
            )
        except VariationOrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except VariationsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(VariationOrderSerializer(vo, context={'request': request}).data)
