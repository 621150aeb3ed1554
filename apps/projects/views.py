from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdminRoleOrReadOnly
from .serializers import (
    ProjectDetailsSerializer,
    ProjectDetailsInputSerializer,
    ProjectConstantsSerializer,
)
from .services import (
    get_project_details,
    get_project_constants,
    upsert_project_details,
    ProjectsServiceError,
)


# Response serializers for API documentation
class ProjectDetailsResponseSerializer(drf_serializers.Serializer):
    details = ProjectDetailsSerializer(allow_null=True)
    constants = ProjectConstantsSerializer()


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


@extend_schema(
    methods=['GET'],
    responses={200: ProjectDetailsResponseSerializer},
    description=(
        "Get the saved project details and the constants the dashboard uses. "
        "`details` is null until a record is saved; `constants` then falls back to the configured defaults."
    ),
    tags=['projects'],
)
@extend_schema(
    methods=['POST'],
    request=ProjectDetailsInputSerializer,
    responses={
        201: ProjectDetailsSerializer,
        200: ProjectDetailsSerializer,
        400: ErrorResponseSerializer,
    },
    description="Create project details, or update the record with the same project code. Admin only.",
    tags=['projects'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRoleOrReadOnly])
def project_details(request):
    """Get or upsert the project details record."""
    if request.method == 'GET':
        details = get_project_details()
        return Response({
            'details': ProjectDetailsSerializer(details).data if details else None,
            'constants': ProjectConstantsSerializer(get_project_constants()).data,
        })

    serializer = ProjectDetailsInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        details, created = upsert_project_details(**serializer.validated_data)
    except ProjectsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(
        ProjectDetailsSerializer(details).data,
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
    )
