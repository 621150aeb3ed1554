from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import UserLoginSerializer, UserSerializer
from .services import authenticate_user, InvalidCredentialsError, InactiveAccountError


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    # Generate tokens
    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile and role.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)
