from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    is_admin_role = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'role',
            'is_admin_role',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'role', 'created_at', 'last_login']


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
